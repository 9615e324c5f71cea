from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from .checkins.mysql_checkin_repository import MySQLCheckInRepository
from .checkins.repository import CheckInRepository
from .checkins.service import CheckInService
from .common.datetime_utils import parse_iso_date
from .core.constants import DEFAULT_EVENT_DAYS
from .dashboard.service import DashboardService
from .database.connection import DBConfig, DatabaseConnection
from .export.service import ExportService
from .importing.service import ImportService
from .registrants.mysql_registrant_repository import MySQLRegistrantRepository
from .registrants.repository import RegistrantRepository
from .registrants.service import RegistrantService


@dataclass(frozen=True)
class EventSettings:
    name: str
    days: int
    start_date: Optional[date] = None

    @classmethod
    def from_settings(cls, settings) -> "EventSettings":
        start = str(getattr(settings, "EVENT_START_DATE", "") or "").strip()
        return cls(
            name=str(getattr(settings, "EVENT_NAME", "Event")),
            days=int(getattr(settings, "EVENT_DAYS", DEFAULT_EVENT_DAYS)),
            start_date=parse_iso_date(start) if start else None,
        )


@dataclass(frozen=True)
class Container:
    event: EventSettings
    conn: Optional[DatabaseConnection]

    registrants_repo: RegistrantRepository
    checkins_repo: CheckInRepository

    registrant_service: RegistrantService
    checkin_service: CheckInService
    import_service: ImportService
    dashboard_service: DashboardService
    export_service: ExportService


def build_services(
    *,
    event: EventSettings,
    registrants_repo: RegistrantRepository,
    checkins_repo: CheckInRepository,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    return Container(
        event=event,
        conn=conn,
        registrants_repo=registrants_repo,
        checkins_repo=checkins_repo,
        registrant_service=RegistrantService(registrants_repo, event_days=event.days),
        checkin_service=CheckInService(
            registrants_repo,
            checkins_repo,
            event_days=event.days,
            event_start_date=event.start_date,
        ),
        import_service=ImportService(registrants_repo),
        dashboard_service=DashboardService(registrants_repo, event_days=event.days),
        export_service=ExportService(registrants_repo, event_days=event.days),
    )


def build_container(*, db_config: dict, event: EventSettings) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return build_services(
        event=event,
        registrants_repo=MySQLRegistrantRepository(conn),
        checkins_repo=MySQLCheckInRepository(conn),
        conn=conn,
    )
