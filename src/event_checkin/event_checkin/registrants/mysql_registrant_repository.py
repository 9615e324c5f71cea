from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Sequence

from ..core.enums import CheckInMethod, RegistrantType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, group_rows, in_clause
from .model import DailyCheckIn, NewRegistrant, Registrant
from .repository import RegistrantRepository

_SELECT = """
    SELECT registrant_id, full_name, email, phone, registrant_type, club_name,
           club_designation, registration_date
    FROM registrants
"""

_INSERT = """
    INSERT INTO registrants(full_name, email, phone, registrant_type, club_name, club_designation, registration_date)
    VALUES(%s,%s,%s,%s,%s,%s,%s)
"""


class MySQLRegistrantRepository(RegistrantRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _load(self, where: str = "", params: tuple = ()) -> list[Registrant]:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                f"{_SELECT} {where} ORDER BY registration_date DESC, registrant_id DESC",
                params,
            )
            rows = fetchall(cur)
            if not rows:
                return []

            ids = [int(r["registrant_id"]) for r in rows]
            cur.execute(
                f"""
                SELECT registrant_id, event_day, check_in_time, method
                FROM daily_checkins
                WHERE registrant_id IN ({in_clause(ids)})
                """,
                tuple(ids),
            )
            checkins = group_rows(fetchall(cur), "registrant_id")

        return [self._to_entity(r, checkins.get(r["registrant_id"], [])) for r in rows]

    @staticmethod
    def _to_entity(r: dict[str, Any], checkins: list[dict[str, Any]]) -> Registrant:
        daily = {
            int(c["event_day"]): DailyCheckIn(
                event_day=int(c["event_day"]),
                check_in_time=c["check_in_time"],
                method=CheckInMethod(c["method"]),
            )
            for c in checkins
        }
        return Registrant(
            registrant_id=int(r["registrant_id"]),
            full_name=r["full_name"],
            email=r.get("email"),
            phone=r["phone"],
            type=RegistrantType(r["registrant_type"]),
            club_name=r["club_name"],
            club_designation=r.get("club_designation"),
            registration_date=r["registration_date"],
            daily_checkins=daily,
        )

    @staticmethod
    def _params(reg: NewRegistrant) -> tuple:
        return (
            reg.full_name,
            reg.email,
            reg.phone,
            reg.type.value,
            reg.club_name,
            reg.club_designation,
            reg.registration_date or datetime.now(),
        )

    def list_all(self) -> Sequence[Registrant]:
        return self._load()

    def get_by_id(self, registrant_id: int) -> Optional[Registrant]:
        found = self._load("WHERE registrant_id=%s", (int(registrant_id),))
        return found[0] if found else None

    def find_by_email(self, email: str) -> Optional[Registrant]:
        found = self._load("WHERE LOWER(email)=%s", (email.strip().lower(),))
        return found[0] if found else None

    def find_by_phone(self, phone: str) -> Sequence[Registrant]:
        return self._load("WHERE phone=%s", (phone.strip(),))

    def create(self, registrant: NewRegistrant) -> int:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(_INSERT, self._params(registrant))
            return int(cur.lastrowid)

    def create_many(self, registrants: Sequence[NewRegistrant]) -> int:
        if not registrants:
            return 0
        with db_cursor(self._conn_factory) as cur:
            cur.executemany(_INSERT, [self._params(r) for r in registrants])
            return len(registrants)
