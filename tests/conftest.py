from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Optional

import pytest

from event_checkin.container import EventSettings, build_services
from event_checkin.core.enums import CheckInMethod, RegistrantType
from event_checkin.registrants.model import DailyCheckIn, NewRegistrant, Registrant


class InMemoryRegistrants:
    def __init__(self):
        self.rows: dict[int, Registrant] = {}
        self._next_id = 1

    def list_all(self):
        return sorted(self.rows.values(), key=lambda r: (r.registration_date, r.registrant_id), reverse=True)

    def get_by_id(self, registrant_id: int) -> Optional[Registrant]:
        return self.rows.get(int(registrant_id))

    def find_by_email(self, email: str) -> Optional[Registrant]:
        return next((r for r in self.rows.values() if r.email and r.email.lower() == email.lower()), None)

    def find_by_phone(self, phone: str):
        return [r for r in self.rows.values() if r.phone == phone]

    def create(self, new: NewRegistrant) -> int:
        rid = self._next_id
        self._next_id += 1
        self.rows[rid] = Registrant(
            registrant_id=rid,
            full_name=new.full_name,
            email=new.email,
            phone=new.phone,
            type=new.type,
            club_name=new.club_name,
            club_designation=new.club_designation,
            registration_date=new.registration_date or datetime(2024, 3, 1, 8, 0),
            daily_checkins={},
        )
        return rid

    def create_many(self, registrants) -> int:
        for new in registrants:
            self.create(new)
        return len(registrants)


class InMemoryCheckIns:
    def __init__(self, registrants: InMemoryRegistrants):
        self._registrants = registrants

    def add_checkin(self, *, registrant_id, event_day, check_in_time, method) -> int:
        r = self._registrants.rows[registrant_id]
        daily = dict(r.daily_checkins)
        daily[event_day] = DailyCheckIn(event_day=event_day, check_in_time=check_in_time, method=method)
        self._registrants.rows[registrant_id] = replace(r, daily_checkins=daily)
        return len(daily)

    def remove_checkin(self, *, registrant_id, event_day) -> bool:
        r = self._registrants.rows[registrant_id]
        daily = dict(r.daily_checkins)
        removed = daily.pop(event_day, None) is not None
        self._registrants.rows[registrant_id] = replace(r, daily_checkins=daily)
        return removed


@pytest.fixture
def registrants_repo():
    return InMemoryRegistrants()


@pytest.fixture
def checkins_repo(registrants_repo):
    return InMemoryCheckIns(registrants_repo)


@pytest.fixture
def add_registrant(registrants_repo, checkins_repo):
    """Insert a registrant directly; `days` maps event day -> check-in datetime."""

    def _add(
        full_name: str,
        *,
        email: Optional[str] = None,
        phone: str = "9000000000",
        type: RegistrantType = RegistrantType.ROTARIAN,
        club_name: str = "Rotary Club of Cochin",
        club_designation: Optional[str] = None,
        registered: datetime = datetime(2024, 3, 1, 8, 0),
        days: Optional[dict[int, datetime]] = None,
    ) -> int:
        rid = registrants_repo.create(
            NewRegistrant(
                full_name=full_name,
                email=email,
                phone=phone,
                type=type,
                club_name=club_name,
                club_designation=club_designation,
                registration_date=registered,
            )
        )
        for day, when in (days or {}).items():
            checkins_repo.add_checkin(registrant_id=rid, event_day=day, check_in_time=when, method=CheckInMethod.ID)
        return rid

    return _add


@pytest.fixture
def event():
    return EventSettings(name="Test Event", days=3)


@pytest.fixture
def container(event, registrants_repo, checkins_repo):
    return build_services(event=event, registrants_repo=registrants_repo, checkins_repo=checkins_repo)


@pytest.fixture
def app(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    from event_checkin.main import create_app

    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()
