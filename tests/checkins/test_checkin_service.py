from __future__ import annotations

from datetime import date, datetime

import pytest

from event_checkin.checkins.lookups.base import CheckInQuery
from event_checkin.checkins.service import CheckInService
from event_checkin.core.enums import CheckInMethod, RegistrantType
from event_checkin.core.exceptions import ConflictError, NotFoundError, ValidationError

NOW = datetime(2024, 3, 2, 9, 15)


@pytest.fixture
def service(registrants_repo, checkins_repo):
    return CheckInService(
        registrants_repo,
        checkins_repo,
        event_days=3,
        event_start_date=date(2024, 3, 1),
        clock=lambda: NOW,
    )


def test_check_in_by_email_records_current_event_day(service, add_registrant):
    rid = add_registrant("Asha Menon", email="asha@example.org")

    r = service.check_in(CheckInQuery(email="  ASHA@example.org "))

    assert r.registrant_id == rid
    assert r.checked_in_on(2)
    assert not r.checked_in_on(1)
    assert r.checkin_for(2).check_in_time == NOW
    assert r.checkin_for(2).method == CheckInMethod.EMAIL


def test_explicit_day_overrides_current_day(service, add_registrant):
    rid = add_registrant("Asha Menon")

    r = service.check_in(CheckInQuery(registrant_id=rid), day="3")

    assert list(r.daily_checkins) == [3]


def test_check_in_twice_same_day_is_conflict(service, add_registrant):
    rid = add_registrant("Asha Menon")
    service.check_in(CheckInQuery(registrant_id=rid), day=1)

    with pytest.raises(ConflictError, match="already checked in"):
        service.check_in(CheckInQuery(registrant_id=rid), day=1)


def test_check_in_on_each_day_is_independent(service, registrants_repo, add_registrant):
    rid = add_registrant("Asha Menon")
    for day in (1, 2, 3):
        service.check_in(CheckInQuery(registrant_id=rid), day=day)

    r = registrants_repo.get_by_id(rid)
    assert sorted(r.daily_checkins) == [1, 2, 3]


def test_unknown_registrant_is_not_found(service):
    with pytest.raises(NotFoundError, match="Registrant not found"):
        service.check_in(CheckInQuery(email="nobody@example.org"))


@pytest.mark.parametrize("day", [0, 4, "x"])
def test_day_outside_event_is_rejected(service, add_registrant, day):
    rid = add_registrant("Asha Menon")

    with pytest.raises(ValidationError):
        service.check_in(CheckInQuery(registrant_id=rid), day=day)


def test_shared_phone_is_ambiguous(service, add_registrant):
    add_registrant("Parent", phone="9876500004", type=RegistrantType.GUARDIAN)
    add_registrant("Child", phone="9876500004", type=RegistrantType.INTERACTOR)

    with pytest.raises(ValidationError, match="share this phone"):
        service.check_in(CheckInQuery(phone="9876500004"))


def test_badge_scan_checks_in(service, add_registrant):
    rid = add_registrant("Meera Pillai")

    r = service.check_in(CheckInQuery(code=f"REG-{rid}"), day=1)

    assert r.checkin_for(1).method == CheckInMethod.QR


def test_invalid_badge_is_rejected(service):
    with pytest.raises(ValidationError, match="Invalid badge code"):
        service.check_in(CheckInQuery(code="OFFICE"))


def test_undo_removes_only_that_day(service, add_registrant):
    rid = add_registrant("Asha Menon", days={1: datetime(2024, 3, 1, 9), 2: datetime(2024, 3, 2, 9)})

    r = service.undo_check_in(rid, day=2)

    assert list(r.daily_checkins) == [1]
    assert r.checked_in is True


def test_undo_last_check_in_clears_overall_flag(service, add_registrant):
    rid = add_registrant("Asha Menon", days={2: datetime(2024, 3, 2, 9)})

    r = service.undo_check_in(rid)

    assert r.checked_in is False
    assert r.check_in_time is None


def test_undo_when_not_checked_in_is_conflict(service, add_registrant):
    rid = add_registrant("Asha Menon")

    with pytest.raises(ConflictError, match="not checked in"):
        service.undo_check_in(rid, day=1)


def test_undo_unknown_registrant(service):
    with pytest.raises(NotFoundError):
        service.undo_check_in(99, day=1)


@pytest.mark.parametrize(
    "today, expected",
    [(date(2024, 2, 28), 1), (date(2024, 3, 1), 1), (date(2024, 3, 3), 3), (date(2024, 3, 10), 3)],
)
def test_current_event_day_is_clamped(service, today, expected):
    assert service.current_event_day(today) == expected


def test_without_start_date_default_day_is_one(registrants_repo, checkins_repo, add_registrant):
    svc = CheckInService(registrants_repo, checkins_repo, event_days=3, clock=lambda: NOW)
    rid = add_registrant("Asha Menon")

    r = svc.check_in(CheckInQuery(registrant_id=rid))

    assert list(r.daily_checkins) == [1]


@pytest.mark.parametrize("now", [datetime(2024, 2, 29, 18, 0), datetime(2024, 3, 4, 8, 30)])
def test_default_day_outside_event_dates_is_rejected(registrants_repo, checkins_repo, add_registrant, now):
    svc = CheckInService(
        registrants_repo,
        checkins_repo,
        event_days=3,
        event_start_date=date(2024, 3, 1),
        clock=lambda: now,
    )
    rid = add_registrant("Asha Menon")

    with pytest.raises(ValidationError, match="is not an event day"):
        svc.check_in(CheckInQuery(registrant_id=rid))
    assert registrants_repo.get_by_id(rid).checked_in is False

    r = svc.check_in(CheckInQuery(registrant_id=rid), day=3)
    assert r.checked_in_on(3)
