from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Mapping, Optional

from ..core.enums import CheckInMethod, RegistrantType


def dedupe_keys(*, email: Optional[str], full_name: str, phone: str) -> set[tuple[str, str]]:
    """Keys under which two registrants count as the same person.

    Email (case-insensitive) when present, plus normalized name + phone digits.
    """
    keys: set[tuple[str, str]] = set()
    if email:
        keys.add(("email", email.strip().lower()))
    name = " ".join(full_name.split()).casefold()
    digits = re.sub(r"\D", "", phone or "")
    if name and digits:
        keys.add(("name_phone", f"{name}|{digits}"))
    return keys


@dataclass(frozen=True)
class DailyCheckIn:
    event_day: int
    check_in_time: datetime
    method: CheckInMethod = CheckInMethod.ID


@dataclass(frozen=True)
class Registrant:
    """Domain entity: one registered attendee.

    The overall check-in flag is derived from the per-day check-ins.
    """

    registrant_id: int
    full_name: str
    email: Optional[str]
    phone: str
    type: RegistrantType
    club_name: str
    club_designation: Optional[str]
    registration_date: datetime
    daily_checkins: Mapping[int, DailyCheckIn] = field(default_factory=dict)

    @property
    def checked_in(self) -> bool:
        return bool(self.daily_checkins)

    @property
    def check_in_time(self) -> Optional[datetime]:
        if not self.daily_checkins:
            return None
        return max(c.check_in_time for c in self.daily_checkins.values())

    def checked_in_on(self, day: int) -> bool:
        return day in self.daily_checkins

    def checkin_for(self, day: int) -> Optional[DailyCheckIn]:
        return self.daily_checkins.get(day)

    def dedupe_keys(self) -> set[tuple[str, str]]:
        return dedupe_keys(email=self.email, full_name=self.full_name, phone=self.phone)


@dataclass(frozen=True)
class NewRegistrant:
    """Validated registration data not yet persisted."""

    full_name: str
    email: Optional[str]
    phone: str
    type: RegistrantType
    club_name: str
    club_designation: Optional[str] = None
    registration_date: Optional[datetime] = None

    def dedupe_keys(self) -> set[tuple[str, str]]:
        return dedupe_keys(email=self.email, full_name=self.full_name, phone=self.phone)


@dataclass(frozen=True)
class RegistrantFilter:
    q: str = ""
    type: Optional[RegistrantType] = None
    club: str = ""
    day: Optional[int] = None
    status: str = ""  # "checked_in" | "not_checked_in" | ""

    def matches(self, r: Registrant) -> bool:
        if self.q:
            needle = self.q.casefold()
            haystack = (r.full_name, r.email or "", r.phone, r.club_name)
            if not any(needle in h.casefold() for h in haystack):
                return False
        if self.type is not None and r.type != self.type:
            return False
        if self.club and r.club_name.casefold() != self.club.casefold():
            return False
        if self.status:
            present = r.checked_in_on(self.day) if self.day else r.checked_in
            if self.status == "checked_in" and not present:
                return False
            if self.status == "not_checked_in" and present:
                return False
        return True
