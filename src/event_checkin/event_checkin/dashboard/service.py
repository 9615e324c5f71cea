from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from ..core.constants import RECENT_CHECKINS_LIMIT
from ..registrants.model import Registrant
from ..registrants.repository import RegistrantRepository


def percentage(part: int, total: int) -> int:
    """Whole-number percentage rounded half up; 0 when there is nothing to divide by."""
    if not total:
        return 0
    return (part * 200 + total) // (2 * total)


@dataclass
class _Tally:
    """Running counts for one group (everyone, a type, or a club)."""

    event_days: int
    total: int = 0
    checked_in: int = 0
    per_day: dict[int, int] = field(default_factory=dict)
    types: dict[str, int] = field(default_factory=dict)

    def add(self, r: Registrant) -> None:
        self.total += 1
        if r.checked_in:
            self.checked_in += 1
        for day in r.daily_checkins:
            self.per_day[day] = self.per_day.get(day, 0) + 1
        self.types[r.type.value] = self.types.get(r.type.value, 0) + 1

    def daily_stats(self) -> dict:
        return {
            f"day{day}": {
                "checkedIn": self.per_day.get(day, 0),
                "percentage": percentage(self.per_day.get(day, 0), self.total),
            }
            for day in range(1, self.event_days + 1)
        }

    def as_dict(self) -> dict:
        return {
            "total": self.total,
            "checkedIn": self.checked_in,
            "percentage": percentage(self.checked_in, self.total),
            "dailyStats": self.daily_stats(),
        }


class DashboardService:
    def __init__(
        self,
        registrants: RegistrantRepository,
        *,
        event_days: int,
        recent_limit: int = RECENT_CHECKINS_LIMIT,
    ):
        self._registrants = registrants
        self._event_days = int(event_days)
        self._recent_limit = int(recent_limit)

    def build(self) -> dict:
        return self.summarize(self._registrants.list_all())

    def summarize(self, registrants: Iterable[Registrant]) -> dict:
        overall = _Tally(self._event_days)
        by_type: dict[str, _Tally] = {}
        by_club: dict[str, _Tally] = {}
        recent: list[dict] = []

        for r in registrants:
            overall.add(r)
            by_type.setdefault(r.type.value, _Tally(self._event_days)).add(r)
            by_club.setdefault(r.club_name, _Tally(self._event_days)).add(r)
            for c in r.daily_checkins.values():
                if c.event_day > self._event_days:
                    continue
                recent.append(
                    {
                        "fullName": r.full_name,
                        "clubName": r.club_name,
                        "day": c.event_day,
                        "checkInTime": c.check_in_time,
                    }
                )

        recent.sort(key=lambda x: x["checkInTime"], reverse=True)
        recent = recent[: self._recent_limit]
        for item in recent:
            item["checkInTime"] = item["checkInTime"].isoformat()

        clubs = {}
        for name in sorted(by_club, key=str.casefold):
            tally = by_club[name]
            clubs[name] = {**tally.as_dict(), "types": dict(tally.types)}

        return {
            "totalRegistrants": overall.total,
            "checkedIn": overall.checked_in,
            "percentage": percentage(overall.checked_in, overall.total),
            "dailyStats": overall.daily_stats(),
            "byType": {name: tally.as_dict() for name, tally in by_type.items()},
            "byClub": clubs,
            "recentCheckins": recent,
        }
