from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Mapping, Optional

from ..common.datetime_utils import now_local
from ..common.validators import normalize_email, normalize_phone, optional_text, require_day, require_non_empty
from ..core.enums import RegistrantType
from ..core.exceptions import NotFoundError, ValidationError
from .model import NewRegistrant, Registrant, RegistrantFilter
from .repository import RegistrantRepository

logger = logging.getLogger(__name__)

_TYPE_CSS = {
    RegistrantType.ROTARIAN: "bg-primary",
    RegistrantType.ROTARACTOR: "bg-danger",
    RegistrantType.INTERACTOR: "bg-success",
    RegistrantType.GUARDIAN: "bg-secondary",
}


def build_new_registrant(
    *,
    full_name: Any,
    phone: Any,
    type: Any,
    club_name: Any,
    email: Any = None,
    club_designation: Any = None,
    registration_date: Optional[datetime] = None,
) -> NewRegistrant:
    """Validate raw registration fields (form, JSON or CSV row)."""

    full_name = require_non_empty(optional_text(full_name), "Full Name")
    phone = require_non_empty(normalize_phone(phone), "Phone")
    type_s = require_non_empty(optional_text(type), "Type")
    club_name = require_non_empty(optional_text(club_name), "Club Name")

    try:
        reg_type = RegistrantType.parse(type_s)
    except ValueError:
        allowed = "/".join(t.value for t in RegistrantType)
        raise ValidationError(f"Invalid type '{type_s}' (expected {allowed})")

    return NewRegistrant(
        full_name=full_name,
        email=normalize_email(email),
        phone=phone,
        type=reg_type,
        club_name=club_name,
        club_designation=optional_text(club_designation),
        registration_date=registration_date,
    )


def registrant_payload(r: Registrant, *, event_days: int) -> dict:
    """JSON shape used by the API (camelCase, one entry per event day)."""

    def _iso(value: Optional[datetime]) -> Optional[str]:
        return value.isoformat() if value else None

    daily = {}
    for day in range(1, event_days + 1):
        c = r.checkin_for(day)
        daily[f"day{day}"] = {
            "checkedIn": c is not None,
            "checkInTime": _iso(c.check_in_time) if c else None,
            "method": c.method.value if c else None,
        }

    return {
        "id": r.registrant_id,
        "fullName": r.full_name,
        "email": r.email,
        "phone": r.phone,
        "type": r.type.value,
        "clubName": r.club_name,
        "clubDesignation": r.club_designation,
        "registrationDate": _iso(r.registration_date),
        "checkedIn": r.checked_in,
        "checkInTime": _iso(r.check_in_time),
        "dailyCheckIns": daily,
    }


class RegistrantService:
    """Use cases: browse, filter and register attendees."""

    def __init__(self, registrants: RegistrantRepository, *, event_days: int):
        self._registrants = registrants
        self._event_days = int(event_days)

    @property
    def event_days(self) -> int:
        return self._event_days

    def parse_filter(self, args: Mapping[str, Any]) -> RegistrantFilter:
        type_s = optional_text(args.get("type"))
        reg_type = None
        if type_s:
            try:
                reg_type = RegistrantType.parse(type_s)
            except ValueError:
                raise ValidationError(f"Unknown registrant type: {type_s}")

        day_s = optional_text(args.get("day"))
        day = require_day(day_s, event_days=self._event_days) if day_s else None

        status = optional_text(args.get("status")) or ""
        if status not in {"", "checked_in", "not_checked_in"}:
            raise ValidationError(f"Unknown status filter: {status}")

        return RegistrantFilter(
            q=optional_text(args.get("q")) or "",
            type=reg_type,
            club=optional_text(args.get("club")) or "",
            day=day,
            status=status,
        )

    def list_registrants(self, filters: Optional[RegistrantFilter] = None) -> list[Registrant]:
        rows = list(self._registrants.list_all())
        if filters is None:
            return rows
        return [r for r in rows if filters.matches(r)]

    def list_clubs(self) -> list[str]:
        return sorted({r.club_name for r in self._registrants.list_all()}, key=str.casefold)

    def get(self, registrant_id: int) -> Registrant:
        registrant = self._registrants.get_by_id(int(registrant_id))
        if not registrant:
            raise NotFoundError("Registrant not found")
        return registrant

    def find_duplicate(self, new: NewRegistrant) -> Optional[Registrant]:
        """Existing registrant sharing a dedupe key with `new`; same rule as the CSV import."""
        keys = new.dedupe_keys()
        return next((r for r in self._registrants.list_all() if keys & r.dedupe_keys()), None)

    def create_registrant(self, data: Mapping[str, Any]) -> Registrant:
        new = build_new_registrant(
            full_name=data.get("fullName"),
            email=data.get("email"),
            phone=data.get("phone"),
            type=data.get("type"),
            club_name=data.get("clubName"),
            club_designation=data.get("clubDesignation"),
            registration_date=now_local(),
        )

        existing = self.find_duplicate(new)
        if existing:
            raise ValidationError(f"{existing.full_name} is already registered")

        registrant_id = self._registrants.create(new)
        logger.info("Registered %s (id=%s, club=%s)", new.full_name, registrant_id, new.club_name)
        return self.get(registrant_id)

    def to_ui(self, r: Registrant) -> dict:
        return {
            "id": r.registrant_id,
            "full_name": r.full_name,
            "email": r.email or "-",
            "phone": r.phone,
            "type": r.type.value,
            "type_css": _TYPE_CSS.get(r.type, "bg-secondary"),
            "club_name": r.club_name,
            "club_designation": r.club_designation or "",
            "days": [
                {
                    "day": day,
                    "checked_in": r.checked_in_on(day),
                    "time": r.checkin_for(day).check_in_time.strftime("%H:%M") if r.checked_in_on(day) else "",
                }
                for day in range(1, self._event_days + 1)
            ],
        }
