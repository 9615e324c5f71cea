from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from ..common.validators import require_day
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..registrants.model import Registrant
from ..registrants.repository import RegistrantRepository
from .factory import RegistrantLookupFactory
from .lookups.base import CheckInQuery
from .repository import CheckInRepository

logger = logging.getLogger(__name__)


class CheckInService:
    def __init__(
        self,
        registrants: RegistrantRepository,
        checkins: CheckInRepository,
        *,
        event_days: int,
        event_start_date: Optional[date] = None,
        lookup_factory: RegistrantLookupFactory | None = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._registrants = registrants
        self._checkins = checkins
        self._event_days = int(event_days)
        self._event_start_date = event_start_date
        self._factory = lookup_factory or RegistrantLookupFactory()
        self._clock = clock

    def _day_number(self, today: date) -> int:
        if not self._event_start_date:
            return 1
        return (today - self._event_start_date).days + 1

    def current_event_day(self, today: Optional[date] = None) -> int:
        """Day to preselect on the desk pages, clamped to the event; day 1 without a start date."""
        day = self._day_number(today or self._clock().date())
        return min(max(day, 1), self._event_days)

    def _resolve_day(self, day, now: datetime) -> int:
        if day is None or day == "":
            today = self._day_number(now.date())
            if not 1 <= today <= self._event_days:
                raise ValidationError(
                    f"{now.date().isoformat()} is not an event day (days 1-{self._event_days}); choose a day explicitly"
                )
            return today
        return require_day(day, event_days=self._event_days)

    def check_in(self, query: CheckInQuery, *, day=None, now: datetime | None = None) -> Registrant:
        now = now or self._clock()
        event_day = self._resolve_day(day, now)

        lookup = self._factory.for_query(query)
        registrant = lookup.find(self._registrants, query)
        if not registrant:
            raise NotFoundError("Registrant not found")

        if registrant.checked_in_on(event_day):
            raise ConflictError("Registrant already checked in")

        self._checkins.add_checkin(
            registrant_id=registrant.registrant_id,
            event_day=event_day,
            check_in_time=now,
            method=lookup.method,
        )
        logger.info(
            "Checked in %s (id=%s) for day %d via %s",
            registrant.full_name,
            registrant.registrant_id,
            event_day,
            lookup.method.value,
        )
        return self._reload(registrant.registrant_id)

    def undo_check_in(self, registrant_id: int, *, day=None) -> Registrant:
        event_day = self._resolve_day(day, self._clock())

        registrant = self._registrants.get_by_id(int(registrant_id))
        if not registrant:
            raise NotFoundError("Registrant not found")
        if not registrant.checked_in_on(event_day):
            raise ConflictError("Registrant is not checked in")

        self._checkins.remove_checkin(registrant_id=registrant.registrant_id, event_day=event_day)
        logger.info("Undid day %d check-in of %s (id=%s)", event_day, registrant.full_name, registrant.registrant_id)
        return self._reload(registrant.registrant_id)

    def _reload(self, registrant_id: int) -> Registrant:
        registrant = self._registrants.get_by_id(registrant_id)
        if not registrant:
            raise NotFoundError("Registrant not found")
        return registrant
