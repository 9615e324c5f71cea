from __future__ import annotations

from datetime import datetime
from typing import Protocol

from ..core.enums import CheckInMethod


class CheckInRepository(Protocol):
    def add_checkin(
        self,
        *,
        registrant_id: int,
        event_day: int,
        check_in_time: datetime,
        method: CheckInMethod,
    ) -> int:
        raise NotImplementedError

    def remove_checkin(self, *, registrant_id: int, event_day: int) -> bool:
        raise NotImplementedError
