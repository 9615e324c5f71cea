from __future__ import annotations

from typing import Optional

from ...core.enums import CheckInMethod
from ...registrants.model import Registrant
from ...registrants.repository import RegistrantRepository
from .base import CheckInQuery, RegistrantLookup


class IdLookup(RegistrantLookup):
    """Registrant picked from the list (row button)."""

    method = CheckInMethod.ID

    def find(self, registrants: RegistrantRepository, query: CheckInQuery) -> Optional[Registrant]:
        return registrants.get_by_id(int(query.registrant_id))
