from __future__ import annotations

from typing import Optional

from ...core.enums import CheckInMethod
from ...registrants.model import Registrant
from ...registrants.repository import RegistrantRepository
from .base import CheckInQuery, RegistrantLookup


class EmailLookup(RegistrantLookup):
    method = CheckInMethod.EMAIL

    def find(self, registrants: RegistrantRepository, query: CheckInQuery) -> Optional[Registrant]:
        return registrants.find_by_email(query.email.strip().lower())
