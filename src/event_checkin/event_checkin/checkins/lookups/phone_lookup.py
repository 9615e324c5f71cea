from __future__ import annotations

from typing import Optional

from ...common.validators import normalize_phone
from ...core.enums import CheckInMethod
from ...core.exceptions import ValidationError
from ...registrants.model import Registrant
from ...registrants.repository import RegistrantRepository
from .base import CheckInQuery, RegistrantLookup


class PhoneLookup(RegistrantLookup):
    """Phone numbers are not unique (guardians share them), so ambiguity is an error."""

    method = CheckInMethod.PHONE

    def find(self, registrants: RegistrantRepository, query: CheckInQuery) -> Optional[Registrant]:
        matches = list(registrants.find_by_phone(normalize_phone(query.phone)))
        if len(matches) > 1:
            raise ValidationError("Several registrants share this phone number; check in by email or badge")
        return matches[0] if matches else None
