from __future__ import annotations

from typing import Optional

from ...core.enums import CheckInMethod
from ...core.exceptions import ValidationError
from ...registrants.badge import parse_badge_code
from ...registrants.model import Registrant
from ...registrants.repository import RegistrantRepository
from .base import CheckInQuery, RegistrantLookup


class BadgeLookup(RegistrantLookup):
    """Badge QR code scanned at the desk."""

    method = CheckInMethod.QR

    def find(self, registrants: RegistrantRepository, query: CheckInQuery) -> Optional[Registrant]:
        registrant_id = parse_badge_code(query.code)
        if registrant_id is None:
            raise ValidationError("Invalid badge code")
        return registrants.get_by_id(registrant_id)
