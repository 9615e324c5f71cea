from __future__ import annotations

from dataclasses import dataclass

from ..core.exceptions import ValidationError
from .lookups.badge_lookup import BadgeLookup
from .lookups.base import CheckInQuery, RegistrantLookup
from .lookups.email_lookup import EmailLookup
from .lookups.id_lookup import IdLookup
from .lookups.phone_lookup import PhoneLookup


@dataclass
class RegistrantLookupFactory:
    """Factory Pattern: choose the lookup strategy from the identifier supplied."""

    def for_query(self, query: CheckInQuery) -> RegistrantLookup:
        provided = query.provided()
        if not provided:
            raise ValidationError("Provide a registrant id, email, phone or badge code")
        if len(provided) > 1:
            raise ValidationError("Provide only one identifier per check-in")

        return {
            "registrant_id": IdLookup,
            "email": EmailLookup,
            "phone": PhoneLookup,
            "code": BadgeLookup,
        }[provided[0]]()
