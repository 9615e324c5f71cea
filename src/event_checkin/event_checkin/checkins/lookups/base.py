from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ...core.enums import CheckInMethod
from ...registrants.model import Registrant
from ...registrants.repository import RegistrantRepository


@dataclass(frozen=True)
class CheckInQuery:
    """What the desk typed or scanned; exactly one field is expected."""

    registrant_id: Optional[int] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    code: Optional[str] = None

    def provided(self) -> list[str]:
        return [name for name in ("registrant_id", "email", "phone", "code") if getattr(self, name)]


class RegistrantLookup(ABC):
    """Strategy Pattern: encapsulate how the desk locates a registrant."""

    method: CheckInMethod

    @abstractmethod
    def find(self, registrants: RegistrantRepository, query: CheckInQuery) -> Optional[Registrant]:
        raise NotImplementedError
