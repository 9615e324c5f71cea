from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import NewRegistrant, Registrant


class RegistrantRepository(Protocol):
    def list_all(self) -> Sequence[Registrant]:
        """All registrants with their check-ins, newest registration first."""

        raise NotImplementedError

    def get_by_id(self, registrant_id: int) -> Optional[Registrant]:
        raise NotImplementedError

    def find_by_email(self, email: str) -> Optional[Registrant]:
        raise NotImplementedError

    def find_by_phone(self, phone: str) -> Sequence[Registrant]:
        raise NotImplementedError

    def create(self, registrant: NewRegistrant) -> int:
        raise NotImplementedError

    def create_many(self, registrants: Sequence[NewRegistrant]) -> int:
        raise NotImplementedError
