from __future__ import annotations

from enum import Enum


class RegistrantType(str, Enum):
    """Registrant categories accepted at registration."""

    ROTARIAN = "Rotarian"
    ROTARACTOR = "Rotaractor"
    INTERACTOR = "Interactor"
    GUARDIAN = "Guardian"

    @classmethod
    def parse(cls, value: str) -> "RegistrantType":
        text = (value or "").strip().lower()
        for member in cls:
            if member.value.lower() == text:
                return member
        raise ValueError(value)


class CheckInMethod(str, Enum):
    """How the registrant was located at the check-in desk."""

    ID = "ID"
    EMAIL = "EMAIL"
    PHONE = "PHONE"
    QR = "QR"
