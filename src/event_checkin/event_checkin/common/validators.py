from __future__ import annotations

import re
from typing import Any, Optional

from ..core.exceptions import ValidationError

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def optional_text(value: Any) -> Optional[str]:
    text = str(value).strip() if value is not None else ""
    return text or None


def normalize_email(value: Any) -> Optional[str]:
    email = optional_text(value)
    if email is None:
        return None
    if not _EMAIL_RE.match(email):
        raise ValidationError(f"Invalid email address: {email}")
    return email.lower()


def normalize_phone(value: Any) -> str:
    text = str(value).strip() if value is not None else ""
    # Spreadsheets turn numeric phone cells into floats ("9876543210.0")
    if text.endswith(".0") and text[:-2].isdigit():
        text = text[:-2]
    return text


def require_day(value: Any, *, event_days: int) -> int:
    try:
        day = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid event day: {value!r}")
    if day < 1 or day > event_days:
        raise ValidationError(f"Event day must be between 1 and {event_days}")
    return day
