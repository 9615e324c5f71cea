from __future__ import annotations

from datetime import date, datetime


def parse_iso_date(value: str) -> date:
    """`YYYY-MM-DD` as used by EVENT_START_DATE."""
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        raise ValueError(f"Expected a YYYY-MM-DD date, got {value!r}")


def now_local() -> datetime:
    """Wall-clock time at the venue; services take it as an injectable clock."""
    return datetime.now()


def format_timestamp(value: datetime | None) -> str:
    return value.strftime("%Y-%m-%d %H:%M:%S") if value else ""
