"""CSV parsing for registrant imports."""

from __future__ import annotations

import csv
import io
from typing import Any, Iterable, Mapping, Sequence

from ..core.exceptions import ValidationError
from .model import SourceRow

REQUIRED_FIELDS: Sequence[str] = ["full_name", "phone", "type", "club_name"]

FIELD_LABELS = {
    "full_name": "Full Name",
    "email": "Email",
    "phone": "Phone",
    "type": "Type",
    "club_name": "Club Name",
    "club_designation": "Club Designation",
}

HEADER_ALIASES = {
    "fullname": "full_name",
    "full name": "full_name",
    "full_name": "full_name",
    "name": "full_name",
    "email": "email",
    "email address": "email",
    "phone": "phone",
    "phone number": "phone",
    "mobile": "phone",
    "type": "type",
    "registrant type": "type",
    "clubname": "club_name",
    "club name": "club_name",
    "club_name": "club_name",
    "club": "club_name",
    "clubdesignation": "club_designation",
    "club designation": "club_designation",
    "club_designation": "club_designation",
    "designation": "club_designation",
}


def _normalise_header(value: Any) -> str:
    return " ".join(str(value).replace("\ufeff", "").split()).lower() if value is not None else ""


def canonical_field(header: Any) -> str | None:
    return HEADER_ALIASES.get(_normalise_header(header))


def _check_required(fields: Iterable[str]) -> None:
    present = set(fields)
    missing = [FIELD_LABELS[f] for f in REQUIRED_FIELDS if f not in present]
    if missing:
        raise ValidationError(f"Missing required column(s): {', '.join(missing)}")


def _map_record(record: Mapping[Any, Any]) -> dict[str, str]:
    values: dict[str, str] = {}
    for header, value in record.items():
        name = canonical_field(header)
        if name is None or (name in values and values[name]):
            continue
        values[name] = "" if value is None else str(value).strip()
    return values


def parse_csv(text: str) -> list[SourceRow]:
    """Parse CSV text into rows keyed by canonical field names.

    Unknown columns are ignored and blank lines skipped. Raises ValidationError
    when the file is empty or a required column is missing.
    """
    text = (text or "").lstrip("\ufeff")
    if not text.strip():
        raise ValidationError("The CSV file is empty")

    reader = csv.DictReader(io.StringIO(text))
    headers = [canonical_field(h) for h in (reader.fieldnames or [])]
    _check_required(h for h in headers if h)

    rows: list[SourceRow] = []
    for record in reader:
        values = _map_record({k: v for k, v in record.items() if k is not None})
        if not any(values.values()):
            continue
        rows.append(SourceRow(line_no=reader.line_num, values=values))
    return rows


def rows_from_records(records: Sequence[Mapping[str, Any]]) -> list[SourceRow]:
    """Rows already parsed client-side (JSON `data` array); numbered as if line 1 were a header."""
    rows = []
    for index, record in enumerate(records, start=2):
        if not isinstance(record, Mapping):
            raise ValidationError("Invalid data format")
        rows.append(SourceRow(line_no=index, values=_map_record(record)))
    return rows
