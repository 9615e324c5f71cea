from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

from ..common.datetime_utils import now_local
from ..core.exceptions import ValidationError
from ..registrants.model import NewRegistrant
from ..registrants.repository import RegistrantRepository
from ..registrants.service import build_new_registrant
from .model import ImportResult, SourceRow
from .parser import parse_csv, rows_from_records

logger = logging.getLogger(__name__)


class ImportService:
    """Use case: bulk registration from a CSV export of the registration form."""

    def __init__(self, registrants: RegistrantRepository):
        self._registrants = registrants

    def import_csv(self, text: str) -> ImportResult:
        return self.import_rows(parse_csv(text))

    def import_records(self, records: Sequence[Mapping[str, Any]]) -> ImportResult:
        return self.import_rows(rows_from_records(records))

    def import_rows(self, rows: Sequence[SourceRow]) -> ImportResult:
        result = ImportResult()

        # dedupe key -> why a later row with that key is skipped
        seen: dict[tuple[str, str], str] = {}
        for existing in self._registrants.list_all():
            for key in existing.dedupe_keys():
                seen[key] = "already registered"

        stamp = now_local()
        pending: list[NewRegistrant] = []
        for row in rows:
            try:
                new = build_new_registrant(
                    full_name=row.values.get("full_name"),
                    email=row.values.get("email"),
                    phone=row.values.get("phone"),
                    type=row.values.get("type"),
                    club_name=row.values.get("club_name"),
                    club_designation=row.values.get("club_designation"),
                    registration_date=stamp,
                )
            except ValidationError as e:
                message = f"Row {row.line_no}: {e}"
                result.errors.append(message)
                result.logs.append(message)
                continue

            keys = new.dedupe_keys()
            clash = next((seen[k] for k in keys if k in seen), None)
            if clash:
                result.skipped += 1
                result.logs.append(f"Skipped duplicate: {new.full_name} ({clash})")
                continue

            for key in keys:
                seen[key] = f"duplicate of row {row.line_no}"
            pending.append(new)
            result.logs.append(f"Successfully imported: {new.full_name}")

        result.imported = self._registrants.create_many(pending)
        logger.info(
            "Import finished: imported=%d skipped=%d errors=%d",
            result.imported,
            result.skipped,
            len(result.errors),
        )
        return result
