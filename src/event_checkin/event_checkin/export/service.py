from __future__ import annotations

import io
import logging
from typing import Sequence

import pandas as pd

from ..common.datetime_utils import format_timestamp
from ..registrants.model import Registrant
from ..registrants.repository import RegistrantRepository

logger = logging.getLogger(__name__)

CONTACT_COLUMNS = ["Name", "Email", "Phone", "Type", "Club", "Club Designation"]


def _contact(r: Registrant) -> dict:
    return {
        "Name": r.full_name,
        "Email": r.email or "",
        "Phone": r.phone,
        "Type": r.type.value,
        "Club": r.club_name,
        "Club Designation": r.club_designation or "",
    }


class ExportService:
    """Excel workbook of registrants, per-day check-ins and club attendance."""

    def __init__(self, registrants: RegistrantRepository, *, event_days: int):
        self._registrants = registrants
        self._event_days = int(event_days)

    @property
    def days(self) -> range:
        return range(1, self._event_days + 1)

    def registrants_frame(self, registrants: Sequence[Registrant]) -> pd.DataFrame:
        columns = CONTACT_COLUMNS + [f"Check-in Day {d}" for d in self.days]
        data = []
        for r in registrants:
            row = _contact(r)
            for d in self.days:
                row[f"Check-in Day {d}"] = "Yes" if r.checked_in_on(d) else "No"
            data.append(row)
        return pd.DataFrame(data, columns=columns)

    def day_frame(self, registrants: Sequence[Registrant], day: int) -> pd.DataFrame:
        data = []
        for r in registrants:
            c = r.checkin_for(day)
            if c is None:
                continue
            data.append({**_contact(r), "Check-in Time": format_timestamp(c.check_in_time)})
        data.sort(key=lambda x: x["Check-in Time"])
        return pd.DataFrame(data, columns=CONTACT_COLUMNS + ["Check-in Time"])

    def club_frame(self, registrants: Sequence[Registrant]) -> pd.DataFrame:
        columns = ["Club"] + [f"Day {d}" for d in self.days] + ["Total Unique"]
        clubs: dict[str, dict] = {}
        for r in registrants:
            row = clubs.setdefault(r.club_name, {"Club": r.club_name, **{c: 0 for c in columns[1:]}})
            for d in self.days:
                if r.checked_in_on(d):
                    row[f"Day {d}"] += 1
            if any(r.checked_in_on(d) for d in self.days):
                row["Total Unique"] += 1
        ordered = [clubs[name] for name in sorted(clubs, key=str.casefold)]
        return pd.DataFrame(ordered, columns=columns)

    def build_workbook(self) -> bytes:
        registrants = list(self._registrants.list_all())

        sheets = [("All Registrants", self.registrants_frame(registrants))]
        sheets += [(f"Day {d} Check-ins", self.day_frame(registrants, d)) for d in self.days]
        sheets.append(("Club-wise Attendance", self.club_frame(registrants)))

        out = io.BytesIO()
        with pd.ExcelWriter(out, engine="openpyxl") as writer:
            for name, df in sheets:
                df.to_excel(writer, sheet_name=name, index=False)
                ws = writer.sheets[name]
                for idx, column in enumerate(df.columns, start=1):
                    width = max([len(str(column))] + [len(str(v)) for v in df[column]])
                    ws.column_dimensions[ws.cell(row=1, column=idx).column_letter].width = min(width + 2, 60)

        logger.info("Exported workbook (%d registrants, %d sheets)", len(registrants), len(sheets))
        return out.getvalue()
