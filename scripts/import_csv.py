"""Import registrants from a CSV file without going through the web UI.

Usage: python scripts/import_csv.py registrants.csv
"""

from __future__ import annotations

import argparse
import importlib
from pathlib import Path

import _bootstrap  # noqa: F401

from config import get_settings_module

from event_checkin.container import EventSettings, build_container
from event_checkin.core.exceptions import ValidationError


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("csv_file", type=Path)
    args = parser.parse_args()

    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, event=EventSettings.from_settings(settings))

    try:
        result = container.import_service.import_csv(args.csv_file.read_text(encoding="utf-8-sig"))
    except ValidationError as e:
        raise SystemExit(f"Import failed: {e}")

    for line in result.logs:
        print(line)
    print(f"Imported {result.imported}, skipped {result.skipped}, errors {len(result.errors)}")


if __name__ == "__main__":
    main()
