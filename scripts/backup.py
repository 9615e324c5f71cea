"""Dump the registrants and check-ins to backups/<database>_<timestamp>.sql.

Needs `mysqldump` from the MySQL client tools. Worth running at the end of each
event day before anyone touches the desk laptops.
"""

from __future__ import annotations

import argparse
import importlib
import subprocess
from datetime import datetime
from pathlib import Path

import _bootstrap  # noqa: F401

from config import get_settings_module


def dump_command(db: dict, out_file: Path) -> list[str]:
    return [
        "mysqldump",
        f"--host={db['host']}",
        f"--port={db.get('port', 3306)}",
        f"--user={db['user']}",
        f"--password={db['password']}",
        f"--result-file={out_file}",
        "--single-transaction",
        db["database"],
        "registrants",
        "daily_checkins",
    ]


def main() -> None:
    parser = argparse.ArgumentParser(description="Back up the check-in database with mysqldump")
    parser.add_argument("--out-dir", type=Path, default=_bootstrap.REPO_ROOT / "backups")
    args = parser.parse_args()

    db = importlib.import_module(get_settings_module()).DB_CONFIG
    args.out_dir.mkdir(parents=True, exist_ok=True)
    out_file = args.out_dir / f"{db['database']}_{datetime.now():%Y%m%d_%H%M%S}.sql"

    try:
        subprocess.run(dump_command(db, out_file), stderr=subprocess.PIPE, check=True)
    except FileNotFoundError:
        raise SystemExit("`mysqldump` not found. Install the MySQL client tools.")
    except subprocess.CalledProcessError as e:
        raise SystemExit(f"mysqldump failed: {e.stderr.decode(errors='replace').strip()}")
    print(f"OK: Backup created: {out_file}")


if __name__ == "__main__":
    main()
