from __future__ import annotations

import importlib

import _bootstrap  # noqa: F401

from config import get_settings_module

from event_checkin.database.bootstrap import apply_sql_file
from event_checkin.database.connection import DBConfig, DatabaseConnection


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = DBConfig.from_dict(settings.DB_CONFIG)
    conn = DatabaseConnection.get_instance(db_config)

    apply_sql_file(conn, sql_path=_bootstrap.REPO_ROOT / "database" / "seed.sql")
    print(f"OK: Seeded database -> {db_config.describe()}")


if __name__ == "__main__":
    main()
