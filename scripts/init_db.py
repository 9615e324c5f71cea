from __future__ import annotations

import importlib

import _bootstrap  # noqa: F401

from config import get_settings_module

from event_checkin.database.bootstrap import apply_schema, list_tables
from event_checkin.database.connection import DBConfig, DatabaseConnection


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = DBConfig.from_dict(settings.DB_CONFIG)
    conn = DatabaseConnection.get_instance(db_config)

    schema_path = _bootstrap.REPO_ROOT / "database" / "schema.sql"
    apply_schema(conn, database=db_config.database, schema_path=schema_path)
    tables = list_tables(conn)
    print(f"OK: Applied schema.sql -> {db_config.describe()} (tables={len(tables)})")


if __name__ == "__main__":
    main()
