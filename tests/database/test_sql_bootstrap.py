from pathlib import Path

from event_checkin.database.bootstrap import _iter_sql_statements, _strip_create_db_and_use

DATABASE_DIR = Path(__file__).resolve().parents[2] / "database"


def test_semicolons_inside_quotes_do_not_split():
    sql = "INSERT INTO t VALUES ('a;b');\nINSERT INTO t VALUES (\"c;d\");\nSELECT 1"

    assert list(_iter_sql_statements(sql)) == [
        "INSERT INTO t VALUES ('a;b')",
        'INSERT INTO t VALUES ("c;d")',
        "SELECT 1",
    ]


def test_create_database_use_and_comments_are_dropped():
    sql = "-- demo\nCREATE DATABASE IF NOT EXISTS x;\nUSE x;\nSELECT 1;\n"

    assert list(_iter_sql_statements(_strip_create_db_and_use(sql))) == ["SELECT 1"]


def test_schema_file_defines_both_tables():
    sql = _strip_create_db_and_use((DATABASE_DIR / "schema.sql").read_text(encoding="utf-8"))
    statements = [s for s in _iter_sql_statements(sql)]

    assert any("CREATE TABLE IF NOT EXISTS registrants" in s for s in statements)
    assert any("CREATE TABLE IF NOT EXISTS daily_checkins" in s for s in statements)
