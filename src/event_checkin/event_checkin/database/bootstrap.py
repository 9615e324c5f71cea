from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterator

from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


_SKIP_LINE = re.compile(r"^\s*(?:--.*|(?:CREATE\s+DATABASE|USE)\b[^;]*;\s*)$", re.IGNORECASE)


def _strip_create_db_and_use(sql: str) -> str:
    """Drop comment lines and any CREATE DATABASE / USE, so the files work for any database name."""
    return "\n".join(line for line in sql.splitlines() if not _SKIP_LINE.match(line))


def _iter_sql_statements(sql: str) -> Iterator[str]:
    """Split on `;` outside quoted strings (schema and seed files only, not general SQL)."""
    start = 0
    quote: str | None = None
    i = 0
    while i < len(sql):
        ch = sql[i]
        if quote:
            if ch == "\\":
                i += 1
            elif ch == quote:
                quote = None
        elif ch in "'\"":
            quote = ch
        elif ch == ";":
            stmt = sql[start:i].strip()
            if stmt:
                yield stmt
            start = i + 1
        i += 1

    tail = sql[start:].strip()
    if tail:
        yield tail


def ensure_database_exists(conn_factory: DatabaseConnection, database: str) -> None:
    conn = conn_factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_sql_file(conn_factory: DatabaseConnection, *, sql_path: str | Path) -> int:
    """Execute every statement of an SQL file; returns the statement count."""
    sql_path = Path(sql_path)
    sql = _strip_create_db_and_use(sql_path.read_text(encoding="utf-8"))

    conn = conn_factory.connect()
    executed = 0
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
            executed += 1
        conn.commit()
    finally:
        conn.close()
    logger.info("Applied %s (%d statements)", sql_path.name, executed)
    return executed


def apply_schema(conn_factory: DatabaseConnection, *, database: str, schema_path: str | Path) -> None:
    ensure_database_exists(conn_factory, database)
    apply_sql_file(conn_factory, sql_path=schema_path)


def list_tables(conn_factory: DatabaseConnection) -> list[str]:
    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
