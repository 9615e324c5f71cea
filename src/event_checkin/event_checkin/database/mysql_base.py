from __future__ import annotations

from collections import defaultdict
from contextlib import contextmanager
from typing import Any, Dict, Hashable, Iterable, Iterator, List

from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True) -> Iterator[Any]:
    """One connection per unit of work: commit on success, rollback on error."""
    conn = conn_factory.connect()
    cur = conn.cursor(dictionary=dictionary)
    try:
        yield cur
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        cur.close()
        conn.close()


def fetchall(cur) -> List[Dict[str, Any]]:
    return list(cur.fetchall() or [])


def in_clause(values) -> str:
    """Placeholder list for `IN (...)` with one %s per value."""
    return ", ".join(["%s"] * len(values))


def group_rows(rows: Iterable[Dict[str, Any]], key: str) -> Dict[Hashable, List[Dict[str, Any]]]:
    grouped: Dict[Hashable, List[Dict[str, Any]]] = defaultdict(list)
    for row in rows:
        grouped[row[key]].append(row)
    return grouped
