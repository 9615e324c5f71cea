from __future__ import annotations

from datetime import datetime

import mysql.connector
from mysql.connector import errorcode

from ..core.enums import CheckInMethod
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor
from .repository import CheckInRepository


class MySQLCheckInRepository(CheckInRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def add_checkin(
        self,
        *,
        registrant_id: int,
        event_day: int,
        check_in_time: datetime,
        method: CheckInMethod,
    ) -> int:
        try:
            with db_cursor(self._conn_factory) as cur:
                cur.execute(
                    """
                    INSERT INTO daily_checkins(registrant_id, event_day, check_in_time, method)
                    VALUES(%s,%s,%s,%s)
                    """,
                    (int(registrant_id), int(event_day), check_in_time, method.value),
                )
                return int(cur.lastrowid)
        except mysql.connector.IntegrityError as e:
            # Two desks scanning the same badge: the unique key wins the race
            if e.errno == errorcode.ER_DUP_ENTRY:
                raise ConflictError("Registrant already checked in") from e
            raise

    def remove_checkin(self, *, registrant_id: int, event_day: int) -> bool:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                "DELETE FROM daily_checkins WHERE registrant_id=%s AND event_day=%s",
                (int(registrant_id), int(event_day)),
            )
            return cur.rowcount > 0
