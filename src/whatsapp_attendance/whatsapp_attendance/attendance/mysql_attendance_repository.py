from __future__ import annotations

from datetime import date, datetime, time
from typing import Any, Dict, Optional, Sequence

import mysql.connector
from mysql.connector import errorcode

from ..core.enums import CommandKind
from ..core.exceptions import StorageError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, map_row
from .model import AttendanceEvent
from .repository import AttendanceRepository

_COLUMNS = "event_id, employee_id, kind, event_time, message_id"


def _row_to_event(r: Dict[str, Any]) -> AttendanceEvent:
    event_time = r["event_time"]
    if not isinstance(event_time, datetime):
        raise ValueError(f"event_time is {type(event_time).__name__}, expected datetime")
    message_id = r.get("message_id")
    return AttendanceEvent(
        event_id=int(r["event_id"]),
        employee_id=int(r["employee_id"]),
        kind=CommandKind(r["kind"]),
        timestamp=event_time,
        message_id=int(message_id) if message_id is not None else None,
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def append_event(
        self,
        *,
        employee_id: int,
        kind: CommandKind,
        timestamp: datetime,
        message_id: Optional[int] = None,
    ) -> AttendanceEvent:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_events(employee_id, kind, event_time, message_id)
                    VALUES(%s,%s,%s,%s)
                    """,
                    (int(employee_id), kind.value, timestamp, message_id),
                )
                event_id = int(cur.lastrowid)
        except StorageError as exc:
            # uq_events_message: this message already produced its event.
            cause = exc.__cause__
            if (
                message_id is not None
                and isinstance(cause, mysql.connector.IntegrityError)
                and cause.errno == errorcode.ER_DUP_ENTRY
            ):
                existing = self.find_by_message(message_id)
                if existing:
                    return existing
            raise

        return AttendanceEvent(
            event_id=event_id,
            employee_id=int(employee_id),
            kind=kind,
            timestamp=timestamp,
            message_id=message_id,
        )

    def get_latest_for_employee(self, employee_id: int) -> Optional[AttendanceEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_events
                WHERE employee_id=%s
                ORDER BY event_time DESC, event_id DESC
                LIMIT 1
                """,
                (int(employee_id),),
            )
            row = fetchone(cur)
            return map_row(row, _row_to_event, entity="attendance event") if row else None

    def find_by_message(self, message_id: int) -> Optional[AttendanceEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_events WHERE message_id=%s", (int(message_id),))
            row = fetchone(cur)
            return map_row(row, _row_to_event, entity="attendance event") if row else None

    def list_events(
        self,
        *,
        employee_id: Optional[int] = None,
        day: Optional[date] = None,
    ) -> Sequence[AttendanceEvent]:
        clauses: list[str] = []
        params: list[object] = []

        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(int(employee_id))
        if day is not None:
            clauses.append("event_time BETWEEN %s AND %s")
            params.append(datetime.combine(day, time.min))
            params.append(datetime.combine(day, time.max))

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_events
                {where}
                ORDER BY event_time DESC, event_id DESC
                """,
                tuple(params),
            )
            return [map_row(r, _row_to_event, entity="attendance event") for r in fetchall(cur)]
