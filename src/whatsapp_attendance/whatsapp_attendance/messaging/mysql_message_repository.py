from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from ..core.enums import CommandKind
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, map_row, require_value
from .model import InboundMessage
from .repository import MessageRepository

_COLUMNS = "message_id, sender, raw_text, command, processed, response, external_id, received_at"


def _row_to_message(r: Dict[str, Any]) -> InboundMessage:
    received_at = r["received_at"]
    if not isinstance(received_at, datetime):
        raise ValueError(f"received_at is {type(received_at).__name__}, expected datetime")
    return InboundMessage(
        message_id=int(r["message_id"]),
        sender=str(require_value(r, "sender")),
        raw_text=str(require_value(r, "raw_text")),
        received_at=received_at,
        processed=bool(r["processed"]),
        response=r.get("response"),
        command=CommandKind(r["command"]) if r.get("command") else None,
        external_id=r.get("external_id"),
    )


class MySQLMessageRepository(MessageRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        sender: str,
        raw_text: str,
        received_at: datetime,
        external_id: Optional[str] = None,
    ) -> InboundMessage:
        with db_cursor(self._conn_factory) as (_, cur):
            if external_id:
                cur.execute(f"SELECT {_COLUMNS} FROM whatsapp_messages WHERE external_id=%s", (external_id,))
                row = fetchone(cur)
                if row:
                    return map_row(row, _row_to_message, entity="message")

            cur.execute(
                """
                INSERT INTO whatsapp_messages(sender, raw_text, received_at, processed, external_id)
                VALUES(%s,%s,%s,0,%s)
                """,
                (sender, raw_text, received_at, external_id),
            )
            message_id = int(cur.lastrowid)

        return InboundMessage(
            message_id=message_id,
            sender=sender,
            raw_text=raw_text,
            received_at=received_at,
            external_id=external_id,
        )

    def get_by_id(self, message_id: int) -> Optional[InboundMessage]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM whatsapp_messages WHERE message_id=%s", (int(message_id),))
            row = fetchone(cur)
            return map_row(row, _row_to_message, entity="message") if row else None

    def mark_processed(self, message_id: int, response: str, *, command: Optional[CommandKind] = None) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE whatsapp_messages
                SET processed=1, response=%s, command=%s
                WHERE message_id=%s AND processed=0
                """,
                (response, command.value if command else None, int(message_id)),
            )
            return cur.rowcount > 0

    def list_unprocessed(self, *, limit: int) -> Sequence[InboundMessage]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM whatsapp_messages
                WHERE processed=0
                ORDER BY received_at, message_id
                LIMIT %s
                """,
                (int(limit),),
            )
            return [map_row(r, _row_to_message, entity="message") for r in fetchall(cur)]

    def list_recent(self, *, limit: int) -> Sequence[InboundMessage]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM whatsapp_messages
                ORDER BY received_at DESC, message_id DESC
                LIMIT %s
                """,
                (int(limit),),
            )
            return [map_row(r, _row_to_message, entity="message") for r in fetchall(cur)]

    def count_processed(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS total FROM whatsapp_messages WHERE processed=1")
            row = fetchone(cur)
            return int(row["total"]) if row else 0
