from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import CommandKind
from .model import AttendanceEvent


class AttendanceRepository(Protocol):
    """Append-only event log: no update, no delete."""

    def append_event(
        self,
        *,
        employee_id: int,
        kind: CommandKind,
        timestamp: datetime,
        message_id: Optional[int] = None,
    ) -> AttendanceEvent:
        """Append one event.

        When `message_id` already produced an event, that event is returned
        instead of inserting a second one.
        """

        raise NotImplementedError

    def get_latest_for_employee(self, employee_id: int) -> Optional[AttendanceEvent]:
        raise NotImplementedError

    def find_by_message(self, message_id: int) -> Optional[AttendanceEvent]:
        raise NotImplementedError

    def list_events(
        self,
        *,
        employee_id: Optional[int] = None,
        day: Optional[date] = None,
    ) -> Sequence[AttendanceEvent]:
        """Events newest first, optionally filtered by employee and calendar day."""

        raise NotImplementedError
