"""Inbound WhatsApp message -> attendance event, exactly once."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from ..attendance.model import AttendanceEvent
from ..attendance.parser import parse_command
from ..attendance.repository import AttendanceRepository
from ..attendance.resolver import is_allowed, resolve_status
from ..common.datetime_utils import now_local
from ..common.validators import normalize_phone
from ..core.constants import DEFAULT_PENDING_BATCH, ENFORCE_TRANSITIONS_KEY
from ..core.enums import CommandKind
from ..core.exceptions import (
    InvalidTransitionError,
    StorageError,
    UnknownSenderError,
    UnrecognizedCommandError,
)
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..settings.service import SettingsService
from . import responses
from .locks import EmployeeLocks
from .model import InboundMessage
from .repository import MessageRepository

logger = logging.getLogger(__name__)


class MessageProcessor:
    """Processes stored inbound messages.

    Unknown senders, unrecognized commands and disallowed transitions end as
    reply text on a processed message. StorageError propagates and leaves the
    message unprocessed so it can be retried.
    """

    def __init__(
        self,
        employees: EmployeeRepository,
        attendance: AttendanceRepository,
        messages: MessageRepository,
        *,
        settings: Optional[SettingsService] = None,
        locks: Optional[EmployeeLocks] = None,
        clock: Callable[[], datetime] = now_local,
        enforce_transitions: bool = True,
    ):
        self._employees = employees
        self._attendance = attendance
        self._messages = messages
        self._settings = settings
        self._locks = locks or EmployeeLocks()
        self._clock = clock
        self._enforce_default = bool(enforce_transitions)

    def process(self, message: InboundMessage) -> InboundMessage:
        current = self._messages.get_by_id(message.message_id)
        if current is None:
            raise StorageError(f"Message {message.message_id} is not stored")
        if current.processed:
            return current

        command = parse_command(current.raw_text)
        try:
            employee = self._resolve_sender(current.sender)
            if command is None:
                raise UnrecognizedCommandError(current.raw_text)
        except UnknownSenderError as e:
            logger.warning("Message %s from unknown sender %s", current.message_id, e.handle)
            return self._complete(current, responses.UNKNOWN_SENDER, command)
        except UnrecognizedCommandError:
            logger.info("Message %s: unrecognized command %r", current.message_id, current.raw_text)
            return self._complete(current, responses.HELP, None)

        with self._locks.hold(employee.employee_id):
            try:
                event = self._record(employee, command, current)
            except InvalidTransitionError as e:
                logger.warning(
                    "Employee %s: rejected %s while %s (message %s)",
                    employee.employee_id, e.command.value, e.status.value, current.message_id,
                )
                return self._complete(current, responses.invalid_transition(e), command)
            return self._complete(current, responses.confirmation(event), command)

    def process_pending(self, *, limit: int = DEFAULT_PENDING_BATCH) -> list[InboundMessage]:
        done: list[InboundMessage] = []
        for message in self._messages.list_unprocessed(limit=limit):
            try:
                done.append(self.process(message))
            except StorageError:
                logger.exception("Message %s left pending after storage failure", message.message_id)
        return done

    def _resolve_sender(self, sender: str) -> Employee:
        handle = normalize_phone(sender)
        employee = self._employees.get_by_phone(handle) if handle else None
        if not employee or not employee.is_active:
            raise UnknownSenderError(handle or sender)
        return employee

    def _enforce_transitions(self) -> bool:
        if self._settings is None:
            return self._enforce_default
        return self._settings.get_bool(ENFORCE_TRANSITIONS_KEY, default=self._enforce_default)

    def _record(self, employee: Employee, command: CommandKind, message: InboundMessage) -> AttendanceEvent:
        # A previous attempt may have appended the event and crashed before marking the message.
        existing = self._attendance.find_by_message(message.message_id)
        if existing:
            return existing

        snapshot = resolve_status(self._attendance.get_latest_for_employee(employee.employee_id))
        if not is_allowed(snapshot.status, command):
            if self._enforce_transitions():
                raise InvalidTransitionError(command, snapshot.status)
            logger.warning(
                "Employee %s: recording %s while %s (enforcement disabled)",
                employee.employee_id, command.value, snapshot.status.value,
            )

        event = self._attendance.append_event(
            employee_id=employee.employee_id,
            kind=command,
            timestamp=self._clock(),
            message_id=message.message_id,
        )
        logger.info("Employee %s: %s at %s", employee.employee_id, event.kind.value, event.timestamp.isoformat())
        return event

    def _complete(self, message: InboundMessage, response: str, command: Optional[CommandKind]) -> InboundMessage:
        if not self._messages.mark_processed(message.message_id, response, command=command):
            # Someone else completed it first; theirs is the stored outcome.
            stored = self._messages.get_by_id(message.message_id)
            if stored is not None and stored.processed:
                return stored
        return message.completed(response, command)
