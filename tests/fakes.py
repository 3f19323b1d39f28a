from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional

from src.whatsapp_attendance.whatsapp_attendance.attendance.model import AttendanceEvent
from src.whatsapp_attendance.whatsapp_attendance.core.enums import CommandKind, SettingType
from src.whatsapp_attendance.whatsapp_attendance.core.exceptions import StorageError
from src.whatsapp_attendance.whatsapp_attendance.employees.model import Employee
from src.whatsapp_attendance.whatsapp_attendance.messaging.model import InboundMessage
from src.whatsapp_attendance.whatsapp_attendance.settings.model import Setting


class InMemoryEmployees:
    def __init__(self, *employees: Employee):
        self._by_id: dict[int, Employee] = {e.employee_id: e for e in employees}
        self._id = max(self._by_id, default=0)

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self._by_id.get(employee_id)

    def get_by_phone(self, phone: str) -> Optional[Employee]:
        return next((e for e in self._by_id.values() if e.phone == phone), None)

    def list_all(self):
        return sorted(self._by_id.values(), key=lambda e: e.name)

    def count_active(self) -> int:
        return sum(1 for e in self._by_id.values() if e.is_active)

    def create(self, *, name: str, phone: str, department: str, is_active: bool = True) -> int:
        self._id += 1
        self._by_id[self._id] = Employee(
            employee_id=self._id, name=name, phone=phone, department=department, is_active=is_active
        )
        return self._id

    def update(self, employee_id: int, *, name=None, phone=None, department=None, is_active=None) -> bool:
        current = self._by_id.get(employee_id)
        if not current:
            return False
        changes = {
            k: v
            for k, v in {"name": name, "phone": phone, "department": department, "is_active": is_active}.items()
            if v is not None
        }
        self._by_id[employee_id] = replace(current, **changes)
        return True


class InMemoryAttendance:
    def __init__(self):
        self.events: list[AttendanceEvent] = []

    def append_event(
        self,
        *,
        employee_id: int,
        kind: CommandKind,
        timestamp: datetime,
        message_id: Optional[int] = None,
    ) -> AttendanceEvent:
        if message_id is not None:
            existing = self.find_by_message(message_id)
            if existing:
                return existing
        event = AttendanceEvent(
            event_id=len(self.events) + 1,
            employee_id=employee_id,
            kind=kind,
            timestamp=timestamp,
            message_id=message_id,
        )
        self.events.append(event)
        return event

    def get_latest_for_employee(self, employee_id: int) -> Optional[AttendanceEvent]:
        mine = [e for e in self.events if e.employee_id == employee_id]
        return max(mine, key=lambda e: (e.timestamp, e.event_id), default=None)

    def find_by_message(self, message_id: int) -> Optional[AttendanceEvent]:
        return next((e for e in self.events if e.message_id == message_id), None)

    def list_events(self, *, employee_id: Optional[int] = None, day: Optional[date] = None):
        items = [
            e
            for e in self.events
            if (employee_id is None or e.employee_id == employee_id)
            and (day is None or e.timestamp.date() == day)
        ]
        return sorted(items, key=lambda e: (e.timestamp, e.event_id), reverse=True)


class BrokenAttendance(InMemoryAttendance):
    """Reads work, every append fails like an unreachable database."""

    def append_event(self, **kwargs) -> AttendanceEvent:
        raise StorageError("connection refused")


class InMemoryMessages:
    def __init__(self):
        self._by_id: dict[int, InboundMessage] = {}
        self.mark_calls = 0

    def create(self, *, sender: str, raw_text: str, received_at: datetime, external_id: Optional[str] = None):
        if external_id:
            for m in self._by_id.values():
                if m.external_id == external_id:
                    return m
        message = InboundMessage(
            message_id=len(self._by_id) + 1,
            sender=sender,
            raw_text=raw_text,
            received_at=received_at,
            external_id=external_id,
        )
        self._by_id[message.message_id] = message
        return message

    def get_by_id(self, message_id: int) -> Optional[InboundMessage]:
        return self._by_id.get(message_id)

    def mark_processed(self, message_id: int, response: str, *, command: Optional[CommandKind] = None) -> bool:
        self.mark_calls += 1
        current = self._by_id.get(message_id)
        if not current or current.processed:
            return False
        self._by_id[message_id] = current.completed(response, command)
        return True

    def list_unprocessed(self, *, limit: int):
        return [m for m in sorted(self._by_id.values(), key=lambda m: m.message_id) if not m.processed][:limit]

    def list_recent(self, *, limit: int):
        return sorted(self._by_id.values(), key=lambda m: m.message_id, reverse=True)[:limit]

    def count_processed(self) -> int:
        return sum(1 for m in self._by_id.values() if m.processed)


class InMemorySettings:
    def __init__(self):
        self._by_key: dict[str, Setting] = {}

    def get(self, key: str) -> Optional[Setting]:
        return self._by_key.get(key)

    def upsert(self, *, key: str, value: str, type: SettingType) -> Setting:
        self._by_key[key] = Setting(key=key, value=value, type=type, updated_at=datetime(2026, 3, 2, 9, 0))
        return self._by_key[key]

    def list_all(self):
        return [self._by_key[k] for k in sorted(self._by_key)]


class FixedClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


class RecordingSender:
    def __init__(self, error: Optional[Exception] = None):
        self.sent: list[tuple[str, str]] = []
        self._error = error

    def send_text(self, phone: str, message: str) -> None:
        if self._error:
            raise self._error
        self.sent.append((phone, message))
