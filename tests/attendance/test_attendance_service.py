from __future__ import annotations

from datetime import date, datetime

import pytest

from src.whatsapp_attendance.whatsapp_attendance.attendance.service import AttendanceService
from src.whatsapp_attendance.whatsapp_attendance.core.enums import CommandKind, PresenceStatus
from src.whatsapp_attendance.whatsapp_attendance.core.exceptions import NotFoundError
from src.whatsapp_attendance.whatsapp_attendance.employees.model import Employee
from tests.fakes import InMemoryAttendance, InMemoryEmployees, InMemoryMessages

ANA = Employee(employee_id=1, name="Ana", phone="+5511999999999", department="Atendimento")
BRUNO = Employee(employee_id=2, name="Bruno", phone="+5511988887777", department="Logística")
CARLA = Employee(employee_id=3, name="Carla", phone="+5511977776666", department="Financeiro", is_active=False)


def _service():
    attendance = InMemoryAttendance()
    messages = InMemoryMessages()
    svc = AttendanceService(attendance, InMemoryEmployees(ANA, BRUNO, CARLA), messages)
    return svc, attendance, messages


def test_status_without_events_is_absent():
    svc, _, _ = _service()

    snapshot = svc.get_status(ANA.employee_id)

    assert snapshot.status is PresenceStatus.ABSENT
    assert snapshot.clock_in_time is None
    assert snapshot.last_action is None


def test_status_follows_latest_event():
    svc, attendance, _ = _service()
    attendance.append_event(employee_id=1, kind=CommandKind.CLOCK_IN, timestamp=datetime(2026, 3, 2, 8, 5))
    attendance.append_event(employee_id=1, kind=CommandKind.BREAK_START, timestamp=datetime(2026, 3, 2, 12, 0))

    snapshot = svc.get_status(1)

    assert snapshot.status is PresenceStatus.ON_BREAK
    assert snapshot.last_action is CommandKind.BREAK_START
    assert snapshot.last_action_time == datetime(2026, 3, 2, 12, 0)


def test_employee_status_unknown_id_raises_not_found():
    svc, _, _ = _service()

    with pytest.raises(NotFoundError):
        svc.get_employee_status(99)


def test_list_employees_with_status_serializes_snapshot():
    svc, attendance, _ = _service()
    attendance.append_event(employee_id=1, kind=CommandKind.CLOCK_IN, timestamp=datetime(2026, 3, 2, 8, 5))

    rows = {row.employee.name: row.to_dict() for row in svc.list_employees_with_status()}

    assert rows["Ana"]["status"] == "working"
    assert rows["Ana"]["clock_in_time"] == "08:05"
    assert rows["Ana"]["last_action"] == "clock_in"
    assert rows["Bruno"]["status"] == "absent"
    assert rows["Bruno"]["last_action_time"] is None


def test_list_records_filters_by_employee_and_day_newest_first():
    svc, attendance, _ = _service()
    attendance.append_event(employee_id=1, kind=CommandKind.CLOCK_IN, timestamp=datetime(2026, 3, 1, 8, 0))
    attendance.append_event(employee_id=1, kind=CommandKind.CLOCK_IN, timestamp=datetime(2026, 3, 2, 8, 0))
    attendance.append_event(employee_id=1, kind=CommandKind.CLOCK_OUT, timestamp=datetime(2026, 3, 2, 17, 0))
    attendance.append_event(employee_id=2, kind=CommandKind.CLOCK_IN, timestamp=datetime(2026, 3, 2, 9, 0))

    events = svc.list_records(employee_id=1, day=date(2026, 3, 2))

    assert [e.kind for e in events] == [CommandKind.CLOCK_OUT, CommandKind.CLOCK_IN]
    assert len(svc.list_records()) == 4


def test_stats_count_presence_and_processed_messages():
    svc, attendance, messages = _service()
    attendance.append_event(employee_id=1, kind=CommandKind.CLOCK_IN, timestamp=datetime(2026, 3, 2, 8, 0))
    attendance.append_event(employee_id=2, kind=CommandKind.CLOCK_IN, timestamp=datetime(2026, 3, 2, 8, 10))
    attendance.append_event(employee_id=2, kind=CommandKind.BREAK_START, timestamp=datetime(2026, 3, 2, 12, 0))
    done = messages.create(sender=ANA.phone, raw_text="entrada", received_at=datetime(2026, 3, 2, 8, 0))
    messages.mark_processed(done.message_id, "ok")
    messages.create(sender=ANA.phone, raw_text="pausa", received_at=datetime(2026, 3, 2, 12, 0))

    stats = svc.get_stats()

    assert stats.active_employees == 2
    assert stats.present_today == 2
    assert stats.on_break == 1
    assert stats.messages_processed == 1
