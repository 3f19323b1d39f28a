from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import PresenceStatus
from ..core.exceptions import NotFoundError
from ..employees.repository import EmployeeRepository
from ..messaging.repository import MessageRepository
from .model import AttendanceEvent, DashboardStats, EmployeeWithStatus, StatusSnapshot
from .repository import AttendanceRepository
from .resolver import resolve_status


class AttendanceService:
    """Read side: status snapshots and history for dashboards. No side effects."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        messages: MessageRepository,
    ):
        self._attendance = attendance
        self._employees = employees
        self._messages = messages

    def get_status(self, employee_id: int) -> StatusSnapshot:
        return resolve_status(self._attendance.get_latest_for_employee(int(employee_id)))

    def get_employee_status(self, employee_id: int) -> EmployeeWithStatus:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Funcionário não encontrado")
        return EmployeeWithStatus(employee=employee, snapshot=self.get_status(employee.employee_id))

    def list_employees_with_status(self) -> list[EmployeeWithStatus]:
        return [
            EmployeeWithStatus(employee=e, snapshot=self.get_status(e.employee_id))
            for e in self._employees.list_all()
        ]

    def list_records(self, *, employee_id: Optional[int] = None, day: Optional[date] = None) -> Sequence[AttendanceEvent]:
        return self._attendance.list_events(employee_id=employee_id, day=day)

    def get_stats(self) -> DashboardStats:
        statuses = [row.snapshot.status for row in self.list_employees_with_status()]
        return DashboardStats(
            active_employees=self._employees.count_active(),
            present_today=sum(1 for s in statuses if s in {PresenceStatus.WORKING, PresenceStatus.ON_BREAK}),
            on_break=sum(1 for s in statuses if s is PresenceStatus.ON_BREAK),
            messages_processed=self._messages.count_processed(),
        )
