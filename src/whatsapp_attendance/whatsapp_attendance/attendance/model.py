from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import CommandKind, PresenceStatus
from ..employees.model import Employee


@dataclass(frozen=True)
class AttendanceEvent:
    """Thực thể miền (domain): AttendanceEvent (immutable, append-only)."""

    event_id: int
    employee_id: int
    kind: CommandKind
    timestamp: datetime
    message_id: Optional[int] = None


@dataclass(frozen=True)
class StatusSnapshot:
    """Read-model for dashboards: projection of the latest event."""

    status: PresenceStatus
    clock_in_time: Optional[str] = None
    last_action: Optional[CommandKind] = None
    last_action_time: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "clock_in_time": self.clock_in_time,
            "last_action": self.last_action.value if self.last_action else None,
            "last_action_time": self.last_action_time.isoformat() if self.last_action_time else None,
        }


@dataclass(frozen=True)
class EmployeeWithStatus:
    employee: Employee
    snapshot: StatusSnapshot

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee.employee_id,
            "name": self.employee.name,
            "phone": self.employee.phone,
            "department": self.employee.department,
            "is_active": self.employee.is_active,
            **self.snapshot.to_dict(),
        }


@dataclass(frozen=True)
class DashboardStats:
    active_employees: int
    present_today: int
    on_break: int
    messages_processed: int
