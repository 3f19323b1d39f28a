from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    """Giao diện (interface) for the employee roster.

    Services depend on this protocol, never on a concrete database.
    """

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_phone(self, phone: str) -> Optional[Employee]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Employee]:
        raise NotImplementedError

    def count_active(self) -> int:
        raise NotImplementedError

    def create(self, *, name: str, phone: str, department: str, is_active: bool = True) -> int:
        raise NotImplementedError

    def update(
        self,
        employee_id: int,
        *,
        name: Optional[str] = None,
        phone: Optional[str] = None,
        department: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> bool:
        raise NotImplementedError
