from __future__ import annotations

from typing import Optional, Sequence

from ..common.validators import require_non_empty, require_phone
from ..core.exceptions import NotFoundError, ValidationError
from .model import Employee
from .repository import EmployeeRepository


class EmployeeService:
    """Use case: manage the roster (admin). The message pipeline only reads it."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def get(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Funcionário não encontrado")
        return employee

    def list_all(self) -> Sequence[Employee]:
        return self._employees.list_all()

    def create(self, *, name: str, phone: str, department: str, is_active: bool = True) -> Employee:
        name = require_non_empty(name, "Nome")
        department = require_non_empty(department, "Departamento")
        phone = require_phone(phone)

        if self._employees.get_by_phone(phone):
            raise ValidationError("Telefone já cadastrado")

        employee_id = self._employees.create(name=name, phone=phone, department=department, is_active=is_active)
        return self.get(employee_id)

    def update(
        self,
        employee_id: int,
        *,
        name: Optional[str] = None,
        phone: Optional[str] = None,
        department: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> Employee:
        current = self.get(employee_id)

        if name is not None:
            name = require_non_empty(name, "Nome")
        if department is not None:
            department = require_non_empty(department, "Departamento")
        if phone is not None:
            phone = require_phone(phone)
            owner = self._employees.get_by_phone(phone)
            if owner and owner.employee_id != current.employee_id:
                raise ValidationError("Telefone já cadastrado")

        self._employees.update(
            current.employee_id,
            name=name,
            phone=phone,
            department=department,
            is_active=is_active,
        )
        return self.get(current.employee_id)

    def set_active(self, employee_id: int, *, is_active: bool) -> Employee:
        return self.update(employee_id, is_active=is_active)
