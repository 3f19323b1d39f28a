from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, map_row, require_value
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = "employee_id, name, phone, department, is_active, created_at"


def _row_to_employee(r: Dict[str, Any]) -> Employee:
    return Employee(
        employee_id=int(r["employee_id"]),
        name=str(require_value(r, "name")),
        phone=str(require_value(r, "phone")),
        department=str(require_value(r, "department")),
        is_active=bool(r["is_active"]),
        created_at=r.get("created_at"),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s", (int(employee_id),))
            row = fetchone(cur)
            return map_row(row, _row_to_employee, entity="employee") if row else None

    def get_by_phone(self, phone: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE phone=%s", (phone,))
            row = fetchone(cur)
            return map_row(row, _row_to_employee, entity="employee") if row else None

    def list_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees ORDER BY name")
            return [map_row(r, _row_to_employee, entity="employee") for r in fetchall(cur)]

    def count_active(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS total FROM employees WHERE is_active=1")
            row = fetchone(cur)
            return int(row["total"]) if row else 0

    def create(self, *, name: str, phone: str, department: str, is_active: bool = True) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employees(name, phone, department, is_active)
                VALUES(%s,%s,%s,%s)
                """,
                (name, phone, department, int(bool(is_active))),
            )
            return int(cur.lastrowid)

    def update(
        self,
        employee_id: int,
        *,
        name: Optional[str] = None,
        phone: Optional[str] = None,
        department: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> bool:
        fields: list[str] = []
        params: list[object] = []
        if name is not None:
            fields.append("name=%s")
            params.append(name)
        if phone is not None:
            fields.append("phone=%s")
            params.append(phone)
        if department is not None:
            fields.append("department=%s")
            params.append(department)
        if is_active is not None:
            fields.append("is_active=%s")
            params.append(int(bool(is_active)))
        if not fields:
            return False

        params.append(int(employee_id))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE employees SET {', '.join(fields)} WHERE employee_id=%s", tuple(params))
            return cur.rowcount > 0
