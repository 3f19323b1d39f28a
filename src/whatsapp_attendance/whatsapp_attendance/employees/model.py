from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Employee:
    """Thực thể miền (domain): Employee.

    `phone` is the WhatsApp handle used to match inbound messages; it is
    stored already normalized ('+' and digits).
    """

    employee_id: int
    name: str
    phone: str
    department: str
    is_active: bool = True
    created_at: Optional[datetime] = None
