from __future__ import annotations

import re

from ..core.exceptions import ValidationError

_NON_DIGITS = re.compile(r"\D+")


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} inválido")
    return value.strip()


def normalize_phone(value: str) -> str:
    """Canonical handle: '+' followed by digits only.

    Z-API delivers '5511999999999' while admins type '+55 (11) 99999-9999';
    both must resolve to the same employee.
    """

    digits = _NON_DIGITS.sub("", value or "")
    return f"+{digits}" if digits else ""


def require_phone(value: str, field_name: str = "Telefone") -> str:
    phone = normalize_phone(value)
    if len(phone) < 9:
        raise ValidationError(f"{field_name} inválido")
    return phone
