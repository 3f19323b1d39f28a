from __future__ import annotations

from enum import Enum


class CommandKind(str, Enum):
    """Canonical attendance event kinds."""

    CLOCK_IN = "clock_in"
    CLOCK_OUT = "clock_out"
    BREAK_START = "break_start"
    BREAK_END = "break_end"


class PresenceStatus(str, Enum):
    """Derived presence of an employee (never stored)."""

    WORKING = "working"
    ON_BREAK = "on_break"
    OFF_DUTY = "off_duty"
    ABSENT = "absent"


class SettingType(str, Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
