"""Status derivation and transition rules.

The employee's presence is a four-state machine driven by the four command
kinds; only the latest event matters.
"""

from __future__ import annotations

from typing import Optional, assert_never

from ..common.datetime_utils import format_hhmm
from ..core.enums import CommandKind, PresenceStatus
from ..core.exceptions import InvalidTransitionError
from .model import AttendanceEvent, StatusSnapshot

ALLOWED_FROM: dict[CommandKind, frozenset[PresenceStatus]] = {
    CommandKind.CLOCK_IN: frozenset({PresenceStatus.ABSENT, PresenceStatus.OFF_DUTY}),
    CommandKind.BREAK_START: frozenset({PresenceStatus.WORKING}),
    CommandKind.BREAK_END: frozenset({PresenceStatus.ON_BREAK}),
    CommandKind.CLOCK_OUT: frozenset({PresenceStatus.WORKING, PresenceStatus.ON_BREAK}),
}


def status_after(kind: CommandKind) -> PresenceStatus:
    match kind:
        case CommandKind.CLOCK_IN | CommandKind.BREAK_END:
            return PresenceStatus.WORKING
        case CommandKind.BREAK_START:
            return PresenceStatus.ON_BREAK
        case CommandKind.CLOCK_OUT:
            return PresenceStatus.OFF_DUTY
        case _:
            assert_never(kind)


def resolve_status(latest: Optional[AttendanceEvent]) -> StatusSnapshot:
    if latest is None:
        return StatusSnapshot(status=PresenceStatus.ABSENT)

    status = status_after(latest.kind)
    # break_end restarts the working period, so it refreshes clock_in_time too.
    clock_in_time = format_hhmm(latest.timestamp) if status is PresenceStatus.WORKING else None
    return StatusSnapshot(
        status=status,
        clock_in_time=clock_in_time,
        last_action=latest.kind,
        last_action_time=latest.timestamp,
    )


def is_allowed(status: PresenceStatus, command: CommandKind) -> bool:
    return status in ALLOWED_FROM[command]


def check_transition(status: PresenceStatus, command: CommandKind) -> None:
    if not is_allowed(status, command):
        raise InvalidTransitionError(command, status)
