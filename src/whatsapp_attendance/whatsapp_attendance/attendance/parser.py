"""Free-text WhatsApp command -> canonical attendance event kind."""

from __future__ import annotations

from typing import Optional

from ..core.enums import CommandKind

COMMAND_TOKENS: dict[str, CommandKind] = {
    "entrada": CommandKind.CLOCK_IN,
    "saida": CommandKind.CLOCK_OUT,
    "saída": CommandKind.CLOCK_OUT,
    "pausa": CommandKind.BREAK_START,
    "volta": CommandKind.BREAK_END,
}


def parse_command(raw_text: Optional[str]) -> Optional[CommandKind]:
    """Return the command for `raw_text`, or None when it is not one of the tokens.

    Exact match after trimming and case folding; no partial matching.
    """

    if not raw_text:
        return None
    return COMMAND_TOKENS.get(raw_text.strip().casefold())
