from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from ..core.enums import CommandKind


@dataclass(frozen=True)
class InboundMessage:
    """Thực thể miền (domain): tin nhắn WhatsApp nhận được.

    Created with processed=False; completed exactly once with the reply.
    """

    message_id: int
    sender: str
    raw_text: str
    received_at: datetime
    processed: bool = False
    response: Optional[str] = None
    command: Optional[CommandKind] = None
    external_id: Optional[str] = None

    def completed(self, response: str, command: Optional[CommandKind]) -> "InboundMessage":
        return replace(self, processed=True, response=response, command=command)

    def to_dict(self) -> dict:
        return {
            "message_id": self.message_id,
            "sender": self.sender,
            "raw_text": self.raw_text,
            "received_at": self.received_at.isoformat(),
            "processed": self.processed,
            "response": self.response,
            "command": self.command.value if self.command else None,
        }
