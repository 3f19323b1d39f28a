from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import CommandKind
from .model import InboundMessage


class MessageRepository(Protocol):
    def create(
        self,
        *,
        sender: str,
        raw_text: str,
        received_at: datetime,
        external_id: Optional[str] = None,
    ) -> InboundMessage:
        """Store a new unprocessed message.

        A provider redelivery (same `external_id`) returns the stored message.
        """

        raise NotImplementedError

    def get_by_id(self, message_id: int) -> Optional[InboundMessage]:
        raise NotImplementedError

    def mark_processed(self, message_id: int, response: str, *, command: Optional[CommandKind] = None) -> bool:
        """Flip processed 0 -> 1. Returns False when it was already processed."""

        raise NotImplementedError

    def list_unprocessed(self, *, limit: int) -> Sequence[InboundMessage]:
        raise NotImplementedError

    def list_recent(self, *, limit: int) -> Sequence[InboundMessage]:
        raise NotImplementedError

    def count_processed(self) -> int:
        raise NotImplementedError
