from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import normalize_phone, require_non_empty
from ..core.constants import AUTO_REPLY_KEY, DEFAULT_RECENT_MESSAGES
from ..core.exceptions import DeliveryError, ValidationError
from ..settings.service import SettingsService
from .model import InboundMessage
from .pipeline import MessageProcessor
from .repository import MessageRepository
from .zapi import ReplySender

logger = logging.getLogger(__name__)


class WhatsAppService:
    """Use case: store an incoming text, run it through the pipeline, reply."""

    def __init__(
        self,
        messages: MessageRepository,
        processor: MessageProcessor,
        sender: ReplySender,
        *,
        settings: Optional[SettingsService] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._messages = messages
        self._processor = processor
        self._sender = sender
        self._settings = settings
        self._clock = clock

    def receive(
        self,
        *,
        phone: str,
        text: str,
        external_id: Optional[str] = None,
        received_at: Optional[datetime] = None,
        deliver: bool = True,
    ) -> InboundMessage:
        handle = normalize_phone(phone)
        if not handle:
            raise ValidationError("Telefone inválido")
        if text is None:
            raise ValidationError("Mensagem inválida")

        stored = self._messages.create(
            sender=handle,
            raw_text=text,
            received_at=received_at or self._clock(),
            external_id=external_id,
        )
        if stored.processed:
            # Provider redelivery of a message we already answered.
            return stored

        processed = self._processor.process(stored)
        if deliver and processed.response and self._auto_reply():
            try:
                self._sender.send_text(handle, processed.response)
            except DeliveryError:
                logger.warning("Reply for message %s stored but not delivered", processed.message_id)
        return processed

    def simulate(self, *, phone: str, text: str) -> InboundMessage:
        """Test console: full pipeline, reply returned instead of sent."""

        require_non_empty(phone, "Telefone")
        require_non_empty(text, "Mensagem")
        return self.receive(phone=phone, text=text, deliver=False)

    def list_recent(self, *, limit: int = DEFAULT_RECENT_MESSAGES) -> Sequence[InboundMessage]:
        return self._messages.list_recent(limit=max(1, int(limit)))

    def _auto_reply(self) -> bool:
        if self._settings is None:
            return True
        return self._settings.get_bool(AUTO_REPLY_KEY, default=True)
