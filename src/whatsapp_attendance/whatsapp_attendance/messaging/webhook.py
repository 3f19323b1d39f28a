from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional

from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class IncomingText:
    phone: str
    text: str
    external_id: Optional[str] = None
    sent_at: Optional[datetime] = None


def parse_zapi_payload(payload: Mapping[str, Any]) -> Optional[IncomingText]:
    """Extract a text message from a Z-API "on-message-received" callback.

    Returns None for callbacks that carry no employee command: our own
    messages, group messages, status updates and media without text.
    Raises ValidationError when the body is not a Z-API callback at all.
    """

    if not isinstance(payload, Mapping):
        raise ValidationError("Payload inválido")

    if payload.get("fromMe") or payload.get("isGroup"):
        return None

    phone = str(payload.get("phone") or "").strip()
    if not phone:
        raise ValidationError("Campo 'phone' ausente")

    text = payload.get("text")
    message = text.get("message") if isinstance(text, Mapping) else None
    if not isinstance(message, str):
        return None

    sent_at = None
    # "momment" (sic) is Z-API's epoch-millis field name.
    moment = payload.get("momment")
    if isinstance(moment, (int, float)) and moment > 0:
        sent_at = datetime.fromtimestamp(moment / 1000)

    external_id = payload.get("messageId")
    return IncomingText(
        phone=phone,
        text=message,
        external_id=str(external_id) if external_id else None,
        sent_at=sent_at,
    )
