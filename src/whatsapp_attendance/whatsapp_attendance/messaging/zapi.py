"""Outbound replies through Z-API (https://developer.z-api.io)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Protocol

import httpx

from ..core.constants import DEFAULT_ZAPI_BASE_URL, DEFAULT_ZAPI_TIMEOUT_SECONDS
from ..core.exceptions import DeliveryError

logger = logging.getLogger(__name__)


class ReplySender(Protocol):
    def send_text(self, phone: str, message: str) -> None:
        raise NotImplementedError


@dataclass(frozen=True)
class ZApiConfig:
    instance_id: str
    token: str
    client_token: Optional[str] = None
    base_url: str = DEFAULT_ZAPI_BASE_URL
    timeout_seconds: float = DEFAULT_ZAPI_TIMEOUT_SECONDS

    @property
    def send_text_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/instances/{self.instance_id}/token/{self.token}/send-text"


class ZApiClient(ReplySender):
    """Keeps one pooled httpx.Client open until `close()`."""

    def __init__(self, config: ZApiConfig, *, transport: Optional[httpx.BaseTransport] = None):
        self._config = config
        headers = {"Client-Token": config.client_token} if config.client_token else {}
        self._client = httpx.Client(timeout=config.timeout_seconds, headers=headers, transport=transport)

    def send_text(self, phone: str, message: str) -> None:
        # Z-API expects bare digits (country code included), no '+'.
        payload = {"phone": phone.lstrip("+"), "message": message}
        try:
            response = self._client.post(self._config.send_text_url, json=payload)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error("Failed to send WhatsApp reply to %s: %s", phone, e)
            raise DeliveryError(str(e)) from e

    def close(self) -> None:
        self._client.close()


class LoggingReplySender(ReplySender):
    """Used when Z-API credentials are not configured."""

    def send_text(self, phone: str, message: str) -> None:
        logger.info("Z-API not configured, reply to %s not sent: %s", phone, message)
