from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..container import Container
from ..core.constants import DEFAULT_PENDING_BATCH, DEFAULT_RECENT_MESSAGES
from ..core.exceptions import StorageError
from .webhook import parse_zapi_payload

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/whatsapp/webhook", methods=["POST"], endpoint="whatsapp_webhook")
    def whatsapp_webhook():
        incoming = parse_zapi_payload(request.get_json(silent=True) or {})
        if incoming is None:
            return jsonify({"success": True, "ignored": True})

        try:
            message = container.whatsapp_service.receive(
                phone=incoming.phone,
                text=incoming.text,
                external_id=incoming.external_id,
                received_at=incoming.sent_at,
            )
        except StorageError:
            # Non-2xx makes Z-API redeliver; the message stays unprocessed meanwhile.
            logger.exception("Webhook message from %s could not be stored/processed", incoming.phone)
            return jsonify({"success": False, "message": "Armazenamento indisponível"}), 503

        return jsonify({"success": True, "message_id": message.message_id, "processed": message.processed})

    @app.route("/api/whatsapp/simulate", methods=["POST"], endpoint="whatsapp_simulate")
    def whatsapp_simulate():
        data = request.get_json(silent=True) or {}
        message = container.whatsapp_service.simulate(
            phone=str(data.get("phone", "")),
            text=str(data.get("message", "")),
        )
        return jsonify({"success": True, **message.to_dict()})

    @app.route("/api/whatsapp/messages", methods=["GET"], endpoint="whatsapp_messages")
    def whatsapp_messages():
        limit = request.args.get("limit", type=int) or DEFAULT_RECENT_MESSAGES
        return jsonify([m.to_dict() for m in container.whatsapp_service.list_recent(limit=limit)])

    @app.route("/api/whatsapp/process-pending", methods=["POST"], endpoint="whatsapp_process_pending")
    def whatsapp_process_pending():
        limit = request.args.get("limit", type=int) or DEFAULT_PENDING_BATCH
        done = container.message_processor.process_pending(limit=limit)
        return jsonify({"success": True, "processed": [m.message_id for m in done]})
