from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from ..core.enums import SettingType
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/settings", methods=["GET"], endpoint="settings_list")
    def settings_list():
        return jsonify([s.to_dict() for s in container.settings_service.list_all()])

    @app.route("/api/settings/<key>", methods=["PUT"], endpoint="settings_put")
    def settings_put(key: str):
        data = request.get_json(silent=True) or {}
        if "value" not in data:
            raise ValidationError("Campo 'value' ausente")
        setting = container.settings_service.set_value(
            key,
            data["value"],
            data.get("type", SettingType.STRING.value),
        )
        return jsonify(setting.to_dict())
