from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .core.exceptions import DomainError, NotFoundError, StorageError, ValidationError
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .employees.controller import register as register_employees
from .messaging.controller import register as register_messaging
from .messaging.zapi import ZApiConfig
from .settings.controller import register as register_settings

logger = logging.getLogger(__name__)

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def _zapi_config(settings) -> Optional[ZApiConfig]:
    instance_id = getattr(settings, "ZAPI_INSTANCE_ID", "")
    token = getattr(settings, "ZAPI_TOKEN", "")
    if not instance_id or not token:
        return None
    return ZApiConfig(
        instance_id=instance_id,
        token=token,
        client_token=getattr(settings, "ZAPI_CLIENT_TOKEN", "") or None,
        base_url=getattr(settings, "ZAPI_BASE_URL", "https://api.z-api.io"),
        timeout_seconds=float(getattr(settings, "ZAPI_TIMEOUT_SECONDS", 10)),
    )


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def _validation_error(e: ValidationError):
        return jsonify({"success": False, "message": str(e)}), 400

    @app.errorhandler(NotFoundError)
    def _not_found(e: NotFoundError):
        return jsonify({"success": False, "message": str(e)}), 404

    @app.errorhandler(DomainError)
    def _domain_error(e: DomainError):
        return jsonify({"success": False, "message": str(e)}), 422

    @app.errorhandler(StorageError)
    def _storage_error(e: StorageError):
        logger.error("Storage failure: %s", e)
        return jsonify({"success": False, "message": "Erro no banco de dados"}), 503


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
            logger.info("demo seed ready")

        zapi_config = _zapi_config(settings)
        if zapi_config is None:
            logger.warning("ZAPI_INSTANCE_ID/ZAPI_TOKEN not set: replies will only be logged")

        container = build_container(
            db_config=db_config,
            zapi_config=zapi_config,
            enforce_transitions=bool(getattr(settings, "ENFORCE_TRANSITIONS", True)),
        )

    _register_error_handlers(app)
    register_employees(app, container)
    register_attendance(app, container)
    register_messaging(app, container)
    register_settings(app, container)

    return app
