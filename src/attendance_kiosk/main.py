from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .admin.controller import register as register_admin
from .attendance.controller import register as register_attendance
from .config import get_settings_module
from .container import build_container
from .database.bootstrap import apply_schema, list_tables
from .error_handlers import register_error_handlers, setup_logging
from .gate.controller import register as register_gate
from .recognition.base import RecognitionGateway

logger = logging.getLogger(__name__)


def load_settings(settings_module: Optional[str] = None) -> dict:
    module = importlib.import_module(settings_module or get_settings_module())
    return {k: getattr(module, k) for k in dir(module) if k.isupper()}


def create_app(overrides: Optional[dict] = None, *, gateway: Optional[RecognitionGateway] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings = load_settings()
    settings.update(overrides or {})

    app.secret_key = settings["SECRET_KEY"]
    app.config["DEBUG"] = bool(settings.get("DEBUG", False))
    app.config["TESTING"] = bool(settings.get("TESTING", False))
    app.config["LOG_LEVEL"] = settings.get("LOG_LEVEL", "INFO")

    setup_logging(app)
    register_error_handlers(app)

    container = build_container(settings=settings, gateway=gateway)

    if settings.get("AUTO_INIT_DB", False):
        apply_schema(container.conn)
        logger.info("schema ready at %s (tables=%d)", container.conn.path, len(list_tables(container.conn)))

    register_gate(app, container)
    register_attendance(app, container)
    register_admin(app, container)

    app.extensions["attendance_kiosk"] = container
    return app
