"""Logging setup and JSON error handlers for the kiosk API."""

from __future__ import annotations

import logging

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from .core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    NoActiveSession,
    RecognitionUnavailable,
    SessionAlreadyClosed,
    UnknownSubject,
    ValidationError,
)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Most specific first: UnknownSubject is also a ValidationError.
_DOMAIN_STATUS = (
    (UnknownSubject, 404, "UNKNOWN_SUBJECT"),
    (AuthenticationError, 401, "UNAUTHENTICATED"),
    (AuthorizationError, 403, "FORBIDDEN"),
    (NoActiveSession, 409, "NO_ACTIVE_SESSION"),
    (SessionAlreadyClosed, 409, "SESSION_ALREADY_CLOSED"),
    (RecognitionUnavailable, 503, "RECOGNITION_UNAVAILABLE"),
    (ValidationError, 400, "VALIDATION_ERROR"),
)


def setup_logging(app: Flask) -> logging.Logger:
    """Console logging for the package and the Flask app at LOG_LEVEL."""

    level_name = str(app.config.get("LOG_LEVEL", "INFO")).upper()
    log_level = getattr(logging, level_name, logging.INFO)

    formatter = logging.Formatter(LOG_FORMAT)
    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)

    package_logger = logging.getLogger("attendance_kiosk")
    package_logger.setLevel(log_level)
    if not package_logger.handlers:
        package_logger.addHandler(console_handler)

    app.logger.setLevel(log_level)
    logging.getLogger("werkzeug").setLevel(log_level)
    return package_logger


def error_body(code: str, message: str):
    return jsonify({"success": False, "code": code, "message": message})


def status_for(error: DomainError) -> tuple[int, str]:
    for exc_type, status, code in _DOMAIN_STATUS:
        if isinstance(error, exc_type):
            return status, code
    return 400, "DOMAIN_ERROR"


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def domain_error(error: DomainError):
        status, code = status_for(error)
        app.logger.info("%s %s -> %s %s: %s", request.method, request.path, status, code, error)
        return error_body(code, str(error)), status

    @app.errorhandler(HTTPException)
    def http_error(error: HTTPException):
        if error.code and error.code >= 500:
            app.logger.error("%s %s -> %s", request.method, request.path, error.code)
        return error_body(error.name.upper().replace(" ", "_"), error.description or error.name), error.code

    @app.errorhandler(Exception)
    def internal_error(error: Exception):
        app.logger.exception("unhandled error on %s %s", request.method, request.path)
        return error_body("INTERNAL_ERROR", "An unexpected error has occurred"), 500
