from __future__ import annotations

from flask import current_app, jsonify

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    NotFoundError,
    ValidationError,
)

_STATUS_BY_ERROR = (
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (ValidationError, 400),
)


def ok(**payload):
    return jsonify({"success": True, **payload})


def domain_error(exc: DomainError):
    status = next((code for cls, code in _STATUS_BY_ERROR if isinstance(exc, cls)), 400)
    return jsonify({"success": False, "error": str(exc)}), status


def server_error(message: str, exc: Exception):
    if current_app.config.get("DEBUG", False):
        message = f"{message}: {exc}"
    return jsonify({"success": False, "error": message}), 500
