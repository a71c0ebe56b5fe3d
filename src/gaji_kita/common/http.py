from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, is_dataclass
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from functools import wraps

from flask import current_app, jsonify, session

from ..core.context import SessionContext
from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    NotFoundError,
    StorageError,
    ValidationError,
)

_STATUS_BY_ERROR = (
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (ValidationError, 400),
)


def json_error(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def error_response(e: Exception):
    """Map an exception raised by a service to a JSON error response."""
    if isinstance(e, DomainError) and not isinstance(e, StorageError):
        for error_type, status in _STATUS_BY_ERROR:
            if isinstance(e, error_type):
                return json_error(str(e), status)

    current_app.logger.exception("Unhandled error: %s", e)
    if bool(current_app.config.get("DEBUG", False)):
        return json_error(f"Terjadi kesalahan sistem: {e}", 500)
    return json_error("Terjadi kesalahan sistem", 500)


def json_endpoint(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except Exception as e:
            return error_response(e)

    return wrapper


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return json_error("Silakan login terlebih dahulu", 401)
        return view(*args, **kwargs)

    return wrapper


def current_context() -> SessionContext:
    """Build the caller's context from the Flask session."""
    if "user_id" not in session:
        raise AuthenticationError("Silakan login terlebih dahulu")
    try:
        role = Role(session.get("role"))
    except ValueError:
        raise AuthorizationError("Peran pengguna tidak dikenal")
    return SessionContext(user_id=int(session["user_id"]), full_name=session.get("name") or "", role=role)


def ok(payload: dict | None = None, status: int = 200):
    body = {"success": True}
    body.update(payload or {})
    return jsonify(body), status


def to_json(value):
    """Convert dataclasses, dates, Decimals and enums into JSON-friendly values."""
    if is_dataclass(value) and not isinstance(value, type):
        return {k: to_json(v) for k, v in asdict(value).items()}
    if isinstance(value, Mapping):
        return {str(k): to_json(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json(v) for v in value]
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (date, datetime, time)):
        return value.isoformat()
    return value
