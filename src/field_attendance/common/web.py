"""Shared helpers for the JSON controllers."""

from __future__ import annotations

import logging
from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from enum import Enum
from functools import wraps
from typing import Any

from flask import jsonify, session

from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from ..users.model import Identity

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (ConflictError, 409),
)


def current_identity() -> Identity:
    """Identity put in the session by the sign-in layer."""
    if "user_id" not in session:
        raise AuthenticationError("Access token required")
    manager_id = session.get("manager_id")
    try:
        role = Role(session.get("role", Role.EMPLOYEE.value))
    except ValueError:
        raise AuthenticationError("Invalid session role") from None
    return Identity(
        user_id=int(session["user_id"]),
        role=role,
        manager_id=int(manager_id) if manager_id is not None else None,
    )


def to_json(value: Any) -> Any:
    if is_dataclass(value) and not isinstance(value, type):
        return to_json(asdict(value))
    if isinstance(value, dict):
        return {k: to_json(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [to_json(v) for v in value]
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d %H:%M:%S")
    if isinstance(value, date):
        return value.isoformat()
    return value


def ok(data: Any, status: int = 200):
    return jsonify({"success": True, "data": to_json(data)}), status


def error_response(exc: Exception):
    if isinstance(exc, DomainError):
        status = next((code for kind, code in _STATUS_BY_ERROR if isinstance(exc, kind)), 400)
        return jsonify({"success": False, "error": exc.kind, "message": str(exc)}), status

    logger.exception("Unhandled error while serving request")
    return jsonify({"success": False, "error": "internal_error", "message": "Internal server error"}), 500


def api_view(*, manager_only: bool = False):
    """Resolve the caller, run the view, and map errors to JSON responses.

    The wrapped view receives the Identity as its first argument.
    """

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                identity = current_identity()
                if manager_only and not identity.is_manager:
                    raise AuthorizationError("Manager access required")
                return view(identity, *args, **kwargs)
            except Exception as exc:
                return error_response(exc)

        return wrapper

    return decorator
