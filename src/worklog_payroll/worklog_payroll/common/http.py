"""Flask boundary helpers shared by every controller.

Credentials are read from ``Authorization: Bearer <token>`` first and the
login cookie second. Domain errors are turned into ``{"error": ...}`` JSON
bodies with a fixed status per exception type.
"""
from __future__ import annotations

from functools import wraps
from typing import Any, Callable, Optional

from flask import Flask, g, jsonify, request
from werkzeug.exceptions import HTTPException

from ..auth.identity import Identity, IdentityResolver
from ..core.constants import DEFAULT_TOKEN_COOKIE
from ..core.exceptions import (
    AuthenticationError,
    ConflictError,
    DomainError,
    ForbiddenError,
    MissingRateError,
    NotFoundError,
    ValidationError,
)
from ..core.logger import get_logger

logger = get_logger("http")

# Most specific first: InvalidTimeRangeError is a ValidationError
_STATUS_BY_ERROR: tuple[tuple[type, int], ...] = (
    (ValidationError, 400),
    (MissingRateError, 400),
    (AuthenticationError, 401),
    (ForbiddenError, 403),
    (NotFoundError, 404),
    (ConflictError, 409),
)


def status_for(exc: DomainError) -> int:
    for exc_type, status in _STATUS_BY_ERROR:
        if isinstance(exc, exc_type):
            return status
    return 400


def extract_token(cookie_name: str = DEFAULT_TOKEN_COOKIE) -> Optional[str]:
    header = request.headers.get("Authorization", "")
    if header.lower().startswith("bearer "):
        token = header[7:].strip()
        if token:
            return token
    return request.cookies.get(cookie_name) or None


def json_body() -> dict:
    payload = request.get_json(silent=True)
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    return payload


def current_identity() -> Identity:
    return g.identity


def auth_guards(resolver: IdentityResolver, *, cookie_name: str = DEFAULT_TOKEN_COOKIE):
    """Build ``(login_required, admin_required)`` decorators bound to a resolver."""

    def login_required(view: Callable) -> Callable:
        @wraps(view)
        def wrapper(*args, **kwargs):
            g.identity = resolver.resolve(extract_token(cookie_name))
            return view(*args, **kwargs)

        return wrapper

    def admin_required(view: Callable) -> Callable:
        @wraps(view)
        def wrapper(*args, **kwargs):
            identity = resolver.resolve(extract_token(cookie_name))
            g.identity = identity
            if not identity.is_admin:
                logger.warning("Admin route denied", extra={"actor_id": identity.user_id, "path": request.path})
                raise ForbiddenError("Administrator privileges are required")
            return view(*args, **kwargs)

        return wrapper

    return login_required, admin_required


def _error(message: str, status: int, **extra: Any):
    body = {"error": message}
    body.update(extra)
    return jsonify(body), status


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(exc: DomainError):
        status = status_for(exc)
        if isinstance(exc, AuthenticationError) and exc.reason is not None:
            return _error(str(exc), status, reason=exc.reason.value)
        return _error(str(exc), status)

    @app.errorhandler(HTTPException)
    def handle_http_error(exc: HTTPException):
        return _error(exc.description or exc.name, exc.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(exc: Exception):
        identity = g.get("identity")
        logger.exception(
            "Unhandled error",
            extra={
                "method": request.method,
                "path": request.path,
                "view_args": request.view_args,
                "actor_id": identity.user_id if identity else None,
            },
        )
        return _error("Internal server error", 500)
