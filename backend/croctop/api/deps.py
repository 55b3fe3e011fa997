"""Shared API helpers for authentication and cross-cutting concerns."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar

from flask import Response, current_app, g, jsonify, request

from croctop.core.extensions import get_token_service
from croctop.core.logger import ensure_request_id
from croctop.services._shared.base import ServiceContext
from croctop.services.tokens import Identity, authenticate_bearer

F = TypeVar("F", bound=Callable[..., Any])


def require_auth(func: F) -> F:
    """Reject the request unless it carries a valid access token.

    No ``Authorization`` bearer token raises ``UnauthenticatedError`` (401);
    a token that fails verification raises ``InvalidTokenError`` (403). On
    success the caller identity is stored on ``g.identity``.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        g.identity = authenticate_bearer(
            request.headers.get("Authorization"), get_token_service()
        )
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def current_identity() -> Identity | None:
    """Return the identity set by :func:`require_auth`, if any."""

    return g.get("identity")


def service_context() -> ServiceContext:
    """Build the request-scoped context handed to services."""

    identity = current_identity()
    return ServiceContext(
        actor_id=identity.user_id if identity else None,
        role=identity.role if identity else None,
        request_id=ensure_request_id(),
    )


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def envelope(message: str, data: Any = None, *, status: int = 200) -> Response:
    """Success body shared by every endpoint: ``{"message", "data"}``."""

    body: dict[str, Any] = {"message": message}
    if data is not None:
        body["data"] = data
    return json_response(body, status=status)


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request.endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
