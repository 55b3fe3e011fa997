"""Bearer-header authentication shared by every protected endpoint."""

from __future__ import annotations

from croctop.services._shared.errors import UnauthenticatedError

from .dto import Identity
from .service import TokenKind, TokenService

BEARER_SCHEME = "bearer"


def parse_bearer(header: str | None) -> str | None:
    """Return the token from ``Bearer <token>``, or ``None`` when absent."""
    if not header:
        return None
    parts = header.split()
    if len(parts) != 2 or parts[0].lower() != BEARER_SCHEME:
        return None
    return parts[1]


def authenticate_bearer(header: str | None, tokens: TokenService) -> Identity:
    """
    Resolve an ``Authorization`` header into the caller identity.

    A missing token and an invalid one are different failures: the first
    raises :class:`UnauthenticatedError` without touching the token service,
    the second propagates :class:`InvalidTokenError` from verification.
    """
    token = parse_bearer(header)
    if token is None:
        raise UnauthenticatedError("Missing bearer token")
    return tokens.verify(token, TokenKind.ACCESS)
