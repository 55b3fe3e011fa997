"""Signed session tokens (access/refresh) and bearer-header authentication."""

from __future__ import annotations

from .bearer import authenticate_bearer, parse_bearer
from .dto import Identity, TokenPairOut
from .service import TokenKind, TokenService

__all__ = [
    "Identity",
    "TokenKind",
    "TokenPairOut",
    "TokenService",
    "authenticate_bearer",
    "parse_bearer",
]
