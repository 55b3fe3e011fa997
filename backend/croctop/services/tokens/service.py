# croctop/services/tokens/service.py
from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from datetime import UTC, datetime, timedelta
from enum import Enum
from typing import Any

import jwt

from croctop.services._shared.errors import InvalidTokenError

from .dto import Identity, TokenPairOut

logger = logging.getLogger(__name__)

DEFAULT_TTL = timedelta(days=7)


class TokenKind(str, Enum):
    """Token classes; each one is signed with its own secret."""

    ACCESS = "access"
    REFRESH = "refresh"

    @property
    def config_key(self) -> str:
        """Name of the configuration entry holding this kind's signing secret."""
        return f"JWT_{self.name}_SECRET_KEY"


class TokenService:
    """
    Issue and verify access/refresh JWTs.

    The service is stateless: it owns two signing secrets, a lifetime and a
    clock. Refresh tokens are neither rotated nor tracked server-side, so a
    valid refresh token can mint access tokens until it expires.
    """

    def __init__(
        self,
        *,
        secrets: Mapping[TokenKind, str],
        ttl: timedelta = DEFAULT_TTL,
        algorithm: str = "HS256",
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """
        :param secrets: Signing secret per token kind. Both kinds are required
            and must differ.
        :param ttl: Lifetime applied to both kinds.
        :param algorithm: HMAC algorithm understood by PyJWT.
        :param clock: Returns the current aware datetime; defaults to UTC now.
        :raises ValueError: When a secret is missing or both secrets are equal.
        """
        missing = [kind.value for kind in TokenKind if not secrets.get(kind)]
        if missing:
            raise ValueError(f"Missing signing secret for: {', '.join(missing)}")
        if secrets[TokenKind.ACCESS] == secrets[TokenKind.REFRESH]:
            raise ValueError("Access and refresh tokens must use distinct secrets.")
        self._secrets = dict(secrets)
        self.ttl = ttl
        self.algorithm = algorithm
        self._clock = clock or (lambda: datetime.now(UTC))

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> TokenService:
        """Build the service from a Flask config mapping."""
        return cls(
            secrets={kind: config.get(kind.config_key, "") for kind in TokenKind},
            ttl=timedelta(days=int(config.get("JWT_TOKEN_TTL_DAYS", 7))),
            algorithm=config.get("JWT_ALGORITHM", "HS256"),
        )

    # ------------------------------------------------------------------ #
    # Issuing
    # ------------------------------------------------------------------ #

    def issue(self, identity: Identity, kind: TokenKind) -> str:
        """Encode ``identity`` as a token of ``kind``."""
        now = self._clock()
        claims = {
            "sub": str(identity.user_id),
            "role": identity.role,
            "type": kind.value,
            "iat": int(now.timestamp()),
            "exp": int((now + self.ttl).timestamp()),
        }
        return jwt.encode(claims, self._secrets[kind], algorithm=self.algorithm)

    def issue_access_token(self, identity: Identity) -> str:
        return self.issue(identity, TokenKind.ACCESS)

    def issue_refresh_token(self, identity: Identity) -> str:
        return self.issue(identity, TokenKind.REFRESH)

    def issue_pair(self, identity: Identity) -> TokenPairOut:
        return TokenPairOut(
            access_token=self.issue_access_token(identity),
            refresh_token=self.issue_refresh_token(identity),
        )

    # ------------------------------------------------------------------ #
    # Verification
    # ------------------------------------------------------------------ #

    def verify(self, token: str, kind: TokenKind) -> Identity:
        """
        Decode ``token`` with the secret of ``kind``.

        :raises InvalidTokenError: On a bad signature, malformed token, expired
            token, or a token of the other kind. The cause is logged at DEBUG
            level only and never surfaces to callers.
        """
        try:
            claims = jwt.decode(
                token,
                self._secrets[kind],
                algorithms=[self.algorithm],
                options={"require": ["exp", "iat", "sub"]},
            )
        except jwt.PyJWTError as exc:
            logger.debug("Token rejected: kind=%s reason=%s", kind.value, type(exc).__name__)
            raise InvalidTokenError() from exc

        if claims.get("type") != kind.value:
            raise InvalidTokenError()
        try:
            user_id = int(claims["sub"])
        except (TypeError, ValueError) as exc:
            raise InvalidTokenError() from exc
        return Identity(user_id=user_id, role=str(claims.get("role") or "normal"))

    def refresh(self, refresh_token: str) -> str:
        """
        Mint a new access token from a valid refresh token.

        Credentials are not re-checked and the refresh token stays usable.
        """
        identity = self.verify(refresh_token, TokenKind.REFRESH)
        return self.issue_access_token(identity)
