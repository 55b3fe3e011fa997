# croctop/services/auth/service.py
from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime

from sqlalchemy.exc import IntegrityError

from croctop.services._shared.base import BaseService, ServiceContext
from croctop.services._shared.errors import (
    ConflictError,
    InvalidCredentialError,
    UnauthenticatedError,
)
from croctop.services.auth.dto import AccessTokenOut, SigninIn, SigninOut, SignupIn
from croctop.services.tokens import Identity, TokenService
from croctop.services.users._converters import user_to_out
from croctop.services.users.dto import UserOut
from croctop.services.users.service import raise_unique_conflict

logger = logging.getLogger(__name__)


class AuthService(BaseService):
    """
    Account creation and the signin / refresh session lifecycle.

    Signin issues an access and a refresh token signed with distinct secrets.
    Refresh exchanges a valid refresh token for a new access token without
    re-checking credentials; refresh tokens are not rotated or revoked.
    """

    def __init__(
        self,
        *,
        tokens: TokenService,
        ctx: ServiceContext | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        super().__init__(ctx=ctx)
        self.tokens = tokens
        self._clock = clock or (lambda: datetime.now(UTC))

    # ------------------------------------------------------------------ #
    # Signup
    # ------------------------------------------------------------------ #

    def signup(self, dto: SignupIn) -> UserOut:
        """
        Create an account.

        :raises ConflictError: If the email or username is already taken.
        """
        with self.rw_uow() as uow:
            repo = uow.users
            if repo.exists_by_email(dto.email):
                raise ConflictError("User", "email already in use")
            if repo.exists_by_username(dto.username):
                raise ConflictError("User", "username already in use")

            user = repo.model(
                username=dto.username,
                email=dto.email,
                password=dto.password,  # model hashes via setter
                firstname=dto.firstname,
                lastname=dto.lastname,
                birthday=dto.birthday,
                bio=dto.bio,
                picture_avatar=dto.picture_avatar,
            )
            try:
                repo.add(user)
            except IntegrityError as exc:
                raise_unique_conflict(exc)

            logger.info("User signed up", extra={"user_id": user.id})
            return user_to_out(user)

    # ------------------------------------------------------------------ #
    # Signin
    # ------------------------------------------------------------------ #

    def signin(self, dto: SigninIn) -> SigninOut:
        """
        Verify credentials, record ``last_login`` and issue a token pair.

        :raises InvalidCredentialError: Unknown user or wrong password; the two
            cases are reported identically.
        """
        with self.rw_uow() as uow:
            user = uow.users.get_by_login(email=dto.email, username=dto.username)
            if user is None or not user.check_password(dto.password):
                logger.info("Signin rejected")
                raise InvalidCredentialError()

            user.last_login = self._clock()
            uow.users.flush()

            pair = self.tokens.issue_pair(Identity(user_id=user.id, role=user.role))
            logger.info("User signed in", extra={"user_id": user.id})
            return SigninOut(
                access_token=pair.access_token,
                refresh_token=pair.refresh_token,
                user=user_to_out(user),
            )

    # ------------------------------------------------------------------ #
    # Refresh
    # ------------------------------------------------------------------ #

    def refresh(self, refresh_token: str | None) -> AccessTokenOut:
        """
        Mint an access token from a refresh token.

        :raises UnauthenticatedError: When no token is supplied.
        :raises InvalidTokenError: When the token is invalid or expired.
        """
        if not refresh_token:
            raise UnauthenticatedError("Missing refresh token")
        return AccessTokenOut(access_token=self.tokens.refresh(refresh_token))
