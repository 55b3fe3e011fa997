"""Authentication endpoints: signup, signin, token refresh and whoami."""

from __future__ import annotations

from flask import Blueprint, request

from croctop.api.deps import envelope, require_auth, service_context, timing
from croctop.core.extensions import get_token_service
from croctop.schemas import (
    AccessTokenSchema,
    RefreshSchema,
    SigninResponseSchema,
    SigninSchema,
    SignupSchema,
    UserSchema,
)
from croctop.services.auth import AuthService, SigninIn, SignupIn
from croctop.services.users import UserService

bp = Blueprint("auth", __name__)

signup_schema = SignupSchema()
signin_schema = SigninSchema()
refresh_schema = RefreshSchema()
user_schema = UserSchema()
signin_response_schema = SigninResponseSchema()
access_token_schema = AccessTokenSchema()


def _auth_service() -> AuthService:
    return AuthService(tokens=get_token_service(), ctx=service_context())


@bp.post("/signup")
@timing
def signup():
    """Create an account and return it (201)."""

    data = signup_schema.load(request.get_json(silent=True) or {})
    user = _auth_service().signup(SignupIn(**data))
    return envelope("User created", user_schema.dump(user), status=201)


@bp.post("/signin")
@timing
def signin():
    """Exchange credentials for an access/refresh token pair."""

    data = signin_schema.load(request.get_json(silent=True) or {})
    result = _auth_service().signin(SigninIn(**data))
    return envelope("Signed in", signin_response_schema.dump(result))


@bp.post("/token")
@timing
def refresh_token():
    """Mint a new access token from ``{"token": <refresh token>}``."""

    data = refresh_schema.load(request.get_json(silent=True) or {})
    result = _auth_service().refresh(data.get("token"))
    return envelope("Token refreshed", access_token_schema.dump(result))


@bp.get("/whoami")
@require_auth
@timing
def whoami():
    user = UserService(ctx=service_context()).get_me()
    return envelope("Authenticated", user_schema.dump(user))
