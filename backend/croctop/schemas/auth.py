"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from typing import Any

from marshmallow import Schema, ValidationError, fields, validate, validates_schema

from .user import UserSchema


class SignupSchema(Schema):
    """Input payload for account creation."""

    username = fields.String(required=True, validate=validate.Length(min=1, max=50))
    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(required=True, validate=validate.Length(min=1, max=128))
    firstname = fields.String(load_default=None, validate=validate.Length(max=100))
    lastname = fields.String(load_default=None, validate=validate.Length(max=100))
    birthday = fields.Date(load_default=None)
    bio = fields.String(load_default=None)
    picture_avatar = fields.String(load_default=None, validate=validate.Length(max=500))


class SigninSchema(Schema):
    """Input payload for signin; identify the account by email or username."""

    email = fields.String(load_default=None)
    username = fields.String(load_default=None)
    password = fields.String(required=True)

    @validates_schema
    def require_login(self, data: dict[str, Any], **kwargs: Any) -> None:
        if not data.get("email") and not data.get("username"):
            raise ValidationError("Provide an email or a username.", "email")


class RefreshSchema(Schema):
    """Input payload for ``/auth/token``; a missing token is a 401, not a 400."""

    token = fields.String(load_default=None, allow_none=True)


class SigninResponseSchema(Schema):
    access_token = fields.String(required=True)
    refresh_token = fields.String(required=True)
    user = fields.Nested(UserSchema, required=True)


class AccessTokenSchema(Schema):
    access_token = fields.String(required=True)
