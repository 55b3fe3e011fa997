"""User-related Marshmallow schemas."""

from __future__ import annotations

from marshmallow import Schema, fields, validate

from croctop.models.user import USER_STATUSES


class UserSummarySchema(Schema):
    id = fields.Integer(required=True)
    username = fields.String(required=True)


class UserSchema(Schema):
    """Public user representation; the password digest is never part of it."""

    id = fields.Integer(required=True)
    username = fields.String(required=True)
    email = fields.Email(required=True)
    firstname = fields.String(allow_none=True)
    lastname = fields.String(allow_none=True)
    birthday = fields.Date(allow_none=True)
    bio = fields.String(allow_none=True)
    picture_avatar = fields.String(allow_none=True)
    status = fields.String(required=True)
    role = fields.String(required=True)
    signup_date = fields.DateTime(allow_none=True)
    last_login = fields.DateTime(allow_none=True)
    followers = fields.List(fields.Integer())
    following = fields.List(fields.Integer())
    posts = fields.List(fields.Integer())


class UserUpdateSchema(Schema):
    """Partial profile update; every field is optional."""

    username = fields.String(validate=validate.Length(min=1, max=50))
    email = fields.Email(validate=validate.Length(max=254))
    password = fields.String(validate=validate.Length(min=1, max=128))
    firstname = fields.String(validate=validate.Length(max=100))
    lastname = fields.String(validate=validate.Length(max=100))
    birthday = fields.Date()
    bio = fields.String()
    picture_avatar = fields.String(validate=validate.Length(max=500))
    status = fields.String(validate=validate.OneOf(USER_STATUSES))


class FollowResponseSchema(Schema):
    user = fields.Nested(UserSchema, required=True)
    target = fields.Nested(UserSchema, required=True)
