"""Marshmallow schemas for request payloads and response bodies."""

from .auth import (
    AccessTokenSchema,
    RefreshSchema,
    SigninResponseSchema,
    SigninSchema,
    SignupSchema,
)
from .post import CommentCreateSchema, CommentSchema, IngredientSchema, PostSchema, PostWriteSchema
from .user import FollowResponseSchema, UserSchema, UserSummarySchema, UserUpdateSchema

__all__ = [
    "AccessTokenSchema",
    "CommentCreateSchema",
    "CommentSchema",
    "FollowResponseSchema",
    "IngredientSchema",
    "PostSchema",
    "PostWriteSchema",
    "RefreshSchema",
    "SigninResponseSchema",
    "SigninSchema",
    "SignupSchema",
    "UserSchema",
    "UserSummarySchema",
    "UserUpdateSchema",
]
