"""User endpoints: profiles, own archive and follow edges."""

from __future__ import annotations

from flask import Blueprint, request

from croctop.api.deps import envelope, require_auth, service_context, timing
from croctop.schemas import (
    FollowResponseSchema,
    PostSchema,
    UserSchema,
    UserSummarySchema,
    UserUpdateSchema,
)
from croctop.services.content import PostService, SocialService
from croctop.services.users import UserService, UserUpdateIn

bp = Blueprint("users", __name__)

user_schema = UserSchema()
user_summary_schema = UserSummarySchema(many=True)
user_update_schema = UserUpdateSchema()
follow_schema = FollowResponseSchema()
posts_schema = PostSchema(many=True)


@bp.get("")
@require_auth
@timing
def list_users():
    users = UserService(ctx=service_context()).list_users()
    return envelope("Users retrieved", user_summary_schema.dump(users))


@bp.get("/<int:user_id>")
@require_auth
@timing
def get_user(user_id: int):
    user = UserService(ctx=service_context()).get_user(user_id)
    return envelope("User retrieved", user_schema.dump(user))


@bp.put("/me")
@require_auth
@timing
def update_me():
    """Partially update the caller's profile; the password is re-hashed."""

    data = user_update_schema.load(request.get_json(silent=True) or {})
    user = UserService(ctx=service_context()).update_me(UserUpdateIn(**data))
    return envelope("User updated", user_schema.dump(user))


@bp.get("/me/archived-posts")
@require_auth
@timing
def list_archived_posts():
    result = PostService(ctx=service_context()).list_archived_posts()
    return envelope("Archived posts retrieved", posts_schema.dump(result.items))


@bp.get("/<int:user_id>/posts")
@require_auth
@timing
def list_user_posts(user_id: int):
    result = PostService(ctx=service_context()).list_user_posts(user_id)
    return envelope("Posts retrieved", posts_schema.dump(result.items))


@bp.put("/<int:user_id>/follow")
@require_auth
@timing
def follow(user_id: int):
    result = SocialService(ctx=service_context()).follow_user(user_id)
    return envelope("User followed", follow_schema.dump(result))


@bp.put("/<int:user_id>/unfollow")
@require_auth
@timing
def unfollow(user_id: int):
    result = SocialService(ctx=service_context()).unfollow_user(user_id)
    return envelope("User unfollowed", follow_schema.dump(result))
