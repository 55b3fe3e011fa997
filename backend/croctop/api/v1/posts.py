"""Post endpoints: CRUD, archive, comments and likes."""

from __future__ import annotations

from flask import Blueprint, request

from croctop.api.deps import envelope, require_auth, service_context, timing
from croctop.schemas import CommentCreateSchema, CommentSchema, PostSchema, PostWriteSchema
from croctop.services.content import (
    CommentService,
    PostCreateIn,
    PostService,
    PostUpdateIn,
    SocialService,
)

bp = Blueprint("posts", __name__)

post_write_schema = PostWriteSchema()
post_schema = PostSchema()
posts_schema = PostSchema(many=True)
comment_create_schema = CommentCreateSchema()
comment_schema = CommentSchema()
comments_schema = CommentSchema(many=True)


# ---------------------------------------------------------------------------
# Posts
# ---------------------------------------------------------------------------


@bp.get("")
@timing
def list_posts():
    """Public listing; archived posts are left out."""

    result = PostService(ctx=service_context()).list_posts()
    return envelope("Posts retrieved", posts_schema.dump(result.items))


@bp.post("")
@require_auth
@timing
def create_post():
    data = post_write_schema.load(request.get_json(silent=True) or {})
    post = PostService(ctx=service_context()).create_post(PostCreateIn(**data))
    return envelope("Post created", post_schema.dump(post), status=201)


@bp.get("/<int:post_id>")
@timing
def get_post(post_id: int):
    post = PostService(ctx=service_context()).get_post(post_id)
    return envelope("Post retrieved", post_schema.dump(post))


@bp.put("/<int:post_id>")
@require_auth
@timing
def update_post(post_id: int):
    """Partial update, author only."""

    data = post_write_schema.load(request.get_json(silent=True) or {}, partial=True)
    post = PostService(ctx=service_context()).update_post(post_id, PostUpdateIn(**data))
    return envelope("Post updated", post_schema.dump(post))


@bp.put("/<int:post_id>/archive")
@require_auth
@timing
def archive_post(post_id: int):
    post = PostService(ctx=service_context()).archive_post(post_id)
    return envelope("Post archived", post_schema.dump(post))


@bp.put("/<int:post_id>/unarchive")
@require_auth
@timing
def unarchive_post(post_id: int):
    post = PostService(ctx=service_context()).unarchive_post(post_id)
    return envelope("Post unarchived", post_schema.dump(post))


@bp.delete("/<int:post_id>")
@require_auth
@timing
def delete_post(post_id: int):
    PostService(ctx=service_context()).delete_post(post_id)
    return envelope("Post deleted")


# ---------------------------------------------------------------------------
# Comments
# ---------------------------------------------------------------------------


@bp.get("/<int:post_id>/comments")
@timing
def list_comments(post_id: int):
    result = CommentService(ctx=service_context()).list_comments(post_id)
    return envelope("Comments retrieved", comments_schema.dump(result.items))


@bp.post("/<int:post_id>/comments")
@require_auth
@timing
def add_comment(post_id: int):
    data = comment_create_schema.load(request.get_json(silent=True) or {})
    comment = CommentService(ctx=service_context()).add_comment(post_id, data["content"])
    return envelope("Comment added", comment_schema.dump(comment), status=201)


@bp.delete("/<int:post_id>/comments/<int:comment_id>")
@require_auth
@timing
def delete_comment(post_id: int, comment_id: int):
    """Only the post author may delete comments on it."""

    CommentService(ctx=service_context()).delete_comment(post_id, comment_id)
    return envelope("Comment deleted")


# ---------------------------------------------------------------------------
# Likes
# ---------------------------------------------------------------------------


@bp.put("/<int:post_id>/like")
@require_auth
@timing
def like_post(post_id: int):
    post = SocialService(ctx=service_context()).like_post(post_id)
    return envelope("Post liked", post_schema.dump(post))


@bp.put("/<int:post_id>/unlike")
@require_auth
@timing
def unlike_post(post_id: int):
    post = SocialService(ctx=service_context()).unlike_post(post_id)
    return envelope("Post unliked", post_schema.dump(post))
