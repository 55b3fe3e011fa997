from __future__ import annotations

from croctop.models import Comment, Post
from croctop.services.users._converters import user_to_summary

from .dto import CommentOut, PostOut


def post_to_out(row: Post) -> PostOut:
    return PostOut(
        id=row.id,
        author=user_to_summary(row.author),
        title=row.title,
        photos=list(row.photos or []),
        category=row.category,
        prep_time=row.prep_time,
        cook_time=row.cook_time,
        allergens=list(row.allergens or []),
        prep_steps=list(row.prep_steps or []),
        ingredients=[dict(i) for i in row.ingredients or []],
        archived=row.archived,
        publish_date=row.publish_date,
        updated_at=row.updated_at,
        likes=[u.id for u in row.likers],
        comments=[c.id for c in row.comments],
    )


def comment_to_out(row: Comment) -> CommentOut:
    return CommentOut(
        id=row.id,
        post_id=row.post_id,
        user=user_to_summary(row.user),
        content=row.content,
        created_at=row.created_at,
    )
