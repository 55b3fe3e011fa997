"""Content services: posts, comments, likes and follows."""

from __future__ import annotations

from .comments import CommentService
from .dto import (
    CommentListOut,
    CommentOut,
    FollowOut,
    IngredientIn,
    PostCreateIn,
    PostListOut,
    PostOut,
    PostUpdateIn,
)
from .posts import PostService
from .social import SocialService

__all__ = [
    "CommentService",
    "PostService",
    "SocialService",
    # DTOs
    "CommentListOut",
    "CommentOut",
    "FollowOut",
    "IngredientIn",
    "PostCreateIn",
    "PostListOut",
    "PostOut",
    "PostUpdateIn",
]
