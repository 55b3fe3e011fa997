"""Comment repository."""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import selectinload

from croctop.models.comment import Comment
from croctop.repositories.base import BaseRepository


class CommentRepository(BaseRepository[Comment]):
    """Persistence-only repository for :class:`Comment`."""

    model = Comment

    def _filterable_fields(self):
        return {"post_id": Comment.post_id}

    def _default_eagerload(self, stmt: Any) -> Any:
        return stmt.options(selectinload(Comment.user))

    def list_for_post(self, post_id: int) -> list[Comment]:
        """Comments of one post, oldest first."""
        return self.list(filters={"post_id": post_id})
