"""Post repository: visibility-aware listings and like edges."""

from __future__ import annotations

from typing import Any

from sqlalchemy import delete, insert, select
from sqlalchemy.orm import selectinload

from croctop.models.post import Post, post_likes
from croctop.repositories.base import BaseRepository


class PostRepository(BaseRepository[Post]):
    """Persistence-only repository for :class:`Post`."""

    model = Post

    def _filterable_fields(self):
        return {"author_id": Post.author_id, "archived": Post.archived}

    def _updatable_fields(self):
        return {
            "title",
            "photos",
            "category",
            "prep_time",
            "cook_time",
            "allergens",
            "prep_steps",
            "ingredients",
            "archived",
        }

    def _default_eagerload(self, stmt: Any) -> Any:
        # Post representations always carry author, likers and comment ids
        return stmt.options(
            selectinload(Post.author),
            selectinload(Post.likers),
            selectinload(Post.comments),
        )

    # ---------------------------- Listings ----------------------------

    def list_public(self) -> list[Post]:
        """Non-archived posts of every author, oldest first."""
        return self.list(filters={"archived": False})

    def list_by_author(self, author_id: int, *, archived: bool = False) -> list[Post]:
        return self.list(filters={"author_id": author_id, "archived": archived})

    # ---------------------------- Like edges ----------------------------

    def has_like(self, post_id: int, user_id: int) -> bool:
        stmt = select(post_likes.c.post_id).where(
            post_likes.c.post_id == post_id, post_likes.c.user_id == user_id
        )
        return self.session.execute(stmt.limit(1)).first() is not None

    def add_like(self, post_id: int, user_id: int) -> None:
        """Insert the like; a duplicate raises ``IntegrityError``."""
        self.session.execute(insert(post_likes).values(post_id=post_id, user_id=user_id))

    def remove_like(self, post_id: int, user_id: int) -> bool:
        """Delete the like. Returns ``False`` when the user had not liked it."""
        result = self.session.execute(
            delete(post_likes).where(
                post_likes.c.post_id == post_id, post_likes.c.user_id == user_id
            )
        )
        return bool(result.rowcount)

    def clear_likes(self, post_id: int) -> int:
        """Delete every like of a post; returns the number of removed rows."""
        result = self.session.execute(delete(post_likes).where(post_likes.c.post_id == post_id))
        return int(result.rowcount or 0)
