"""Comment model."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from croctop.core.extensions import db

from .base import ModelValidationError, PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .post import Post
    from .user import User


class Comment(PKMixin, TimestampMixin, ReprMixin, db.Model):
    """Comment attached to one post; the parent post never changes."""

    __tablename__ = "comments"

    post_id: Mapped[int] = mapped_column(
        ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)

    # Relationships
    post: Mapped[Post] = relationship("Post", back_populates="comments")
    user: Mapped[User] = relationship("User")

    @validates("post_id")
    def _freeze_post_id(self, key: str, value: int) -> int:
        if self.post_id is not None and value != self.post_id:
            raise ModelValidationError("Comment cannot be moved to another post.")
        return value

    @validates("content")
    def _validate_content(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ModelValidationError("Comment content is required.")
        return value.strip()
