"""Recipe post model and the like edge table."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship, synonym, validates

from croctop.core.extensions import db

from .base import ModelValidationError, PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .comment import Comment
    from .user import User

CATEGORIES = (
    "Entrée",
    "Plat principal",
    "Dessert",
    "Boisson",
    "Apéritif",
    "Snack",
)

ALLERGENS = (
    "Gluten",
    "Crustacés",
    "Oeufs",
    "Poissons",
    "Arachides",
    "Soja",
    "Lait",
    "Fruits à coque",
    "Céleri",
    "Moutarde",
    "Sésame",
    "Sulfites",
)

# Composite PK: a user likes a post at most once.
post_likes = Table(
    "post_likes",
    db.metadata,
    Column("post_id", ForeignKey("posts.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
    Index("ix_post_likes_user_id", "user_id"),
)


class Post(PKMixin, TimestampMixin, ReprMixin, db.Model):
    """
    Recipe published by exactly one author.

    Notes
    -----
    - ``author_id`` is fixed at creation; reassigning it raises ``ModelValidationError``.
    - ``archived`` posts are hidden from public listings but still readable
      by id and listed for their owner.
    - ``likers`` is read-only; like edges are written by the graph manager.
    """

    __tablename__ = "posts"
    __repr_label__ = "title"

    author_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    photos: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    category: Mapped[str] = mapped_column(String(50), nullable=False)
    prep_time: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    cook_time: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    allergens: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    prep_steps: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    ingredients: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    archived: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    publish_date = synonym("created_at")

    __table_args__ = (
        CheckConstraint("prep_time >= 0", name="prep_time_non_negative"),
        CheckConstraint("cook_time >= 0", name="cook_time_non_negative"),
        Index("ix_posts_archived_id", "archived", "id"),
    )

    # Relationships
    author: Mapped[User] = relationship("User", back_populates="posts")
    comments: Mapped[list[Comment]] = relationship(
        "Comment",
        back_populates="post",
        order_by="Comment.id",
        cascade="all, delete-orphan",
    )
    likers: Mapped[list[User]] = relationship(
        "User",
        secondary=post_likes,
        order_by="User.id",
        viewonly=True,
    )

    @validates("author_id")
    def _freeze_author_id(self, key: str, value: int) -> int:
        if self.author_id is not None and value != self.author_id:
            raise ModelValidationError("Post author cannot be changed.")
        return value

    @validates("author")
    def _freeze_author(self, key: str, value: User | None) -> User | None:
        # ``None`` is the detach step of deleting the post
        current = self.author
        if value is not None and current is not None and value is not current:
            raise ModelValidationError("Post author cannot be changed.")
        return value

    @validates("category")
    def _validate_category(self, key: str, value: str) -> str:
        if value not in CATEGORIES:
            raise ModelValidationError(f"Category must be one of: {', '.join(CATEGORIES)}.")
        return value

    @validates("allergens")
    def _validate_allergens(self, key: str, value: list[str]) -> list[str]:
        unknown = [a for a in value or [] if a not in ALLERGENS]
        if unknown:
            raise ModelValidationError(f"Unknown allergens: {', '.join(unknown)}.")
        return list(value or [])

    @validates("prep_time", "cook_time")
    def _validate_minutes(self, key: str, value: int) -> int:
        if value is None or int(value) < 0:
            raise ModelValidationError(f"{key} must be a non-negative number of minutes.")
        return int(value)

    @validates("title")
    def _validate_title(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ModelValidationError("Title is required.")
        return value.strip()
