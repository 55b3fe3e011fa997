"""User model and the follow edge table."""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    String,
    Table,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship, synonym, validates

from croctop.core.extensions import db
from croctop.core.security import hash_password, verify_password

from .base import ModelValidationError, PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .post import Post

USER_STATUSES = ("online", "inactive")
USER_ROLES = ("normal", "partner", "certified")

# One row per directed edge; it backs both ``following`` and ``followers``.
user_follows = Table(
    "user_follows",
    db.metadata,
    Column(
        "follower_id", ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    ),
    Column(
        "followee_id", ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    ),
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
    CheckConstraint("follower_id <> followee_id", name="no_self_follow"),
    Index("ix_user_follows_followee_id", "followee_id"),
)


class User(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Account holding credentials, profile fields and social edges.

    Fields
    ------
    username : str
        Public handle. Unique, trimmed.
    email : str
        Login email. Stored normalized (lowercase, trimmed).
    password_hash : str
        Salted digest (write-only setter via ``password``).
    status : str
        ``online`` or ``inactive``.
    role : str
        ``normal``, ``partner`` or ``certified``. Carried in tokens only.
    signup_date : datetime
        Alias of ``created_at``.
    last_login : datetime | None
        Set on each successful signin.

    Relationships
    -------------
    posts : list[Post]
        Posts owned by the user, in publication order.
    following / followers : list[User]
        Read-only views over ``user_follows``. Edges are written by the graph
        manager with single statements, never through these collections.
    """

    __tablename__ = "users"
    __repr_label__ = "username"

    # Columns
    username: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str] = mapped_column(String(254), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(254), nullable=False)
    firstname: Mapped[str | None] = mapped_column(String(100))
    lastname: Mapped[str | None] = mapped_column(String(100))
    birthday: Mapped[date | None] = mapped_column(Date)
    bio: Mapped[str | None] = mapped_column(Text)
    picture_avatar: Mapped[str | None] = mapped_column(String(500))
    last_login: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="inactive")
    role: Mapped[str] = mapped_column(String(20), nullable=False, default="normal")

    signup_date = synonym("created_at")

    # Constraints & indexes
    __table_args__ = (
        UniqueConstraint("email", name="uq_users_email"),
        UniqueConstraint("username", name="uq_users_username"),
        CheckConstraint("status IN ('online', 'inactive')", name="status_valid"),
        CheckConstraint("role IN ('normal', 'partner', 'certified')", name="role_valid"),
    )

    # Relationships
    posts: Mapped[list[Post]] = relationship(
        "Post",
        back_populates="author",
        order_by="Post.id",
        cascade="all, delete-orphan",
    )
    following: Mapped[list[User]] = relationship(
        "User",
        secondary=user_follows,
        primaryjoin=lambda: User.id == user_follows.c.follower_id,
        secondaryjoin=lambda: User.id == user_follows.c.followee_id,
        order_by=lambda: User.id,
        viewonly=True,
    )
    followers: Mapped[list[User]] = relationship(
        "User",
        secondary=user_follows,
        primaryjoin=lambda: User.id == user_follows.c.followee_id,
        secondaryjoin=lambda: User.id == user_follows.c.follower_id,
        order_by=lambda: User.id,
        viewonly=True,
    )

    # -------------------- Password API --------------------
    @property
    def password(self) -> Any:  # pragma: no cover - explicit write-only contract
        """
        Disallow reading passwords.

        :raises AttributeError: Always, to ensure password is write-only.
        """
        raise AttributeError("Password is write-only.")

    @password.setter
    def password(self, raw: str) -> None:
        """Hash and store ``raw``; the plaintext is never kept."""
        if not isinstance(raw, str) or not raw:
            raise ModelValidationError("Password must be a non-empty string.")
        self.password_hash = hash_password(raw)

    def check_password(self, raw: str) -> bool:
        """Return ``True`` if ``raw`` matches the stored digest."""
        return verify_password(raw, self.password_hash)

    # -------------------- Validators --------------------
    @validates("email")
    def _normalize_email(self, key: str, value: str) -> str:
        """
        Normalize and validate email.

        :raises ModelValidationError: If email is missing or malformed.
        """
        if not value or not isinstance(value, str):
            raise ModelValidationError("Email is required.")
        v = value.strip().lower()
        # Minimal sanity check; full validation happens at API layer.
        if "@" not in v or "." not in v.split("@")[-1]:
            raise ModelValidationError("Email format looks invalid.")
        return v

    @validates("username")
    def _normalize_username(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ModelValidationError("Username is required.")
        return value.strip()

    @validates("status")
    def _validate_status(self, key: str, value: str) -> str:
        if value not in USER_STATUSES:
            raise ModelValidationError(f"Status must be one of: {', '.join(USER_STATUSES)}.")
        return value

    @validates("role")
    def _validate_role(self, key: str, value: str) -> str:
        if value not in USER_ROLES:
            raise ModelValidationError(f"Role must be one of: {', '.join(USER_ROLES)}.")
        return value
