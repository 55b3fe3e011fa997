"""User repository: lookups, credential queries and follow edges."""

from __future__ import annotations

from typing import cast

from sqlalchemy import delete, insert, or_, select

from croctop.models.user import User, user_follows
from croctop.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    Follow edges are written with one ``INSERT`` or ``DELETE`` each so the
    composite key on ``user_follows`` arbitrates concurrent requests.
    """

    model = User

    def _updatable_fields(self):
        """Profile fields a user may change on themselves."""
        return {
            "username",
            "email",
            "password",
            "firstname",
            "lastname",
            "birthday",
            "bio",
            "picture_avatar",
            "status",
        }

    # ---------------------------- Lookup helpers ----------------------------

    def get_by_login(self, *, email: str | None = None, username: str | None = None) -> User | None:
        """Find one user whose email OR username matches.

        :param email: Email to match (normalized like the model does).
        :param username: Username to match (trimmed).
        :returns: First match or ``None``; ``None`` when both are empty.
        """
        clauses = []
        if email:
            clauses.append(User.email == email.strip().lower())
        if username:
            clauses.append(User.username == username.strip())
        if not clauses:
            return None
        stmt = select(User).where(or_(*clauses)).order_by(User.id).limit(1)
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def exists_by_email(self, email: str, *, exclude_id: int | None = None) -> bool:
        stmt = select(User.id).where(User.email == email.strip().lower())
        if exclude_id is not None:
            stmt = stmt.where(User.id != exclude_id)
        return self.session.execute(stmt.limit(1)).first() is not None

    def exists_by_username(self, username: str, *, exclude_id: int | None = None) -> bool:
        stmt = select(User.id).where(User.username == username.strip())
        if exclude_id is not None:
            stmt = stmt.where(User.id != exclude_id)
        return self.session.execute(stmt.limit(1)).first() is not None

    # ---------------------------- Follow edges ----------------------------

    def is_following(self, follower_id: int, followee_id: int) -> bool:
        stmt = select(user_follows.c.follower_id).where(
            user_follows.c.follower_id == follower_id,
            user_follows.c.followee_id == followee_id,
        )
        return self.session.execute(stmt.limit(1)).first() is not None

    def add_follow_edge(self, follower_id: int, followee_id: int) -> None:
        """Insert the edge; a duplicate raises ``IntegrityError``."""
        self.session.execute(
            insert(user_follows).values(follower_id=follower_id, followee_id=followee_id)
        )

    def remove_follow_edge(self, follower_id: int, followee_id: int) -> bool:
        """Delete the edge. Returns ``False`` when there was nothing to delete."""
        result = self.session.execute(
            delete(user_follows).where(
                user_follows.c.follower_id == follower_id,
                user_follows.c.followee_id == followee_id,
            )
        )
        return bool(result.rowcount)
