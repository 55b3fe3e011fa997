"""
UserService
===========

Read access to user profiles and self-service profile updates.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from croctop.services._shared.base import BaseService
from croctop.services._shared.errors import ConflictError, NotFoundError, violates

from ._converters import user_to_out, user_to_summary
from .dto import UserOut, UserSummaryOut, UserUpdateIn

logger = logging.getLogger(__name__)


def raise_unique_conflict(exc: IntegrityError) -> None:
    """
    Re-raise a unique violation on users as :class:`ConflictError`.

    PostgreSQL names the constraint, SQLite names the column, so both forms
    are checked. Any other integrity error propagates unchanged.
    """
    if violates(exc, "uq_users_email") or violates(exc, "users.email"):
        raise ConflictError("User", "email already in use") from exc
    if violates(exc, "uq_users_username") or violates(exc, "users.username"):
        raise ConflictError("User", "username already in use") from exc
    raise exc


class UserService(BaseService):
    """Application service for the ``User`` aggregate."""

    def list_users(self) -> list[UserSummaryOut]:
        with self.ro_uow() as uow:
            return [user_to_summary(u) for u in uow.users.list()]

    def get_user(self, user_id: int) -> UserOut:
        """
        :raises NotFoundError: If the user does not exist.
        """
        with self.ro_uow() as uow:
            user = uow.users.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            return user_to_out(user)

    def get_me(self) -> UserOut:
        return self.get_user(self.require_actor())

    def update_me(self, dto: UserUpdateIn) -> UserOut:
        """
        Apply a partial update to the caller's own profile.

        A new password goes through the model setter and is hashed.

        :raises ConflictError: If the new email or username is taken.
        :raises NotFoundError: If the caller's account no longer exists.
        """
        actor_id = self.require_actor()
        changes = dto.changes()
        with self.rw_uow() as uow:
            repo = uow.users
            user = repo.get_for_update(actor_id)
            if user is None:
                raise NotFoundError("User", actor_id)

            email = changes.get("email")
            if email and repo.exists_by_email(str(email), exclude_id=actor_id):
                raise ConflictError("User", "email already in use")
            username = changes.get("username")
            if username and repo.exists_by_username(str(username), exclude_id=actor_id):
                raise ConflictError("User", "username already in use")

            try:
                repo.assign_updates(user, changes)
            except IntegrityError as exc:
                raise_unique_conflict(exc)

            logger.info(
                "User profile updated",
                extra={"user_id": actor_id},
            )
            return user_to_out(user)
