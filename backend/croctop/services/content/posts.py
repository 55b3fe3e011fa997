from __future__ import annotations

import logging

from croctop.models import Post, User
from croctop.services._shared.base import BaseService
from croctop.services._shared.errors import NotFoundError
from croctop.services.graph import GraphIntegrityManager
from croctop.uow.sqlalchemy_uow import SQLAlchemyRepositoryContainer

from ._converters import post_to_out
from .dto import PostCreateIn, PostListOut, PostOut, PostUpdateIn

logger = logging.getLogger(__name__)


def load_post(uow: SQLAlchemyRepositoryContainer, post_id: int) -> Post:
    post = uow.posts.get(post_id)
    if post is None:
        raise NotFoundError("Post", post_id)
    return post


def load_user(uow: SQLAlchemyRepositoryContainer, user_id: int) -> User:
    user = uow.users.get(user_id)
    if user is None:
        raise NotFoundError("User", user_id)
    return user


class PostService(BaseService):
    """Publish, read, edit, archive and delete posts.

    Every mutation except creation requires the caller to be the author.
    """

    # ------------------------------------------------------------------ #
    # Commands
    # ------------------------------------------------------------------ #

    def create_post(self, dto: PostCreateIn) -> PostOut:
        actor_id = self.require_actor()
        with self.rw_uow() as uow:
            author = load_user(uow, actor_id)
            post = GraphIntegrityManager(uow).publish_post(author, dto.as_fields())
            logger.info("Post published", extra={"user_id": actor_id, "post_id": post.id})
            return post_to_out(post)

    def update_post(self, post_id: int, dto: PostUpdateIn) -> PostOut:
        """Apply a partial update. The author of a post is never changed."""
        with self.rw_uow() as uow:
            post = self._load_owned(uow, post_id, action="edit")
            changes = dto.changes()
            if changes:
                uow.posts.assign_updates(post, changes)
                logger.info(
                    "Post updated",
                    extra={"user_id": self.ctx.actor_id, "post_id": post_id},
                )
            return post_to_out(post)

    def archive_post(self, post_id: int) -> PostOut:
        return self._set_archived(post_id, True)

    def unarchive_post(self, post_id: int) -> PostOut:
        return self._set_archived(post_id, False)

    def delete_post(self, post_id: int) -> None:
        with self.rw_uow() as uow:
            post = self._load_owned(uow, post_id, action="delete")
            GraphIntegrityManager(uow).delete_post(post)
            logger.info("Post deleted", extra={"user_id": self.ctx.actor_id, "post_id": post_id})

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #

    def get_post(self, post_id: int) -> PostOut:
        """Fetch one post by id, archived or not."""
        with self.ro_uow() as uow:
            return post_to_out(load_post(uow, post_id))

    def list_posts(self) -> PostListOut:
        """Every non-archived post, oldest first."""
        with self.ro_uow() as uow:
            return PostListOut(items=[post_to_out(p) for p in uow.posts.list_public()])

    def list_user_posts(self, user_id: int) -> PostListOut:
        with self.ro_uow() as uow:
            load_user(uow, user_id)
            rows = uow.posts.list_by_author(user_id, archived=False)
            return PostListOut(items=[post_to_out(p) for p in rows])

    def list_archived_posts(self) -> PostListOut:
        """Archived posts of the caller."""
        actor_id = self.require_actor()
        with self.ro_uow() as uow:
            rows = uow.posts.list_by_author(actor_id, archived=True)
            return PostListOut(items=[post_to_out(p) for p in rows])

    # ------------------------------------------------------------------ #
    # Internals
    # ------------------------------------------------------------------ #

    def _set_archived(self, post_id: int, archived: bool) -> PostOut:
        action = "archive" if archived else "unarchive"
        with self.rw_uow() as uow:
            post = self._load_owned(uow, post_id, action=action)
            uow.posts.assign_updates(post, {"archived": archived})
            logger.info(
                "Post archived" if archived else "Post unarchived",
                extra={"user_id": self.ctx.actor_id, "post_id": post_id},
            )
            return post_to_out(post)

    def _load_owned(self, uow: SQLAlchemyRepositoryContainer, post_id: int, *, action: str) -> Post:
        """Existence first (404), then ownership (403)."""
        actor_id = self.require_actor()
        post = load_post(uow, post_id)
        self.ensure_owner(
            actor_id, post.author_id, msg=f"You are not authorized to {action} this post."
        )
        return post
