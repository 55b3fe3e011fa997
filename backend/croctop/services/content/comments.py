from __future__ import annotations

import logging

from croctop.services._shared.base import BaseService
from croctop.services._shared.errors import NotFoundError
from croctop.services.graph import GraphIntegrityManager

from ._converters import comment_to_out
from .dto import CommentListOut, CommentOut
from .posts import load_post, load_user

logger = logging.getLogger(__name__)


class CommentService(BaseService):
    """Comment on posts. Any authenticated user may comment; only the post
    author may delete comments, including comments written by others."""

    def add_comment(self, post_id: int, content: str) -> CommentOut:
        actor_id = self.require_actor()
        with self.rw_uow() as uow:
            post = load_post(uow, post_id)
            author = load_user(uow, actor_id)
            comment = GraphIntegrityManager(uow).add_comment(post, author, content)
            logger.info(
                "Comment added",
                extra={"user_id": actor_id, "post_id": post_id, "comment_id": comment.id},
            )
            return comment_to_out(comment)

    def list_comments(self, post_id: int) -> CommentListOut:
        with self.ro_uow() as uow:
            load_post(uow, post_id)
            comments = uow.comments.list_for_post(post_id)
            return CommentListOut(items=[comment_to_out(c) for c in comments])

    def delete_comment(self, post_id: int, comment_id: int) -> None:
        """
        Delete a comment of ``post_id``.

        :raises NotFoundError: Post missing, or comment missing or on another post.
        :raises AuthorizationError: Caller is not the post author.
        """
        actor_id = self.require_actor()
        with self.rw_uow() as uow:
            post = load_post(uow, post_id)
            self.ensure_owner(
                actor_id,
                post.author_id,
                msg="You are not authorized to delete comments on this post.",
            )
            comment = uow.comments.get(comment_id)
            if comment is None:
                raise NotFoundError("Comment", comment_id)
            GraphIntegrityManager(uow).remove_comment(post, comment)
            logger.info(
                "Comment deleted",
                extra={"user_id": actor_id, "post_id": post_id, "comment_id": comment_id},
            )
