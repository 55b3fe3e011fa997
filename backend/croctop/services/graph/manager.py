"""
GraphIntegrityManager
=====================

Single entry point for every mutation that touches both ends of a reference:

=================  ==============================  ===============================
Action             Primary mutation                Paired mutation
=================  ==============================  ===============================
publish post       insert Post(author=U)           append to ``U.posts``
delete post        delete Post (comments, likes)   remove from ``U.posts``
add comment        insert Comment(post=P, user=U)  append to ``P.comments``
remove comment     delete Comment                  remove from ``P.comments``
like / unlike      ``post_likes`` row              ``P.likers`` refreshed
follow / unfollow  ``user_follows`` row            both follow views refreshed
=================  ==============================  ===============================

The manager never commits. It runs inside the caller's read-write unit of
work, so either every step of an action lands or the rollback discards all of
them. Set memberships are written with one ``INSERT`` or ``DELETE`` each: the
composite primary keys reject a concurrent duplicate and a zero-row
``DELETE`` reports a missing edge, with no read-modify-write window.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError

from croctop.models import Comment, Post, User
from croctop.services._shared.errors import ConflictError, NotFoundError, SelfFollowError
from croctop.uow.sqlalchemy_uow import SQLAlchemyUnitOfWork

logger = logging.getLogger(__name__)


class GraphIntegrityManager:
    """Apply paired mutations on the entity graph inside one unit of work."""

    def __init__(self, uow: SQLAlchemyUnitOfWork) -> None:
        self.uow = uow

    @property
    def session(self):
        return self.uow.session

    # ------------------------------------------------------------------ #
    # Posts
    # ------------------------------------------------------------------ #

    def publish_post(self, author: User, fields: dict[str, Any]) -> Post:
        """Create a post owned by ``author`` and append it to ``author.posts``."""
        post = Post(**fields)
        author.posts.append(post)
        self.uow.posts.add(post)
        logger.debug("Post attached to author", extra={"post_id": post.id, "user_id": author.id})
        return post

    def delete_post(self, post: Post) -> None:
        """Remove ``post`` with its comments and likes, and detach it from its author."""
        author = post.author
        self.uow.posts.clear_likes(post.id)
        author.posts.remove(post)
        self.uow.posts.delete(post)
        logger.debug("Post detached from author", extra={"post_id": post.id, "user_id": author.id})

    # ------------------------------------------------------------------ #
    # Comments
    # ------------------------------------------------------------------ #

    def add_comment(self, post: Post, author: User, content: str) -> Comment:
        comment = Comment(user=author, content=content)
        post.comments.append(comment)
        self.uow.comments.add(comment)
        return comment

    def remove_comment(self, post: Post, comment: Comment) -> None:
        """
        Delete ``comment`` and drop it from ``post.comments``.

        :raises NotFoundError: If the comment belongs to another post.
        """
        if comment.post_id != post.id:
            raise NotFoundError("Comment", comment.id)
        post.comments.remove(comment)
        self.uow.comments.delete(comment)

    # ------------------------------------------------------------------ #
    # Likes
    # ------------------------------------------------------------------ #

    def add_like(self, post: Post, user: User) -> None:
        """
        Add ``user`` to the likers of ``post``.

        :raises ConflictError: If the user already likes the post.
        """
        posts = self.uow.posts
        if posts.has_like(post.id, user.id):
            raise ConflictError("Post", "you have already liked this post")
        try:
            posts.add_like(post.id, user.id)
        except IntegrityError as exc:
            # Lost the race against an identical request
            raise ConflictError("Post", "you have already liked this post") from exc
        self.session.expire(post, ["likers"])

    def remove_like(self, post: Post, user: User) -> None:
        """
        Remove ``user`` from the likers of ``post``.

        :raises ConflictError: If the user does not like the post.
        """
        if not self.uow.posts.remove_like(post.id, user.id):
            raise ConflictError("Post", "you have not liked this post")
        self.session.expire(post, ["likers"])

    # ------------------------------------------------------------------ #
    # Follows
    # ------------------------------------------------------------------ #

    def follow(self, follower: User, followee: User) -> None:
        """
        Record ``follower -> followee``; both follow views change together.

        :raises SelfFollowError: When both users are the same.
        :raises ConflictError: When the edge already exists.
        """
        if follower.id == followee.id:
            raise SelfFollowError()
        users = self.uow.users
        if users.is_following(follower.id, followee.id):
            raise ConflictError("User", "you already follow this user")
        try:
            users.add_follow_edge(follower.id, followee.id)
        except IntegrityError as exc:
            raise ConflictError("User", "you already follow this user") from exc
        self._expire_follow_views(follower, followee)

    def unfollow(self, follower: User, followee: User) -> None:
        """
        Remove ``follower -> followee``.

        :raises SelfFollowError: When both users are the same.
        :raises ConflictError: When there is no such edge.
        """
        if follower.id == followee.id:
            raise SelfFollowError("unfollow")
        if not self.uow.users.remove_follow_edge(follower.id, followee.id):
            raise ConflictError("User", "you are not following this user")
        self._expire_follow_views(follower, followee)

    def _expire_follow_views(self, follower: User, followee: User) -> None:
        self.session.expire(follower, ["following", "followers"])
        self.session.expire(followee, ["following", "followers"])
