from __future__ import annotations

import logging

from croctop.services._shared.base import BaseService
from croctop.services._shared.errors import SelfFollowError
from croctop.services.graph import GraphIntegrityManager
from croctop.services.users._converters import user_to_out

from ._converters import post_to_out
from .dto import FollowOut, PostOut
from .posts import load_post, load_user

logger = logging.getLogger(__name__)


class SocialService(BaseService):
    """Likes and follows. Open to any authenticated user, own posts included."""

    # ------------------------------------------------------------------ #
    # Likes
    # ------------------------------------------------------------------ #

    def like_post(self, post_id: int) -> PostOut:
        actor_id = self.require_actor()
        with self.rw_uow() as uow:
            post = load_post(uow, post_id)
            user = load_user(uow, actor_id)
            GraphIntegrityManager(uow).add_like(post, user)
            logger.info("Post liked", extra={"user_id": actor_id, "post_id": post_id})
            return post_to_out(post)

    def unlike_post(self, post_id: int) -> PostOut:
        actor_id = self.require_actor()
        with self.rw_uow() as uow:
            post = load_post(uow, post_id)
            user = load_user(uow, actor_id)
            GraphIntegrityManager(uow).remove_like(post, user)
            logger.info("Post unliked", extra={"user_id": actor_id, "post_id": post_id})
            return post_to_out(post)

    # ------------------------------------------------------------------ #
    # Follows
    # ------------------------------------------------------------------ #

    def follow_user(self, target_id: int) -> FollowOut:
        actor_id = self.require_actor()
        if actor_id == target_id:
            raise SelfFollowError()
        with self.rw_uow() as uow:
            target = load_user(uow, target_id)
            user = load_user(uow, actor_id)
            GraphIntegrityManager(uow).follow(user, target)
            logger.info("User followed", extra={"user_id": actor_id, "target_id": target_id})
            return FollowOut(user=user_to_out(user), target=user_to_out(target))

    def unfollow_user(self, target_id: int) -> FollowOut:
        actor_id = self.require_actor()
        if actor_id == target_id:
            raise SelfFollowError("unfollow")
        with self.rw_uow() as uow:
            target = load_user(uow, target_id)
            user = load_user(uow, actor_id)
            GraphIntegrityManager(uow).unfollow(user, target)
            logger.info("User unfollowed", extra={"user_id": actor_id, "target_id": target_id})
            return FollowOut(user=user_to_out(user), target=user_to_out(target))
