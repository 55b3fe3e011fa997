"""Unit tests for SocialService (likes and follows)."""

from __future__ import annotations

import pytest

from croctop.services._shared.base import ServiceContext
from croctop.services._shared.errors import (
    ConflictError,
    NotFoundError,
    SelfFollowError,
    UnauthenticatedError,
)
from croctop.services.content import SocialService
from tests.factories.post import PostFactory
from tests.factories.user import UserFactory


def as_user(user_id: int | None) -> SocialService:
    return SocialService(ctx=ServiceContext(actor_id=user_id))


class TestLikes:
    def test_like_and_unlike(self, session):
        post = PostFactory()
        bob = UserFactory()
        session.commit()

        assert as_user(bob.id).like_post(post.id).likes == [bob.id]
        assert as_user(bob.id).unlike_post(post.id).likes == []

    def test_likes_list_every_liker(self, session):
        post = PostFactory()
        bob, carol = UserFactory(), UserFactory()
        session.commit()

        as_user(carol.id).like_post(post.id)
        out = as_user(bob.id).like_post(post.id)
        assert sorted(out.likes) == sorted([bob.id, carol.id])

    def test_own_post_can_be_liked(self, session):
        post = PostFactory()
        session.commit()
        assert as_user(post.author_id).like_post(post.id).likes == [post.author_id]

    def test_double_like_conflicts(self, session):
        post = PostFactory()
        bob = UserFactory()
        session.commit()
        as_user(bob.id).like_post(post.id)
        with pytest.raises(ConflictError, match="already liked"):
            as_user(bob.id).like_post(post.id)

    def test_unlike_without_like_conflicts(self, session):
        post = PostFactory()
        bob = UserFactory()
        session.commit()
        with pytest.raises(ConflictError, match="not liked"):
            as_user(bob.id).unlike_post(post.id)

    def test_like_missing_post(self, session):
        bob = UserFactory()
        session.commit()
        with pytest.raises(NotFoundError):
            as_user(bob.id).like_post(42)

    def test_like_requires_actor(self, db):
        with pytest.raises(UnauthenticatedError):
            as_user(None).like_post(1)


class TestFollows:
    def test_follow_returns_both_ends(self, session):
        alice, bob = UserFactory(), UserFactory()
        session.commit()

        out = as_user(bob.id).follow_user(alice.id)
        assert out.user.id == bob.id
        assert out.user.following == [alice.id]
        assert out.target.followers == [bob.id]

        out = as_user(bob.id).unfollow_user(alice.id)
        assert out.user.following == []
        assert out.target.followers == []

    def test_self_follow_rejected_before_lookup(self, db):
        with pytest.raises(SelfFollowError, match="cannot follow yourself"):
            as_user(5).follow_user(5)
        with pytest.raises(SelfFollowError, match="cannot unfollow yourself"):
            as_user(5).unfollow_user(5)

    def test_follow_unknown_user(self, session):
        bob = UserFactory()
        session.commit()
        with pytest.raises(NotFoundError):
            as_user(bob.id).follow_user(999)

    def test_follow_twice_conflicts(self, session):
        alice, bob = UserFactory(), UserFactory()
        session.commit()
        as_user(bob.id).follow_user(alice.id)
        with pytest.raises(ConflictError, match="already follow"):
            as_user(bob.id).follow_user(alice.id)

    def test_unfollow_without_edge_conflicts(self, session):
        alice, bob = UserFactory(), UserFactory()
        session.commit()
        with pytest.raises(ConflictError, match="not following"):
            as_user(bob.id).unfollow_user(alice.id)

    def test_follow_is_directed(self, session):
        alice, bob = UserFactory(), UserFactory()
        session.commit()
        out = as_user(bob.id).follow_user(alice.id)
        assert out.target.following == []
        assert out.user.followers == []
