"""Unit tests for CommentService."""

from __future__ import annotations

import pytest

from croctop.services._shared.base import ServiceContext
from croctop.services._shared.errors import AuthorizationError, NotFoundError, UnauthenticatedError
from croctop.services.content import CommentService
from tests.factories.post import CommentFactory, PostFactory
from tests.factories.user import UserFactory


def as_user(user_id: int | None) -> CommentService:
    return CommentService(ctx=ServiceContext(actor_id=user_id))


class TestAddComment:
    def test_any_user_can_comment(self, session):
        post = PostFactory()
        bob = UserFactory()
        session.commit()

        out = as_user(bob.id).add_comment(post.id, "Excellent !")
        assert out.post_id == post.id
        assert out.user.id == bob.id
        assert out.content == "Excellent !"

        listed = as_user(None).list_comments(post.id)
        assert [c.id for c in listed.items] == [out.id]

    def test_author_can_comment_own_post(self, session):
        post = PostFactory()
        session.commit()
        out = as_user(post.author_id).add_comment(post.id, "Merci")
        assert out.user.id == post.author_id

    def test_missing_post(self, session):
        bob = UserFactory()
        session.commit()
        with pytest.raises(NotFoundError):
            as_user(bob.id).add_comment(999, "Hello")

    def test_requires_actor(self, db):
        with pytest.raises(UnauthenticatedError):
            as_user(None).add_comment(1, "Hello")

    def test_blank_content_rejected(self, session):
        post = PostFactory()
        session.commit()
        with pytest.raises(ValueError):
            as_user(post.author_id).add_comment(post.id, "   ")


class TestDeleteComment:
    def test_post_author_deletes_anyones_comment(self, session):
        comment = CommentFactory()
        session.commit()
        post_id, author_id = comment.post_id, comment.post.author_id

        as_user(author_id).delete_comment(post_id, comment.id)
        assert as_user(None).list_comments(post_id).items == []

    def test_comment_writer_cannot_delete_on_foreign_post(self, session):
        comment = CommentFactory()
        session.commit()
        with pytest.raises(AuthorizationError, match="delete comments"):
            as_user(comment.user_id).delete_comment(comment.post_id, comment.id)

    def test_check_order_post_then_owner_then_comment(self, session):
        post = PostFactory()
        mallory = UserFactory()
        session.commit()

        with pytest.raises(NotFoundError, match="Post"):
            as_user(mallory.id).delete_comment(999, 1)
        with pytest.raises(AuthorizationError):
            as_user(mallory.id).delete_comment(post.id, 999)
        with pytest.raises(NotFoundError, match="Comment"):
            as_user(post.author_id).delete_comment(post.id, 999)

    def test_comment_of_another_post_is_not_found(self, session):
        post = PostFactory()
        foreign = CommentFactory()
        session.commit()
        with pytest.raises(NotFoundError):
            as_user(post.author_id).delete_comment(post.id, foreign.id)


class TestListComments:
    def test_lists_only_that_post_oldest_first(self, session):
        post = PostFactory()
        first = CommentFactory(post=post)
        second = CommentFactory(post=post)
        CommentFactory()
        session.commit()

        listed = as_user(None).list_comments(post.id)
        assert [c.id for c in listed.items] == [first.id, second.id]
        assert listed.items[0].user.id == first.user_id

    def test_missing_post(self, db):
        with pytest.raises(NotFoundError, match="Post"):
            as_user(None).list_comments(999)
