"""Tests for the Comment model."""

from __future__ import annotations

import pytest

from croctop.models import Comment
from tests.factories.post import CommentFactory, PostFactory


class TestComment:
    def test_comment_belongs_to_post(self, session):
        comment = CommentFactory(content="  Délicieux  ")
        session.commit()
        assert comment.content == "Délicieux"
        assert comment.post.comments == [comment]

    def test_post_id_is_immutable(self, session):
        comment = CommentFactory()
        other = PostFactory()
        session.commit()
        with pytest.raises(ValueError):
            comment.post_id = other.id

    def test_empty_content_rejected(self):
        with pytest.raises(ValueError):
            Comment(content="   ")

    def test_comments_follow_post_deletion(self, session):
        comment = CommentFactory()
        post = comment.post
        session.commit()

        post.author.posts.remove(post)
        session.commit()
        assert session.get(Comment, comment.id) is None
