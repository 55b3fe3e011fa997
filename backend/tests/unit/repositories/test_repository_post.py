"""Unit tests for PostRepository and CommentRepository."""

import pytest
from sqlalchemy.exc import IntegrityError

from croctop.repositories.comment import CommentRepository
from croctop.repositories.post import PostRepository
from tests.factories.post import CommentFactory, PostFactory
from tests.factories.user import UserFactory


@pytest.fixture()
def posts(session):
    return PostRepository(session)


class TestListings:
    def test_public_listing_hides_archived(self, posts, session):
        visible = PostFactory()
        PostFactory(archived=True)
        session.commit()

        assert [p.id for p in posts.list_public()] == [visible.id]

    def test_listing_by_author(self, posts, session):
        alice = UserFactory()
        first = PostFactory(author=alice)
        archived = PostFactory(author=alice, archived=True)
        PostFactory()
        session.commit()

        assert [p.id for p in posts.list_by_author(alice.id)] == [first.id]
        assert [p.id for p in posts.list_by_author(alice.id, archived=True)] == [archived.id]

    def test_get_loads_author_and_comments(self, posts, session):
        comment = CommentFactory()
        session.commit()
        post_id, comment_id = comment.post_id, comment.id
        session.expunge_all()

        post = posts.get(post_id)
        assert post.author.username
        assert [c.id for c in post.comments] == [comment_id]
        assert posts.get(9999) is None

    def test_out_of_range_id_is_missing(self, posts, session):
        assert posts.get(10**23) is None
        assert posts.get_for_update(-(10**23)) is None

    def test_updatable_whitelist(self, posts, session):
        post = PostFactory()
        posts.assign_updates(post, {"title": "Nouveau", "archived": True})
        assert post.title == "Nouveau"
        with pytest.raises(ValueError):
            posts.assign_updates(post, {"author_id": 42})


class TestLikeEdges:
    def test_like_unlike_cycle(self, posts, session):
        post = PostFactory()
        bob = UserFactory()

        assert not posts.has_like(post.id, bob.id)
        posts.add_like(post.id, bob.id)
        assert posts.has_like(post.id, bob.id)

        session.expire(post, ["likers"])
        assert [u.id for u in post.likers] == [bob.id]

        assert posts.remove_like(post.id, bob.id) is True
        assert posts.remove_like(post.id, bob.id) is False

    def test_duplicate_like_raises_integrity_error(self, posts, session):
        post = PostFactory()
        bob = UserFactory()
        posts.add_like(post.id, bob.id)
        with pytest.raises(IntegrityError):
            posts.add_like(post.id, bob.id)

    def test_clear_likes(self, posts, session):
        post = PostFactory()
        for _ in range(3):
            posts.add_like(post.id, UserFactory().id)
        other = PostFactory()
        posts.add_like(other.id, post.author_id)

        assert posts.clear_likes(post.id) == 3
        assert posts.has_like(other.id, post.author_id)


class TestCommentRepository:
    def test_list_for_post(self, session):
        post = PostFactory()
        c1 = CommentFactory(post=post)
        c2 = CommentFactory(post=post)
        CommentFactory()
        session.commit()

        repo = CommentRepository(session)
        assert [c.id for c in repo.list_for_post(post.id)] == [c1.id, c2.id]
