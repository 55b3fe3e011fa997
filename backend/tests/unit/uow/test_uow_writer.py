"""
Unit tests for SQLAlchemyUnitOfWork (writer), using factories.
"""

from __future__ import annotations

import pytest
from sqlalchemy import func, select

from croctop.models import Post, User, post_likes
from croctop.uow import SQLAlchemyUnitOfWork
from tests.factories.post import PostFactory
from tests.factories.user import UserFactory


def _count(session, model) -> int:
    return session.execute(select(func.count()).select_from(model)).scalar_one()


class TestSQLAlchemyUnitOfWorkWriter:
    def test_writer_uow_commits_on_success(self, db, session):
        """
        GIVEN a writer UoW
        WHEN we create a user via repo inside the context and leave without exception
        THEN the transaction is committed and the row is visible afterwards.
        """
        initial = _count(session, User)

        with SQLAlchemyUnitOfWork() as uow:
            uow.users.add(UserFactory.build())

        session.rollback()
        assert _count(session, User) == initial + 1

    def test_writer_uow_rolls_back_on_exception(self, db, session):
        """
        GIVEN a writer UoW
        WHEN an exception is raised inside the context
        THEN the transaction is rolled back and no rows are persisted.
        """
        initial = _count(session, User)

        with pytest.raises(RuntimeError), SQLAlchemyUnitOfWork() as uow:
            uow.users.add(UserFactory.build())
            raise RuntimeError("boom")

        assert _count(session, User) == initial

    def test_rollback_covers_orm_and_core_writes(self, db, session):
        """
        GIVEN a committed post
        WHEN a UoW inserts a like edge, creates a post, then fails
        THEN neither the edge nor the post survive.
        """
        post = PostFactory()
        session.commit()
        post_id, author_id = post.id, post.author_id

        with pytest.raises(RuntimeError), SQLAlchemyUnitOfWork() as uow:
            uow.posts.add_like(post_id, author_id)
            author = uow.users.get(author_id)
            author.posts.append(
                Post(title="Soupe", category="Entrée", prep_time=5, cook_time=10)
            )
            uow.users.flush()
            raise RuntimeError("boom")

        assert _count(session, post_likes) == 0
        assert _count(session, Post) == 1
