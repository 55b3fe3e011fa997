"""Tests for the User model."""

from __future__ import annotations

import pytest
from sqlalchemy import insert
from sqlalchemy.exc import IntegrityError

from croctop.models import ModelValidationError, User, user_follows
from tests.factories.user import UserFactory


class TestUser:
    def test_password_hashing(self, session):
        u = User(email="Test@Example.com", username="tester")
        u.password = "secret123"
        session.add(u)
        session.commit()
        assert u.password_hash != "secret123"
        assert u.check_password("secret123") is True
        assert u.check_password("wrong") is False

    def test_password_is_write_only(self):
        u = User(email="a@example.com", username="u1")
        u.password = "x"
        with pytest.raises(AttributeError):
            _ = u.password

    def test_empty_password_rejected(self):
        u = User(email="a@example.com", username="u1")
        with pytest.raises(ModelValidationError):
            u.password = ""

    def test_email_normalized_and_unique(self, session):
        u1 = User(email="  Alice@Example.com ", username="alice")
        u1.password = "pw"
        session.add(u1)
        session.commit()
        assert u1.email == "alice@example.com"

        u2 = User(email="alice@example.com", username="alice2")
        u2.password = "pw"
        session.add(u2)
        with pytest.raises(IntegrityError):
            session.commit()

    def test_username_unique(self, session):
        u1 = User(email="b1@example.com", username="bob")
        u1.password = "pw"
        session.add(u1)
        session.commit()

        u2 = User(email="b2@example.com", username=" bob ")
        u2.password = "pw"
        session.add(u2)
        with pytest.raises(IntegrityError):
            session.commit()

    def test_defaults(self, session):
        u = UserFactory()
        session.commit()
        assert u.status == "inactive"
        assert u.role == "normal"
        assert u.signup_date is not None
        assert u.last_login is None

    @pytest.mark.parametrize(
        "field,value",
        [("email", ""), ("email", "not-an-email"), ("username", "  "), ("status", "away"), ("role", "admin")],
    )
    def test_basic_validations(self, field, value):
        u = User(email="x@example.com", username="x")
        with pytest.raises(ValueError):
            setattr(u, field, value)


class TestFollowEdges:
    def test_following_and_followers_views(self, session):
        alice, bob, carol = UserFactory(), UserFactory(), UserFactory()
        session.execute(
            insert(user_follows),
            [
                {"follower_id": bob.id, "followee_id": alice.id},
                {"follower_id": carol.id, "followee_id": alice.id},
            ],
        )
        session.commit()

        assert [u.id for u in alice.followers] == [bob.id, carol.id]
        assert alice.following == []
        assert [u.id for u in bob.following] == [alice.id]

    def test_self_edge_violates_check_constraint(self, session):
        alice = UserFactory()
        with pytest.raises(IntegrityError):
            session.execute(
                insert(user_follows).values(follower_id=alice.id, followee_id=alice.id)
            )

    def test_duplicate_edge_violates_primary_key(self, session):
        alice, bob = UserFactory(), UserFactory()
        stmt = insert(user_follows).values(follower_id=bob.id, followee_id=alice.id)
        session.execute(stmt)
        with pytest.raises(IntegrityError):
            session.execute(stmt)
