"""Unit tests for UserRepository."""

import pytest
from sqlalchemy.exc import IntegrityError

from croctop.repositories.user import UserRepository
from tests.factories.user import UserFactory


class TestUserRepository:
    """Ensure ``UserRepository`` performs core persistence operations."""

    @pytest.fixture()
    def repo(self, session):
        return UserRepository(session)

    def test_get_by_login_matches_email_or_username(self, repo, session):
        """Find the same user by normalized email or by trimmed username."""
        u = UserFactory(email="alice@example.com", username="alice")
        session.commit()

        assert repo.get_by_login(email="ALICE@example.com").id == u.id
        assert repo.get_by_login(username=" alice ").id == u.id
        assert repo.get_by_login(email="nobody@example.com", username="alice").id == u.id
        assert repo.get_by_login(email="nobody@example.com") is None
        assert repo.get_by_login() is None

    def test_exists_by_email_and_username(self, repo, session):
        u = UserFactory(email="bob@example.com", username="bob")
        session.commit()

        assert repo.exists_by_email("Bob@example.com")
        assert not repo.exists_by_email("nonexistent@example.com")
        assert repo.exists_by_username("bob")
        assert not repo.exists_by_username("bob", exclude_id=u.id)

    def test_unknown_filter_rejected(self, repo, session):
        with pytest.raises(ValueError, match="not filterable"):
            repo.list(filters={"password_hash": "x"})

    def test_list_is_ordered_by_id(self, repo, session):
        a = UserFactory(username="zed")
        b = UserFactory(username="amy")
        session.commit()

        assert [u.id for u in repo.list()] == [a.id, b.id]

    def test_safe_update_fields(self, repo, session):
        """Assign whitelisted fields and reject disallowed keys."""
        u = UserFactory()
        session.commit()

        updated = repo.assign_updates(u, {"username": "newname", "password": "n3w-pass"})
        assert updated.username == "newname"
        assert updated.check_password("n3w-pass")

        with pytest.raises(ValueError):
            repo.assign_updates(u, {"password_hash": "x"})
        with pytest.raises(ValueError):
            repo.assign_updates(u, {"role": "certified"})


class TestFollowEdges:
    @pytest.fixture()
    def repo(self, session):
        return UserRepository(session)

    def test_add_and_remove_edge(self, repo, session):
        alice, bob = UserFactory(), UserFactory()

        repo.add_follow_edge(bob.id, alice.id)
        assert repo.is_following(bob.id, alice.id)
        assert not repo.is_following(alice.id, bob.id)

        assert repo.remove_follow_edge(bob.id, alice.id) is True
        assert repo.remove_follow_edge(bob.id, alice.id) is False
        assert not repo.is_following(bob.id, alice.id)

    def test_duplicate_edge_raises_integrity_error(self, repo, session):
        alice, bob = UserFactory(), UserFactory()
        repo.add_follow_edge(bob.id, alice.id)
        with pytest.raises(IntegrityError):
            repo.add_follow_edge(bob.id, alice.id)
