import pytest
from sqlalchemy import text

from croctop.models.user import User
from croctop.uow import SQLAlchemyReadOnlyUnitOfWork as ROuow
from croctop.uow import SQLAlchemyUnitOfWork as RWuow
from tests.factories.user import UserFactory


class TestSQLAlchemyReadOnlyUnitOfWork:
    def test_blocks_orm_flush_writes(self, db):
        """
        Ensure that attempting to flush ORM changes inside the RO UoW raises.
        """
        with ROuow() as uow, pytest.raises(RuntimeError, match="ORM flush blocked"):
            user = UserFactory.build()  # not persisted
            uow.session.add(user)
            uow.session.flush()

    def test_blocks_core_dml(self, db):
        """
        Ensure that raw SQL DML/DDL is blocked inside the RO UoW.
        """
        with ROuow() as uow, pytest.raises(RuntimeError, match="SQL statement blocked"):
            uow.session.execute(
                text("INSERT INTO users (email) VALUES (:email)"), {"email": "x@example.com"}
            )

    def test_allows_reads(self, db):
        """
        Read operations should work normally within RO UoW.
        """
        with RWuow() as uow:
            uow.users.add(UserFactory.build())

        with ROuow() as uow:
            assert len(uow.users.list()) == 1

    def test_disallows_commit(self, db):
        """
        RO UoW must reject commit().
        """
        with ROuow() as uow, pytest.raises(RuntimeError, match="does not allow commit"):
            uow.commit()

    def test_listeners_removed_on_exit(self, db):
        with ROuow():
            pass

        with RWuow() as uow:
            uow.users.add(UserFactory.build())

        with ROuow() as uow:
            assert len(uow.users.list()) == 1

    def test_always_rolls_back_changes(self, db):
        """
        Any attempted modifications must not persist after RO UoW exits.
        """
        with RWuow() as uow:
            user = uow.users.add(UserFactory.build())
            user_id = user.id

        with ROuow() as uow, pytest.raises(RuntimeError, match="ORM flush blocked"):
            u = uow.session.get(User, user_id)
            original_email = u.email
            u.email = "mutated-in-ro@example.com"
            uow.session.flush()

        with RWuow() as uow:
            persisted = uow.session.get(User, user_id)
            assert persisted.email == original_email
