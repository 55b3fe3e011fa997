"""Factory Boy base bound to the Flask-scoped SQLAlchemy session.

Factories must run inside the application context pushed by the ``db``
fixture; outside of it ``db.session`` raises a ``RuntimeError``.
"""

from __future__ import annotations

import factory

from croctop.core.extensions import db


def _current_session():
    return db.session


class BaseFactory(factory.alchemy.SQLAlchemyModelFactory):
    """Persist with ``flush`` so ids exist while the test controls commits."""

    class Meta:
        abstract = True
        sqlalchemy_session_factory = _current_session
        sqlalchemy_session_persistence = "flush"
