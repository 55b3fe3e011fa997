"""Pytest fixtures building an isolated application per test.

Every test gets a fresh Flask app bound to its own in-memory SQLite database,
so committed data never leaks between cases. Services commit through their
unit of work exactly as they do in production.
"""

from __future__ import annotations

import os

import pytest

from croctop.core.config import TestingConfig
from croctop.core.extensions import db as _db
from croctop.core.extensions import get_token_service
from croctop.factory import create_app


@pytest.fixture()
def app():
    """Create a Flask application configured for testing."""
    # Ensure env-based config does not leak into tests
    os.environ.pop("DATABASE_URL", None)
    app = create_app(TestingConfig)
    app.logger.setLevel("WARNING")
    return app


@pytest.fixture()
def db(app):
    """Create the schema inside a pushed application context.

    Yields
    ------
    flask_sqlalchemy.SQLAlchemy
        Database extension bound to the testing application.
    """
    with app.app_context():
        _db.create_all()
        yield _db
        _db.session.remove()
        _db.drop_all()


@pytest.fixture()
def session(db):
    """Return the Flask-scoped session used by repositories and services."""
    return db.session


@pytest.fixture()
def client(app, db):
    """Flask test client sharing the database of the ``db`` fixture."""
    return app.test_client()


@pytest.fixture()
def tokens(db):
    """Token service configured from ``TestingConfig``."""
    return get_token_service()
