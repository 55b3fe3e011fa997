"""Global Flask extension instances and initialization helpers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from flask import Flask, current_app
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import MetaData

if TYPE_CHECKING:
    from croctop.services.tokens import TokenService

# Global naming convention for all constraints
convention = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=convention)

# Global singletons (import-safe)
db: SQLAlchemy = SQLAlchemy(session_options={"autoflush": False}, metadata=metadata)
migrate = Migrate(render_as_batch=True)

TOKEN_SERVICE_KEY = "token_service"


def init_app(app: Flask) -> None:
    """Initialize SQLAlchemy, migrations, and the token service.

    Parameters
    ----------
    app: flask.Flask
        Application used to bind extension instances. This call imports the
        :mod:`croctop.models` package to ensure SQLAlchemy metadata is ready for
        migrations.
    """
    db.init_app(app)

    # Ensure models are imported so Alembic sees metadata
    from croctop import models as _models  # noqa: F401

    migrate.init_app(app, db)

    from croctop.services.tokens import TokenService

    app.extensions[TOKEN_SERVICE_KEY] = TokenService.from_config(app.config)


def get_token_service() -> TokenService:
    """Return the token service bound to the current application."""
    service = current_app.extensions.get(TOKEN_SERVICE_KEY)
    if service is None:
        raise RuntimeError("Token service is not initialized. Call init_app() first.")
    return service
