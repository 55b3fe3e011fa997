"""Application factory for the Croc'top API."""

from __future__ import annotations

from collections.abc import Callable

from flask import Flask

from croctop.core.config import BaseConfig, get_config
from croctop.core.logger import configure_logging


def _initializers() -> list[Callable[[Flask], None]]:
    """Return the ``init_app`` hooks in registration order.

    The proxy fix wraps the WSGI app first, extensions must exist before the
    blueprints use them, and the error handlers come after the blueprints so
    they cover every route.
    """
    from croctop import cli
    from croctop.api import init_app as init_api
    from croctop.core import cors, errors, extensions, logger, proxy

    return [
        proxy.init_app,
        extensions.init_app,
        logger.init_app,
        cors.init_app,
        init_api,
        errors.init_app,
        cli.init_app,
    ]


def create_app(
    config: str | type[BaseConfig] | object | None = None,
    *,
    instance_relative_config: bool = True,
    instance_config_filename: str = "config.py",
) -> Flask:
    """Build and configure the Flask application.

    :param config: Config object or import path; ``None`` selects the class
        named by ``APP_ENV``.
    :param instance_relative_config: Look for overrides in the instance folder.
    :param instance_config_filename: Optional override file in the instance
        folder, loaded silently when present.
    :returns: Configured application with the ``/api/v1`` routes registered.
    """
    app = Flask(__name__, instance_relative_config=instance_relative_config)

    app.config.from_object(get_config() if config is None else config)
    if instance_relative_config and instance_config_filename:
        app.config.from_pyfile(instance_config_filename, silent=True)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    for init in _initializers():
        init(app)

    return app
