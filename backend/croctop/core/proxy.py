"""Reverse-proxy header handling."""

from __future__ import annotations

from flask import Flask
from werkzeug.middleware.proxy_fix import ProxyFix


def init_app(app: Flask) -> None:
    """Wrap the WSGI app in :class:`ProxyFix` unless ``USE_PROXYFIX`` is off.

    One trusted hop is assumed for ``X-Forwarded-For``, ``-Proto``, ``-Host``
    and ``-Prefix`` (gunicorn behind a single nginx).
    """
    if not app.config.get("USE_PROXYFIX", True):
        return
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)
