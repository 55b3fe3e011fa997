"""CORS policy for the JSON API."""

from __future__ import annotations

from flask import Flask
from flask_cors import CORS

from croctop.core.logger import REQUEST_ID_HEADER


def _parse_origins(raw: str | None) -> list[str]:
    return [o.strip() for o in (raw or "").split(",") if o.strip()]


def init_app(app: Flask) -> None:
    """Enable CORS on ``/api/*`` using ``CORS_ORIGINS`` from the config.

    A blank value or ``"*"`` allows any origin; credentials are then disabled
    since browsers reject the wildcard together with credentials. Bearer
    tokens travel in the ``Authorization`` header, which is always allowed.
    """
    origins = _parse_origins(app.config.get("CORS_ORIGINS"))
    wildcard = not origins or origins == ["*"]

    CORS(
        app,
        resources={r"/api/*": {"origins": "*" if wildcard else origins}},
        allow_headers=["Authorization", "Content-Type", REQUEST_ID_HEADER],
        expose_headers=[REQUEST_ID_HEADER],
        supports_credentials=not wildcard,
        max_age=app.config.get("CORS_MAX_AGE", 600),
    )
