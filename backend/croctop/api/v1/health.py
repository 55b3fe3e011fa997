"""Liveness endpoint; unauthenticated."""

from __future__ import annotations

from flask import Blueprint, current_app
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from croctop.api.deps import json_response
from croctop.core.extensions import db

bp = Blueprint("health", __name__)


def _database_ok() -> bool:
    try:
        db.session.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError:
        current_app.logger.exception("Health check could not reach the database")
        return False
    finally:
        db.session.rollback()


@bp.get("/health")
def healthcheck():
    """Report API and database status; a dead database yields 503."""
    ok = _database_ok()
    payload = {
        "status": "ok" if ok else "degraded",
        "db": "ok" if ok else "fail",
        "env": current_app.config.get("APP_ENV"),
        "version": current_app.config.get("APP_VERSION", "dev"),
    }
    return json_response(payload, status=200 if ok else 503)
