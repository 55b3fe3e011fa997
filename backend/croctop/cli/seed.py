"""Flask CLI commands for idempotent demo database seeding."""

from __future__ import annotations

import logging

import click
from flask import current_app
from flask.cli import with_appcontext
from sqlalchemy.exc import SQLAlchemyError

from croctop.core.extensions import db
from croctop.seeds import demo

LOGGER = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.getLogger(demo.__name__).setLevel(level)
    LOGGER.setLevel(level)


def _echo_summary(summary: dict[str, dict[str, int]]) -> None:
    """Print one line of created/existing counters per table."""
    click.echo("Seed summary:")
    if not summary:
        click.echo("  (no changes)")
        return
    width = max(len(name) for name in summary)
    for table, counters in sorted(summary.items()):
        created = counters.get("created", 0)
        existing = counters.get("existing", 0)
        click.echo(f"  {table.ljust(width)}  created={created:>2}  existing={existing:>2}")


def _ensure_non_production() -> None:
    """Abort destructive commands when running in production."""
    config = current_app.config
    if str(config.get("APP_ENV", "")).lower() == "production" and not config.get("TESTING"):
        raise click.UsageError(
            "The 'flask seed fresh' command is restricted to non-production environments."
        )


def _run_seed(label: str) -> None:
    try:
        summary = demo.run_all(db, verbose=LOGGER.isEnabledFor(logging.DEBUG))
    except (SQLAlchemyError, ValueError) as exc:
        raise click.ClickException(f"{label} failed: {exc}") from exc
    _echo_summary(summary)


@click.group("seed")
@click.option("--verbose", is_flag=True, help="Enable verbose logging for seeding.")
def seed_cli(verbose: bool) -> None:
    """Database seeding commands."""
    _configure_logging(verbose)


@seed_cli.command("run")
@with_appcontext
def run_command() -> None:
    """Insert the demo users, posts, likes and follows if missing."""
    _run_seed("Seeding")


@seed_cli.command("fresh")
@click.option("--yes", is_flag=True, help="Skip the destructive confirmation prompt.")
@with_appcontext
def fresh_command(yes: bool) -> None:
    """Drop all tables, recreate the schema, and seed demo data."""
    _ensure_non_production()
    if not yes:
        click.confirm(
            "This will DROP all application tables and recreate them. Continue?",
            abort=True,
        )
    LOGGER.info("Dropping database schema...")
    db.session.remove()
    db.drop_all()
    LOGGER.info("Recreating database schema...")
    db.create_all()
    _run_seed("Fresh seed")
