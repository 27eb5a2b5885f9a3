#!/usr/bin/env python3
"""
CLI entry point for devgraph database migrations.
"""

import sys
from collections.abc import Callable
from pathlib import Path

import click

from alembic import command
from alembic.config import Config
from devgraph import __version__
from devgraph.logging import configure_logging, get_logger

logger = get_logger(__name__)


def get_alembic_config() -> Config:
    """Get Alembic configuration from the project's alembic.ini."""
    project_dir = Path(__file__).parent.parent.parent.parent
    alembic_ini = project_dir / "alembic.ini"

    if not alembic_ini.exists():
        raise FileNotFoundError(f"alembic.ini not found at {alembic_ini}")

    config = Config(str(alembic_ini))
    config.set_main_option("script_location", str(project_dir / "alembic"))
    return config


def run_alembic(name: str, action: Callable[..., None], *args: str) -> None:
    """Run one Alembic command, exiting with status 1 when it fails."""
    try:
        action(get_alembic_config(), *args)
    except Exception as e:
        logger.error("Migration command failed", command=name, error=str(e))
        sys.exit(1)


@click.group()
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
@click.version_option(version=__version__, prog_name="devgraph-migrate")
def main(log_level: str) -> None:
    """Apply or inspect the developers table migrations."""
    configure_logging(debug=(log_level == "debug"), log_level=log_level)


@main.command()
@click.argument("revision", default="head")
def upgrade(revision: str) -> None:
    """Upgrade database to a revision (default: head)."""
    logger.info("Upgrading database", revision=revision)
    run_alembic("upgrade", command.upgrade, revision)


@main.command()
@click.argument("revision", default="-1")
def downgrade(revision: str) -> None:
    """Downgrade database to a revision (default: -1)."""
    logger.info("Downgrading database", revision=revision)
    run_alembic("downgrade", command.downgrade, revision)


@main.command()
def current() -> None:
    """Show current database revision."""
    run_alembic("current", command.current)


@main.command()
def history() -> None:
    """Show migration history."""
    run_alembic("history", command.history)


if __name__ == "__main__":
    main()
