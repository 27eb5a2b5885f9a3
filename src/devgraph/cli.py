#!/usr/bin/env python3
"""
Main CLI entry point for the devgraph API server.
"""

import os
import sys

import click
import uvicorn

from devgraph import __version__
from devgraph.config import settings
from devgraph.logging import configure_logging, get_logger

logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="devgraph")
def cli() -> None:
    """devgraph CLI - run the developer GraphQL API."""
    pass


@cli.command()
@click.option(
    "--host",
    default=settings.api_host,
    show_default=True,
    help="Host to bind to",
)
@click.option(
    "--port",
    default=settings.api_port,
    show_default=True,
    type=int,
    help="Port to bind to",
)
@click.option(
    "--reload",
    is_flag=True,
    default=False,
    help="Enable auto-reload for development",
)
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
def serve(host: str, port: int, reload: bool, log_level: str) -> None:
    """Start the devgraph API server."""
    configure_logging(debug=(log_level == "debug"), log_level=log_level)

    logger.info(
        "Starting devgraph API server",
        host=host,
        port=port,
        reload=reload,
        log_level=log_level,
    )

    # Exported so the app module picks them up when uvicorn imports it
    os.environ["DEVGRAPH_API_HOST"] = host
    os.environ["DEVGRAPH_API_PORT"] = str(port)
    if log_level == "debug":
        os.environ["DEVGRAPH_DEBUG"] = "true"
    os.environ.setdefault("DEVGRAPH_LOG_LEVEL", log_level)

    try:
        uvicorn.run(
            "devgraph.api.app:app",
            host=host,
            port=port,
            reload=reload,
            log_level=log_level,
            access_log=True,
        )
    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user")
    except Exception as e:
        logger.error("Server startup failed", error=str(e))
        sys.exit(1)


if __name__ == "__main__":
    cli()
