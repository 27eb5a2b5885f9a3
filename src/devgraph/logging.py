"""
Logging setup: structlog over the stdlib logging module, one request id per request
"""

import logging
import sys
import uuid

import structlog
from structlog.contextvars import bind_contextvars, get_contextvars, unbind_contextvars


def configure_logging(
    debug: bool = False,
    log_level: str | None = None,
    console: bool | None = None,
) -> None:
    """Configure structlog processors and the root stdlib logger.

    Args:
        debug: Lowers the default level to DEBUG.
        log_level: Level name that overrides the one implied by ``debug``.
        console: Render coloured console lines instead of JSON (defaults to ``debug``).
    """
    level = logging.getLevelName((log_level or ("DEBUG" if debug else "INFO")).upper())
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(level=level, stream=sys.stdout, format="%(message)s", force=True)

    if console is None:
        console = debug
    renderer = (
        structlog.dev.ConsoleRenderer(colors=True)
        if console
        else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="ISO", utc=True),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def generate_request_id() -> str:
    return uuid.uuid4().hex[:16]


def set_request_context(request_id: str | None = None) -> str:
    """Bind a request id (generated when not given) to every log line of this context."""
    request_id = request_id or generate_request_id()
    bind_contextvars(request_id=request_id)
    return request_id


def clear_request_context() -> None:
    unbind_contextvars("request_id")


def get_request_id() -> str | None:
    return get_contextvars().get("request_id")
