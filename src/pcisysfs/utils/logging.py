"""structlog configuration shared by the library, CLI and API."""

from __future__ import annotations

import logging
import sys

import structlog


def _configure(renderer: structlog.typing.Processor) -> None:
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


def setup_logging(level: str = "INFO", json_output: bool = False) -> None:
    """Configure stdlib logging and structlog.

    Log records go to stderr so that command output on stdout stays parseable.

    Args:
        level: Minimum log level name (DEBUG, INFO, WARNING, ...).
        json_output: Render log events as JSON lines instead of console text.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(log_level)

    _configure(
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=False)
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger bound to ``name``.

    Until the application configures logging, events are routed to the stdlib
    ``logging`` tree, which the embedding program controls.
    """
    if not structlog.is_configured():
        _configure(structlog.processors.KeyValueRenderer(key_order=["event"]))
    return structlog.get_logger(name)
