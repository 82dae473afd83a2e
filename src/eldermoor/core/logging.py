"""Structured logging for the Eldermoor engine.

Operator diagnostics (no-op commands, narrator fallbacks, save failures)
are structlog events. The player-facing game log is a separate domain
object kept on the game state and never routed through here.

Example:
    >>> from eldermoor.core.logging import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("Combat started", enemies=2, round=1)
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import structlog
from structlog.types import Processor


if TYPE_CHECKING:
    from structlog.types import EventDict, WrappedLogger


# Chatty HTTP loggers pulled in by the narrative client.
QUIET_LOGGERS = ("httpx", "httpcore", "openai")


def add_engine_context(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Tag every event with the engine name."""
    event_dict.setdefault("app", "eldermoor")
    return event_dict


def _level_number(level: str) -> int:
    return logging.getLevelNamesMapping().get(level.upper(), logging.INFO)


def build_processors(*, json_format: bool) -> list[Processor]:
    """Build the structlog processor chain.

    Args:
        json_format: Render JSON lines instead of the colored console view.

    Returns:
        Processors ending in a renderer.
    """
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_engine_context,
        structlog.processors.StackInfoRenderer(),
    ]
    if json_format:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(exception_formatter=structlog.dev.plain_traceback)
        )
    return processors


def configure_logging(*, level: str = "INFO", json_format: bool = False) -> None:
    """Configure structlog and the stdlib bridge for third-party libraries.

    Args:
        level: Minimum level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_format: Render JSON lines for log shipping.
    """
    threshold = _level_number(level)

    structlog.configure(
        processors=build_processors(json_format=json_format),
        wrapper_class=structlog.make_filtering_bound_logger(threshold),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        level=threshold,
        stream=sys.stdout,
        force=True,
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(threshold, logging.WARNING))


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a structlog logger, typically with ``__name__``."""
    return structlog.get_logger(name)


__all__ = [
    "QUIET_LOGGERS",
    "add_engine_context",
    "build_processors",
    "configure_logging",
    "get_logger",
]
