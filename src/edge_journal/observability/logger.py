"""Structured logging for CLI runs.

structlog renders every entry; library modules keep using
``logging.getLogger(__name__)`` and pass through the same stdlib root
handler.  Each CLI invocation binds a ``run_id`` and the command name
into structlog's context vars so one run's lines can be picked out of a
shared log file.
"""

from __future__ import annotations

import logging
import sys
import uuid
from typing import Any

import structlog

from ..core.config import ObservabilityConfig

# HTTP client chatter from the insight call; only shown at DEBUG
_NOISY_LOGGERS = ("anthropic", "httpx", "httpcore")


def start_run(command: str) -> str:
    """Bind a fresh run id and *command* to every following log entry."""
    run_id = uuid.uuid4().hex[:12]
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(run_id=run_id, command=command)
    return run_id


def setup_logging(
    config: ObservabilityConfig | None = None,
    *,
    level: str | None = None,
) -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        config: Level and renderer ("json" or "console").  Defaults apply
            when omitted.
        level: Overrides ``config.log_level`` (e.g. from ``--log-level``).
    """
    config = config or ObservabilityConfig()
    log_level = getattr(logging, (level or config.log_level).upper(), logging.INFO)

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
    ]
    if config.log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Reports go to stdout
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=log_level)
    logging.getLogger().setLevel(log_level)

    quiet = logging.DEBUG if log_level <= logging.DEBUG else logging.WARNING
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(quiet)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger for a module."""
    return structlog.get_logger(name)
