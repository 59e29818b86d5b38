from __future__ import annotations

import logging
import sys
from typing import Any

import orjson
import structlog


def _json_serializer(obj: Any, default: Any) -> str:
    return orjson.dumps(obj, default=default).decode("utf-8")


def _stderr_logger(*args: Any) -> structlog.PrintLogger:
    # Resolved per call so a swapped sys.stderr is honoured
    return structlog.PrintLogger(file=sys.stderr)


def configure_logging(*, level: str = "WARNING", json_logs: bool = False) -> None:
    """Configure structured logging for the process.

    Logs go to stderr: stdout carries CLI output and the MCP stdio transport.
    """
    log_level = getattr(logging, level.upper(), logging.WARNING)

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]
    if json_logs:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(serializer=_json_serializer),
        ]
    else:
        # ConsoleRenderer formats exceptions itself
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=_stderr_logger,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        cache_logger_on_first_use=False,
    )

    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def bind_context(**values: Any) -> None:
    """Bind contextual information to all future log entries."""
    structlog.contextvars.bind_contextvars(**values)
