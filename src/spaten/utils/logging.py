from __future__ import annotations

import logging
import os
import sys
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Iterator, Optional, TextIO, cast

import structlog
from structlog.dev import ConsoleRenderer
from structlog.stdlib import BoundLogger
from structlog.types import Processor

from spaten import __version__ as SPATEN_VERSION

if TYPE_CHECKING:
    from spaten.config.config import ReaderConfig


def _coerce_level(level: str | int) -> int:
    """Translate a string/int level into the numeric logging level."""
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if isinstance(resolved, str):
            raise ValueError(f"Invalid log level: {level}")
        return int(resolved)
    return int(level)


def configure_logging(
    level: str | int = "INFO",
    json_output: bool = False,
    stream: Optional[TextIO] = None,
) -> None:
    """
    Route structlog through stdlib logging.

    Args:
        level: Minimum level name or number
        json_output: Render JSON lines instead of console output
        stream: Where log lines go (default: stderr, stdout carries decoded output)
    """
    numeric_level = _coerce_level(level)
    renderer = structlog.processors.JSONRenderer() if json_output else ConsoleRenderer()

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=renderer,
            foreign_pre_chain=shared_processors,
        )
    )

    logging.basicConfig(level=numeric_level, handlers=[handler], force=True)
    logging.captureWarnings(True)


def configure_from_config(config: "ReaderConfig", stream: Optional[TextIO] = None) -> None:
    """Apply the log settings of a ReaderConfig."""
    configure_logging(
        level=config.log_level,
        json_output=config.json_logs,
        stream=stream,
    )


def get_logger(name: str) -> BoundLogger:
    """Return a structlog logger with service name and package version bound."""
    service_name = os.getenv("SERVICE_NAME", "spaten")
    version = os.getenv("APP_VERSION", SPATEN_VERSION)
    return cast(
        BoundLogger,
        structlog.get_logger(name).bind(service_name=service_name, version=version),
    )


@contextmanager
def log_context(**kwargs: Any) -> Iterator[None]:
    """Bind context (e.g. the file being decoded) to every log line inside the block."""
    if not kwargs:
        yield
        return

    with structlog.contextvars.bound_contextvars(**kwargs):
        yield
