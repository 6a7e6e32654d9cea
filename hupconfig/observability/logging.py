"""Structured logging setup for the configuration engine."""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TextIO

import structlog

from hupconfig.settings import EngineSettings, get_settings


def configure_logging(
    settings: EngineSettings | None = None,
    output: TextIO = sys.stderr,
) -> None:
    """Configure structlog from engine settings.

    Host applications that configure structlog themselves can skip this;
    the engine only emits through ``structlog.get_logger()``.

    Args:
        settings: Engine settings (default: read from the environment).
        output: Output stream (default: stderr).
    """
    settings = settings or get_settings()
    level = settings.logging_level()

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
    ]
    if settings.json_logs:
        processors.append(structlog.processors.JSONRenderer(sort_keys=True))
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=output),
        cache_logger_on_first_use=False,
    )
    logging.basicConfig(format="%(message)s", stream=output, level=level)


@contextmanager
def reload_context(source_location: str, reload_number: int) -> Iterator[None]:
    """Bind reload identifiers to every log line emitted inside the block.

    Context variables are per thread, so this only affects the reload
    thread that enters it.

    Args:
        source_location: Path of the configuration file being reloaded.
        reload_number: 1-based count of reloads for this store.
    """
    bound = structlog.contextvars.bind_contextvars(
        source_location=source_location, reload_number=reload_number
    )
    try:
        yield
    finally:
        structlog.contextvars.reset_contextvars(**bound)
