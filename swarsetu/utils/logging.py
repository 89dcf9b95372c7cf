# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""structlog setup for the SWARSETU service.

Analysis modules log through ``get_logger(__name__)`` and never configure
logging themselves; the API lifespan calls ``setup_logging`` once. Output
is a colored console stream while developing and one JSON object per line
elsewhere.

Example:
    >>> setup_logging(get_settings())
    >>> with log_context(student_name="Asha"):
    ...     get_logger(__name__).info("Session report built", drawings=3)
"""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

import structlog
from structlog.types import Processor

if TYPE_CHECKING:
    from swarsetu.core.config.settings import Settings

PACKAGE_LOGGER = "swarsetu"

# Capped at WARNING.
NOISY_LOGGERS = ("uvicorn", "uvicorn.access", "uvicorn.error", "httpx")


def _processors(settings: "Settings") -> list[Processor]:
    chain: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if settings.is_development or settings.debug:
        chain.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        chain.append(structlog.processors.format_exc_info)
        chain.append(structlog.processors.JSONRenderer())
    return chain


def setup_logging(settings: "Settings") -> None:
    """Route structlog events through stdlib logging on stdout.

    Args:
        settings: Supplies ``log_level`` and the environment that picks
            the console or JSON renderer.
    """
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    structlog.configure(
        processors=_processors(settings),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger(PACKAGE_LOGGER).setLevel(level)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return the structlog logger for a module."""
    return structlog.get_logger(name)


def bind_context(**kwargs: object) -> None:
    """Attach key-value pairs to every event logged from this context."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Drop every key attached with ``bind_context``."""
    structlog.contextvars.clear_contextvars()


@contextmanager
def log_context(**kwargs: object) -> Iterator[None]:
    """Bind context for the duration of a block, e.g. one API request.

    Example:
        >>> with log_context(student_name="Asha"):
        ...     service.analyze(strokes, 1500, 300, 300)
    """
    bind_context(**kwargs)
    try:
        yield
    finally:
        clear_context()
