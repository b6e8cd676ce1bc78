"""Logging for the ``statement_merger`` package.

Library modules call ``get_logger("statement_merger.<module>")`` and never
attach handlers. The CLI calls :func:`configure_logging` once, handing over
the same rich ``Console`` it prints status tables to, so log records and
tables interleave on stderr without corrupting the CSV on stdout.
"""

from __future__ import annotations

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "statement_merger"
LEVEL_ENV_VAR = "STATEMENT_MERGER_LOG_LEVEL"


def resolve_level(level: int | str | None = None) -> int:
    """Resolve ``level``, then ``STATEMENT_MERGER_LOG_LEVEL``, then INFO.

    Unknown names fall through to the next source instead of raising.
    """

    for candidate in (level, os.getenv(LEVEL_ENV_VAR)):
        if isinstance(candidate, int):
            return candidate
        if isinstance(candidate, str) and candidate.strip():
            name = candidate.strip().upper()
            if name.isdigit():
                return int(name)
            numeric = logging.getLevelName(name)
            if isinstance(numeric, int):
                return numeric
    return logging.INFO


def _owned(handler: logging.Handler) -> bool:
    return getattr(handler, "_statement_merger", False)


def configure_logging(
    level: int | str | None = None,
    *,
    console: Console | None = None,
    force: bool = False,
) -> logging.Logger:
    """Route the package logger through a :class:`rich.logging.RichHandler`.

    A second call is a no-op unless ``force`` is set, in which case the
    previously installed handler is replaced (the CLI runs once per
    process, tests reconfigure freely). Returns the package logger.
    """

    logger = logging.getLogger(PACKAGE_LOGGER)
    if any(_owned(h) for h in logger.handlers) and not force:
        return logger

    for h in list(logger.handlers):
        if _owned(h) or isinstance(h, logging.NullHandler):
            logger.removeHandler(h)

    resolved = resolve_level(level)
    handler = RichHandler(
        console=console or Console(stderr=True),
        level=resolved,
        show_path=False,
        markup=False,
        rich_tracebacks=False,
        log_time_format="[%X]",
    )
    handler._statement_merger = True  # type: ignore[attr-defined]

    logger.setLevel(resolved)
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return ``name``'s logger, silent until :func:`configure_logging` runs."""

    pkg_logger = logging.getLogger(PACKAGE_LOGGER)
    if not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)


__all__ = ["configure_logging", "get_logger", "resolve_level"]
