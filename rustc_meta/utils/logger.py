"""
Logging for rustc-meta.

Library modules call :func:`get_logger` and never install handlers, so
``import rustc_meta`` stays silent inside build scripts. The CLI calls
:func:`setup_logging` once per invocation with the ``-v`` count and the
``--color`` flag; diagnostics go to stderr so ``show --format json`` output
on stdout stays machine readable.
"""

from __future__ import annotations

import os
import sys
import logging
from typing import IO, Optional

from rustc_meta.constants import (
    LOG_DATE_FORMAT,
    LOG_DEFAULT_FORMAT,
    LOG_VERBOSE_FORMAT,
)

_ROOT_LOGGER_NAME = "rustc_meta"

#: ``-v`` count -> level; anything above the last entry is DEBUG.
_VERBOSITY_LEVELS = (logging.WARNING, logging.INFO, logging.DEBUG)


class ColoredFormatter(logging.Formatter):
    """Formatter that wraps the level name in an ANSI color.

    Whether to color is decided once, by :func:`setup_logging`, from the
    target stream; the formatter itself never inspects the environment.
    """

    COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(
        self,
        fmt: str,
        *,
        datefmt: Optional[str] = None,
        use_color: bool = False,
    ) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelno) if self.use_color else None
        if color is None:
            return super().format(record)

        levelname = record.levelname
        record.levelname = f"{color}{levelname}{self.RESET}"
        try:
            return super().format(record)
        finally:
            # Records are shared between handlers
            record.levelname = levelname


def level_for_verbosity(verbosity: int) -> int:
    """Map the CLI's ``-v`` count to a logging level."""
    index = min(max(verbosity, 0), len(_VERBOSITY_LEVELS) - 1)
    return _VERBOSITY_LEVELS[index]


def _stream_supports_color(stream: IO[str]) -> bool:
    if os.environ.get("NO_COLOR") or os.environ.get("CI"):
        return False
    try:
        return stream.isatty()
    except (AttributeError, OSError, ValueError):
        return False


def setup_logging(
    verbosity: int = 0,
    *,
    color: bool = True,
    stream: Optional[IO[str]] = None,
) -> None:
    """Install the rustc-meta log handler.

    Each call replaces the previous handler, so invoking the CLI several
    times in one process does not duplicate output.

    Args:
        verbosity: Number of ``-v`` flags. 0 shows warnings, 1 adds
            progress messages, 2 or more adds debug output with timestamps
            and logger names.
        color: ``False`` disables ANSI colors even on a terminal.
        stream: Output stream; defaults to ``sys.stderr``.
    """
    stream = stream or sys.stderr
    level = level_for_verbosity(verbosity)

    handler = logging.StreamHandler(stream)
    handler.setLevel(level)
    handler.setFormatter(
        ColoredFormatter(
            LOG_VERBOSE_FORMAT if verbosity > 1 else LOG_DEFAULT_FORMAT,
            datefmt=LOG_DATE_FORMAT,
            use_color=color and _stream_supports_color(stream),
        )
    )

    root_logger = logging.getLogger(_ROOT_LOGGER_NAME)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)
    root_logger.propagate = False


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger in the ``rustc_meta`` namespace.

    ``get_logger("runner")`` and ``get_logger("rustc_meta.runner")`` return
    the same logger.
    """
    if not name or name == _ROOT_LOGGER_NAME:
        return logging.getLogger(_ROOT_LOGGER_NAME)
    if name.startswith(_ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_ROOT_LOGGER_NAME}.{name}")


# Silent until setup_logging installs a real handler
logging.getLogger(_ROOT_LOGGER_NAME).addHandler(logging.NullHandler())
