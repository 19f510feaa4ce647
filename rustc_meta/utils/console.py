"""
Console output utilities for rustc-meta using Rich.

This module provides user-facing output helpers for CLI commands.
For diagnostic or debug output, use :mod:`rustc_meta.utils.logger`.

Guidelines:
- print_* functions: user-facing status messages
- print_table: structured CLI output
- Logging should never go through this module
"""

from __future__ import annotations

import os
import sys
import threading
from typing import Any, Dict, List, Optional

from rich.table import Table
from rich.theme import Theme
from rich.console import Console

# ---------------------------------------------------------------------------
# Theme configuration
# ---------------------------------------------------------------------------

RUSTC_META_THEME = Theme(
    {
        "success": "bold green",
        "error": "bold red",
        "warning": "bold yellow",
        "info": "bold cyan",
        "dim": "dim",
        "highlight": "bold magenta",
    }
)

# ---------------------------------------------------------------------------
# Console lifecycle management
# ---------------------------------------------------------------------------

_console: Optional[Console] = None
_console_lock = threading.Lock()


def _should_use_color() -> bool:
    """Return True if colored output should be enabled."""
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("CI"):
        return False
    try:
        return sys.stdout.isatty()
    except (AttributeError, OSError):
        return False


def _get_console() -> Console:
    """Return a singleton Rich Console instance."""
    global _console

    if _console is None:
        with _console_lock:
            if _console is None:
                use_color = _should_use_color()
                _console = Console(
                    theme=RUSTC_META_THEME,
                    no_color=not use_color,
                    highlight=use_color,
                )
    return _console


def reconfigure_console() -> None:
    """Reset the global console instance.

    Useful if environment variables (e.g. NO_COLOR) or the standard
    streams change at runtime.
    """
    global _console
    with _console_lock:
        _console = None


# ---------------------------------------------------------------------------
# Status message helpers
# ---------------------------------------------------------------------------


def print_success(message: str, *, prefix: str = "[OK]") -> None:
    """Print a success message."""
    _get_console().print(f"{prefix} {message}", style="success", markup=False)


def print_error(message: str, *, prefix: str = "[ERROR]") -> None:
    """Print an error message."""
    _get_console().print(f"{prefix} {message}", style="error", markup=False)


def print_warning(message: str, *, prefix: str = "[WARNING]") -> None:
    """Print a warning message."""
    _get_console().print(f"{prefix} {message}", style="warning", markup=False)


# ---------------------------------------------------------------------------
# Structured output
# ---------------------------------------------------------------------------


def print_table(
    data: List[Dict[str, Any]],
    *,
    headers: Optional[List[str]] = None,
    title: Optional[str] = None,
    column_styles: Optional[Dict[str, Dict[str, Any]]] = None,
    show_header: bool = True,
) -> None:
    """Render structured data as a Rich table.

    Args:
        data: List of row dictionaries.
        headers: Column order. Defaults to keys of the first row.
        title: Optional table title.
        column_styles: Per-column style configuration.
        show_header: Whether to render the header row.
    """
    if not data:
        return

    if headers is None:
        headers = list(data[0].keys())

    table = Table(
        title=title,
        show_header=show_header,
        header_style="bold",
    )

    column_styles = column_styles or {}
    for header in headers:
        config = column_styles.get(header, {})
        table.add_column(
            header,
            style=config.get("style"),
            justify=config.get("justify", "default"),
            no_wrap=config.get("no_wrap", False),
            overflow=config.get("overflow", "fold"),
        )

    for row in data:
        table.add_row(*(str(row.get(h, "")) for h in headers))

    _get_console().print(table)


# ---------------------------------------------------------------------------
# Advanced / internal helpers
# ---------------------------------------------------------------------------


def get_raw_console() -> Console:
    """Return the underlying Rich Console instance."""
    return _get_console()


def colorize_channel(channel: str) -> str:
    """Return a Rich-markup colored release channel label.

    Args:
        channel: Release channel name.

    Returns:
        Rich markup string.
    """
    color_map = {
        "stable": "green",
        "beta": "yellow",
        "nightly": "magenta",
        "dev": "red",
    }

    color = color_map.get(channel.lower())
    return f"[{color}]{channel}[/{color}]" if color else channel
