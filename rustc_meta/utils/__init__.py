"""
Utility helpers for rustc-meta.

This package provides reusable utilities used across rustc-meta, including:

- Console output helpers (Rich-based)
- Logging configuration and retrieval
- Filesystem safety helpers

Only symbols listed in ``__all__`` are considered part of the public API.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Logging utilities
# ---------------------------------------------------------------------------

from rustc_meta.utils.logger import (
    get_logger,
    level_for_verbosity,
    setup_logging,
)

# ---------------------------------------------------------------------------
# Filesystem utilities
# ---------------------------------------------------------------------------

from rustc_meta.utils.filesystem import safe_read_bytes

# ---------------------------------------------------------------------------
# Console utilities
# ---------------------------------------------------------------------------

from rustc_meta.utils.console import (
    colorize_channel,
    get_raw_console,
    print_error,
    print_success,
    print_table,
    print_warning,
    reconfigure_console,
)

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

__all__ = [
    # Console
    "print_error",
    "print_table",
    "print_success",
    "print_warning",
    "get_raw_console",
    "reconfigure_console",
    "colorize_channel",
    # Logging
    "get_logger",
    "setup_logging",
    "level_for_verbosity",
    # Filesystem
    "safe_read_bytes",
]
