"""
Centralized constants for rustc-meta.

This module defines immutable values used across rustc-meta, including the
literal prefixes of the ``rustc -vV`` banner, the accepted banner shape,
command defaults, and logging formats. All values are intended to be
treated as read-only.
"""

from typing import Final, Sequence

# ---------------------------------------------------------------------------
# Compiler invocation
# ---------------------------------------------------------------------------

#: Environment variable selecting the compiler executable.
RUSTC_ENV_VAR: Final[str] = "RUSTC"

#: Executable used when neither configuration nor environment name one.
DEFAULT_RUSTC: Final[str] = "rustc"

#: Arguments requesting the verbose version banner.
VERBOSE_VERSION_ARGS: Final[Sequence[str]] = ("-vV",)

# ---------------------------------------------------------------------------
# Banner layout
# ---------------------------------------------------------------------------

#: Fewest lines of a recognized banner (no build-date, no LLVM line).
DEFAULT_MIN_BANNER_LINES: Final[int] = 6

#: Most lines of a recognized banner (build-date and LLVM line present).
DEFAULT_MAX_BANNER_LINES: Final[int] = 8

#: Index of the first line whose position depends on optional lines.
FIRST_VARIABLE_LINE: Final[int] = 4

COMMIT_HASH_PREFIX: Final[str] = "commit-hash: "
COMMIT_DATE_PREFIX: Final[str] = "commit-date: "
BUILD_DATE_MARKER: Final[str] = "build-date"
BUILD_DATE_PREFIX: Final[str] = "build-date: "
HOST_PREFIX: Final[str] = "host: "
RELEASE_PREFIX: Final[str] = "release: "
LLVM_VERSION_PREFIX: Final[str] = "LLVM version: "

#: Field value rustc prints when the information was not recorded.
UNKNOWN_SENTINEL: Final[str] = "unknown"

# ---------------------------------------------------------------------------
# LLVM versioning
# ---------------------------------------------------------------------------

#: First LLVM major release whose minor component is always zero.
LLVM_SINGLE_NUMBER_MAJOR: Final[int] = 4

# ---------------------------------------------------------------------------
# Security constraints
# ---------------------------------------------------------------------------

#: Maximum allowed size (in bytes) of a saved banner file.
MAX_BANNER_SIZE: Final[int] = 64 * 1024  # 64 KB

# ---------------------------------------------------------------------------
# Logging configuration
# ---------------------------------------------------------------------------

#: Timestamp format for verbose logging.
LOG_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

#: Default log format (non-verbose).
LOG_DEFAULT_FORMAT: Final[str] = "%(levelname)s: %(message)s"

#: Verbose log format including timestamp and logger name.
LOG_VERBOSE_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
