"""
Core functionality exports for rustc-meta.

This module provides convenient access to the core subsystems of rustc-meta.
Importing from here keeps user-facing imports clean and stable:

    from rustc_meta.core import VersionBannerParser, version_meta_for
"""

from __future__ import annotations

from rustc_meta.core.llvm import parse_llvm_version
from rustc_meta.core.parser import VersionBannerParser, channel_for, version_meta_for
from rustc_meta.core.runner import (
    decode_banner,
    resolve_rustc,
    run_verbose_version,
    version,
    version_meta,
    version_meta_for_command,
)

__all__ = [
    "VersionBannerParser",
    "version_meta_for",
    "channel_for",
    "parse_llvm_version",
    "decode_banner",
    "resolve_rustc",
    "run_verbose_version",
    "version_meta_for_command",
    "version_meta",
    "version",
]
