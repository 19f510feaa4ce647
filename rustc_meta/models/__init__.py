"""
Unified data model exports for rustc-meta.

This module re-exports all core data models to provide a stable and
convenient public API. Users can import models directly from
``rustc_meta.models`` instead of individual submodules.

Example:
    >>> from rustc_meta.models import Channel, LLVMVersion, VersionMeta
"""

from __future__ import annotations

from rustc_meta.models.channel import Channel
from rustc_meta.models.llvm_version import LLVMVersion
from rustc_meta.models.version_meta import VersionMeta

__all__ = [
    "Channel",
    "LLVMVersion",
    "VersionMeta",
]
