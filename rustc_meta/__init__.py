"""
rustc-meta: structured version metadata for the Rust compiler

rustc-meta runs ``rustc -vV`` (or reads its saved output) and turns the
verbose version banner into a typed record: the semantic version, the
release channel, commit hash and date, host triple and LLVM version.
Build scripts and tooling can then branch on compiler capabilities
without scraping free-form text themselves.

Example::

    from semantic_version import Version
    from rustc_meta import Channel, version, version_meta

    # Check for a minimum version
    if version() >= Version("1.40.0"):
        ...

    # Branch on the release channel
    if version_meta().channel == Channel.NIGHTLY:
        ...
"""

from __future__ import annotations

from rustc_meta.__version__ import __version__
from rustc_meta.models import Channel, LLVMVersion, VersionMeta
from rustc_meta.core import (
    VersionBannerParser,
    parse_llvm_version,
    version,
    version_meta,
    version_meta_for,
    version_meta_for_command,
)
from rustc_meta.exceptions import (
    ConfigError,
    DecodeError,
    ExecutionError,
    FileOperationError,
    LLVMVersionError,
    LLVMVersionErrorKind,
    RustcMetaError,
    UnexpectedFormatError,
    UnknownPreReleaseTagError,
    VersionSyntaxError,
)

# ---------------------------------------------------------------------------
# Package Metadata
# ---------------------------------------------------------------------------

__license__ = "Apache-2.0"
__description__ = "Structured version metadata from `rustc -vV`."

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

__all__ = [
    "__version__",
    # Models
    "Channel",
    "LLVMVersion",
    "VersionMeta",
    # Parsing and invocation
    "VersionBannerParser",
    "parse_llvm_version",
    "version_meta_for",
    "version_meta_for_command",
    "version_meta",
    "version",
    # Errors
    "RustcMetaError",
    "ExecutionError",
    "DecodeError",
    "UnexpectedFormatError",
    "LLVMVersionError",
    "LLVMVersionErrorKind",
    "VersionSyntaxError",
    "UnknownPreReleaseTagError",
    "ConfigError",
    "FileOperationError",
]
