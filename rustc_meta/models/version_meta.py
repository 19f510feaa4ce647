"""
Version metadata model for rustc-meta.

:class:`VersionMeta` is the immutable result of parsing a ``rustc -vV``
banner: the compiler's semantic version plus build metadata such as the
commit hash, host triple and LLVM version.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from semantic_version import Version

from rustc_meta.models.channel import Channel
from rustc_meta.models.llvm_version import LLVMVersion


@dataclass(frozen=True)
class VersionMeta:
    """Rustc version plus metadata like git short hash and build date.

    Attributes:
        semver: Version of the compiler.
        commit_hash: Git hash of the build, or ``None`` if unknown.
        commit_date: Commit date of the build, or ``None`` if unknown.
        build_date: Build date of the compiler. The line was removed between
            Rust 1.0.0 and 1.1.0, so it is usually ``None``.
        channel: Release channel of the compiler.
        host: Host target triple of the compiler.
        short_version_string: First line of the banner, verbatim.
        llvm_version: Version of LLVM used by the compiler, if reported.
    """

    semver: Version
    commit_hash: Optional[str]
    commit_date: Optional[str]
    build_date: Optional[str]
    channel: Channel
    host: str
    short_version_string: str
    llvm_version: Optional[LLVMVersion] = None

    def to_json(self) -> Dict[str, Any]:
        """Return a JSON-serializable representation of the metadata.

        Example::

            {
                "version": "1.47.0",
                "channel": "stable",
                "commit_hash": "18bf6b4f01a6feaf7259ba7cdae58031af1b7b39",
                "commit_date": "2020-10-07",
                "build_date": None,
                "host": "powerpc64le-unknown-linux-gnu",
                "short_version_string": "rustc 1.47.0 (18bf6b4f0 2020-10-07)",
                "llvm_version": "11.0",
            }
        """
        return {
            "version": str(self.semver),
            "channel": self.channel.value,
            "commit_hash": self.commit_hash,
            "commit_date": self.commit_date,
            "build_date": self.build_date,
            "host": self.host,
            "short_version_string": self.short_version_string,
            "llvm_version": (
                str(self.llvm_version) if self.llvm_version is not None else None
            ),
        }
