"""Parser for the verbose version banner printed by ``rustc -vV``.

A banner looks like this::

    rustc 1.47.0 (18bf6b4f0 2020-10-07)
    binary: rustc
    commit-hash: 18bf6b4f01a6feaf7259ba7cdae58031af1b7b39
    commit-date: 2020-10-07
    host: powerpc64le-unknown-linux-gnu
    release: 1.47.0
    LLVM version: 11.0

Its layout changed over time:

- Rust 1.0.0 printed a ``build-date:`` line between ``commit-date:`` and
  ``host:``; later releases dropped it
- the trailing ``LLVM version:`` line only exists in newer releases

The parser therefore reads the fixed lines by index and walks the rest with
a cursor that only advances over ``build-date`` when it is present.
Any ``commit-hash``, ``commit-date`` or ``build-date`` value of ``unknown``
becomes ``None``.

Typical usage::

    from rustc_meta.core.parser import VersionBannerParser

    parser = VersionBannerParser()
    meta = parser.parse(banner_text)
    print(meta.semver, meta.channel, meta.llvm_version)
"""

from __future__ import annotations

from typing import List, Optional

from semantic_version import Version

from rustc_meta.models import Channel, VersionMeta
from rustc_meta.core.llvm import parse_llvm_version
from rustc_meta.exceptions import (
    UnexpectedFormatError,
    UnknownPreReleaseTagError,
    VersionSyntaxError,
)
from rustc_meta.constants import (
    BUILD_DATE_MARKER,
    BUILD_DATE_PREFIX,
    COMMIT_DATE_PREFIX,
    COMMIT_HASH_PREFIX,
    DEFAULT_MAX_BANNER_LINES,
    DEFAULT_MIN_BANNER_LINES,
    FIRST_VARIABLE_LINE,
    HOST_PREFIX,
    LLVM_VERSION_PREFIX,
    RELEASE_PREFIX,
    UNKNOWN_SENTINEL,
)

#: Pre-release identifiers that name a release channel.
_CHANNEL_TAGS = {
    "dev": Channel.DEV,
    "beta": Channel.BETA,
    "nightly": Channel.NIGHTLY,
}


class VersionBannerParser:
    """Parser for ``rustc -vV`` output.

    The parser holds no state besides the accepted line-count range, so a
    single instance can be shared freely, including across threads.

    Args:
        min_lines: Fewest banner lines accepted.
        max_lines: Most banner lines accepted.

    Raises:
        ValueError: If the line-count range is empty or non-positive.
    """

    __slots__ = ("min_lines", "max_lines")

    def __init__(
        self,
        min_lines: int = DEFAULT_MIN_BANNER_LINES,
        max_lines: int = DEFAULT_MAX_BANNER_LINES,
    ) -> None:
        if min_lines < 1 or max_lines < min_lines:
            raise ValueError(
                f"Invalid banner line range: [{min_lines}, {max_lines}]"
            )
        self.min_lines = min_lines
        self.max_lines = max_lines

    def parse(self, text: str) -> VersionMeta:
        """Parse a verbose version banner into :class:`VersionMeta`.

        Args:
            text: Decoded standard output of ``rustc -vV``.

        Returns:
            The parsed :class:`VersionMeta`.

        Raises:
            UnexpectedFormatError: Line count out of range, a required prefix
                is missing, or the LLVM version is malformed.
            VersionSyntaxError: The ``release:`` value is not a valid
                semantic version.
            UnknownPreReleaseTagError: The pre-release tag does not name a
                known channel.
        """
        lines = split_lines(text)

        if not self.min_lines <= len(lines) <= self.max_lines:
            raise UnexpectedFormatError(
                f"unexpected `rustc -vV` format: expected between "
                f"{self.min_lines} and {self.max_lines} lines, got {len(lines)}"
            )

        short_version_string = lines[0]
        commit_hash = _optional(_expect_prefix(lines, 2, COMMIT_HASH_PREFIX))
        commit_date = _optional(_expect_prefix(lines, 3, COMMIT_DATE_PREFIX))

        idx = FIRST_VARIABLE_LINE
        build_date: Optional[str] = None
        if idx < len(lines) and lines[idx].startswith(BUILD_DATE_MARKER):
            build_date = _optional(_expect_prefix(lines, idx, BUILD_DATE_PREFIX))
            idx += 1

        host = _expect_prefix(lines, idx, HOST_PREFIX)
        idx += 1
        release = _expect_prefix(lines, idx, RELEASE_PREFIX)
        idx += 1

        semver = _parse_semver(release)
        channel = channel_for(semver)

        llvm_version = None
        if idx < len(lines):
            llvm_version = parse_llvm_version(
                _expect_prefix(lines, idx, LLVM_VERSION_PREFIX)
            )

        return VersionMeta(
            semver=semver,
            commit_hash=commit_hash,
            commit_date=commit_date,
            build_date=build_date,
            channel=channel,
            host=host,
            short_version_string=short_version_string,
            llvm_version=llvm_version,
        )


def version_meta_for(verbose_version_string: str) -> VersionMeta:
    """Parse ``rustc -vV`` output with the default banner layout.

    Args:
        verbose_version_string: Decoded standard output of ``rustc -vV``.

    Returns:
        The parsed :class:`VersionMeta`.
    """
    return _DEFAULT_PARSER.parse(verbose_version_string)


def channel_for(version: Version) -> Channel:
    """Derive the release channel from a version's pre-release tag.

    Only the first pre-release identifier is inspected.

    Raises:
        UnknownPreReleaseTagError: If the identifier is not a channel name.
    """
    if not version.prerelease:
        return Channel.STABLE

    tag = version.prerelease[0]
    channel = _CHANNEL_TAGS.get(tag)
    if channel is None:
        raise UnknownPreReleaseTagError(tag)
    return channel


def split_lines(text: str) -> List[str]:
    """Split text into lines, removing ``\\n`` or ``\\r\\n`` terminators.

    Unlike :meth:`str.splitlines`, only newline characters end a line, and a
    final terminator does not produce a trailing empty line.
    """
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _expect_prefix(lines: List[str], idx: int, prefix: str) -> str:
    """Return the remainder of ``lines[idx]`` after ``prefix``."""
    if idx >= len(lines):
        raise UnexpectedFormatError(
            f"unexpected `rustc -vV` format: missing {prefix.strip()!r} line",
            line_number=idx,
        )

    line = lines[idx]
    if not line.startswith(prefix):
        raise UnexpectedFormatError(
            f"unexpected `rustc -vV` format: expected {prefix.strip()!r} line",
            line_number=idx,
            line_content=line,
        )
    return line[len(prefix):]


def _optional(value: str) -> Optional[str]:
    """Map the ``unknown`` sentinel to ``None``."""
    return None if value == UNKNOWN_SENTINEL else value


def _parse_semver(release: str) -> Version:
    try:
        return Version(release)
    except ValueError as exc:
        raise VersionSyntaxError(
            f"error parsing version: {exc}",
            version=release,
            original_error=exc,
        ) from exc


_DEFAULT_PARSER = VersionBannerParser()
