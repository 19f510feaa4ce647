"""Compiler invocation for rustc-meta.

Runs ``rustc -vV`` and hands its decoded output to
:class:`~rustc_meta.core.parser.VersionBannerParser`. The executable is
taken from, in order:

1. an explicit argument (``--rustc`` or the ``rustc`` config key)
2. the ``RUSTC`` environment variable
3. ``rustc`` on ``PATH``

Typical usage::

    from rustc_meta.core.runner import version, version_meta

    if version() >= Version("1.40.0"):
        ...

    meta = version_meta()
    print(meta.channel, meta.host)
"""

from __future__ import annotations

import os
import subprocess
from typing import List, Optional, Sequence, Union

from semantic_version import Version

from rustc_meta.models import VersionMeta
from rustc_meta.utils.logger import get_logger
from rustc_meta.core.parser import VersionBannerParser, version_meta_for
from rustc_meta.exceptions import DecodeError, ExecutionError
from rustc_meta.constants import DEFAULT_RUSTC, RUSTC_ENV_VAR, VERBOSE_VERSION_ARGS

logger = get_logger("runner")

Command = Union[str, Sequence[str]]


def resolve_rustc(explicit: Optional[str] = None) -> str:
    """Return the compiler executable to invoke.

    Args:
        explicit: Executable chosen by the caller; wins when non-empty.

    Returns:
        ``explicit``, else ``$RUSTC``, else ``"rustc"``.
    """
    if explicit:
        return explicit
    return os.environ.get(RUSTC_ENV_VAR) or DEFAULT_RUSTC


def run_verbose_version(command: Command) -> str:
    """Run ``<command> -vV`` and return its decoded standard output.

    Only standard output is inspected. A non-zero exit status is logged
    but not treated as an error here; the banner parser rejects output
    that does not look like a version banner.

    Args:
        command: Executable name, or an argument list whose first element
            is the executable (e.g. ``["rustup", "run", "nightly", "rustc"]``).

    Returns:
        The UTF-8 decoded standard output.

    Raises:
        ExecutionError: The command could not be started.
        DecodeError: The output is not valid UTF-8.
    """
    argv = _build_argv(command)
    logger.debug("Running %s", " ".join(argv))

    try:
        completed = subprocess.run(
            argv,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            check=False,
        )
    except OSError as exc:
        raise ExecutionError(
            f"could not execute command: {exc}",
            command=argv,
            original_error=exc,
        ) from exc

    if completed.returncode != 0:
        logger.debug(
            "%s exited with status %d", argv[0], completed.returncode
        )

    return decode_banner(completed.stdout)


def decode_banner(raw: bytes) -> str:
    """Decode raw ``rustc -vV`` output as UTF-8.

    Used for compiler output as well as banners read from a file or stdin,
    so every source reports undecodable bytes the same way.

    Raises:
        DecodeError: ``raw`` is not valid UTF-8.
    """
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DecodeError(original_error=exc) from exc


def version_meta_for_command(
    command: Command,
    *,
    parser: Optional[VersionBannerParser] = None,
) -> VersionMeta:
    """Return the version metadata for ``command``, a ``rustc`` command.

    Args:
        command: Executable or argument list, see :func:`run_verbose_version`.
        parser: Parser to use; defaults to the standard banner layout.

    Returns:
        The parsed :class:`VersionMeta`.
    """
    output = run_verbose_version(command)
    if parser is None:
        return version_meta_for(output)
    return parser.parse(output)


def version_meta(
    rustc: Optional[str] = None,
    *,
    parser: Optional[VersionBannerParser] = None,
) -> VersionMeta:
    """Return the ``rustc`` version and metadata like commit hash and host."""
    return version_meta_for_command(resolve_rustc(rustc), parser=parser)


def version(rustc: Optional[str] = None) -> Version:
    """Return the ``rustc`` semantic version."""
    return version_meta(rustc).semver


def _build_argv(command: Command) -> List[str]:
    if isinstance(command, str):
        return [command, *VERBOSE_VERSION_ARGS]
    return [*command, *VERBOSE_VERSION_ARGS]
