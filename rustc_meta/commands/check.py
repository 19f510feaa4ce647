"""Check command implementation for rustc-meta.

Verifies that the Rust compiler satisfies simple minimums, the way a build
script would before enabling a feature:

- ``--min-version``: compiler version is at least the given semantic
  version (pre-releases sort before their release, so ``1.50.0-nightly``
  does not satisfy ``1.50.0``)
- ``--channel``: compiler comes from exactly the given release channel
- ``--min-llvm``: compiler reports an LLVM version at least the given one

Each option is a single comparison; version ranges are not supported.

Typical usage::

    $ rustc-meta check --min-version 1.56.0
    $ rustc-meta check --channel nightly --min-llvm 12.0
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Optional, Tuple

import click
from semantic_version import Version

from rustc_meta.core import parse_llvm_version
from rustc_meta.models import Channel, LLVMVersion, VersionMeta
from rustc_meta.exceptions import RustcMetaError
from rustc_meta.context import pass_context, RustcMetaContext
from rustc_meta.commands.common import load_version_meta, source_options
from rustc_meta.utils import get_logger, print_error, print_success

logger = get_logger("commands.check")

#: (passed, description) for each requested check.
CheckResult = Tuple[bool, str]


def _parse_min_version(
    ctx: click.Context, param: click.Parameter, value: Optional[str]
) -> Optional[Version]:
    if value is None:
        return None
    try:
        return Version(value)
    except ValueError as exc:
        raise click.BadParameter(str(exc), ctx=ctx, param=param) from exc


def _parse_min_llvm(
    ctx: click.Context, param: click.Parameter, value: Optional[str]
) -> Optional[LLVMVersion]:
    if value is None:
        return None
    try:
        return parse_llvm_version(value)
    except RustcMetaError as exc:
        raise click.BadParameter(exc.message, ctx=ctx, param=param) from exc


@click.command()
@source_options
@click.option(
    "--min-version",
    metavar="VERSION",
    callback=_parse_min_version,
    help="Minimum compiler version, e.g. 1.56.0.",
)
@click.option(
    "--channel",
    type=click.Choice([c.value for c in Channel], case_sensitive=False),
    help="Required release channel.",
)
@click.option(
    "--min-llvm",
    metavar="MAJOR.MINOR",
    callback=_parse_min_llvm,
    help="Minimum LLVM version, e.g. 12.0.",
)
@pass_context
def check(
    ctx: RustcMetaContext,
    input_path: Optional[Path],
    rustc: Optional[str],
    min_version: Optional[Version],
    channel: Optional[str],
    min_llvm: Optional[LLVMVersion],
) -> None:
    """Check the Rust compiler against version requirements.

    Exits 0 if every requested check passes, 1 if any check fails or the
    version banner could not be obtained.
    """
    try:
        meta = load_version_meta(ctx, input_path, rustc)
    except RustcMetaError as e:
        print_error(f"{e}")
        logger.debug("Failed to obtain version metadata", exc_info=True)
        sys.exit(1)

    required_channel = Channel.from_name(channel) if channel else None
    results = evaluate_checks(
        meta,
        min_version=min_version,
        channel=required_channel,
        min_llvm=min_llvm,
    )

    if not results:
        print_success(f"{meta.short_version_string} (no checks requested)")
        sys.exit(0)

    failed = 0
    for passed, description in results:
        if passed:
            print_success(description)
        else:
            print_error(description, prefix="[FAIL]")
            failed += 1

    logger.info("%d of %d check(s) failed", failed, len(results))
    sys.exit(1 if failed else 0)


def evaluate_checks(
    meta: VersionMeta,
    *,
    min_version: Optional[Version] = None,
    channel: Optional[Channel] = None,
    min_llvm: Optional[LLVMVersion] = None,
) -> List[CheckResult]:
    """Evaluate the requested checks against ``meta``.

    Args:
        meta: Parsed compiler metadata.
        min_version: Minimum compiler version, if requested.
        channel: Required release channel, if requested.
        min_llvm: Minimum LLVM version, if requested.

    Returns:
        One ``(passed, description)`` tuple per requested check, in the
        order version, channel, LLVM.
    """
    results: List[CheckResult] = []

    if min_version is not None:
        results.append(
            (
                meta.semver >= min_version,
                f"rustc {meta.semver} >= {min_version}",
            )
        )

    if channel is not None:
        results.append(
            (
                meta.channel == channel,
                f"channel {meta.channel} == {channel}",
            )
        )

    if min_llvm is not None:
        if meta.llvm_version is None:
            results.append((False, f"LLVM version not reported (need >= {min_llvm})"))
        else:
            results.append(
                (
                    meta.llvm_version >= min_llvm,
                    f"LLVM {meta.llvm_version} >= {min_llvm}",
                )
            )

    return results
