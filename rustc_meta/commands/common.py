"""Helpers shared by rustc-meta subcommands.

Every command works on one :class:`~rustc_meta.models.VersionMeta`, taken
either from a saved banner (``--input FILE``, or ``-`` for stdin) or by
running the compiler. Option decorators are defined once here so all
commands accept the same source options.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional, TypeVar

import click

from rustc_meta.config import RustcMetaConfig
from rustc_meta.context import RustcMetaContext
from rustc_meta.models import VersionMeta
from rustc_meta.utils import get_logger, safe_read_bytes
from rustc_meta.core import decode_banner, resolve_rustc, version_meta_for_command
from rustc_meta.constants import RUSTC_ENV_VAR

logger = get_logger("commands.common")

F = TypeVar("F", bound=Callable[..., object])

STDIN_MARKER = "-"


def source_options(func: F) -> F:
    """Attach ``--input`` and ``--rustc`` options to a command."""
    func = click.option(
        "--rustc",
        "rustc",
        metavar="PATH",
        envvar=RUSTC_ENV_VAR,
        help="Compiler executable to run (default: $RUSTC, then rustc).",
    )(func)
    func = click.option(
        "--input",
        "-i",
        "input_path",
        type=click.Path(dir_okay=False, allow_dash=True, path_type=Path),
        help="Read saved `rustc -vV` output from a file ('-' for stdin).",
    )(func)
    return func


def load_version_meta(
    ctx: RustcMetaContext,
    input_path: Optional[Path],
    rustc: Optional[str],
) -> VersionMeta:
    """Obtain version metadata from a saved banner or by running rustc.

    Args:
        ctx: rustc-meta context carrying the loaded configuration.
        input_path: Saved banner path, ``-`` for stdin, or ``None`` to run
            the compiler.
        rustc: Executable given on the command line or via ``$RUSTC``.

    Returns:
        The parsed :class:`VersionMeta`.

    Raises:
        RustcMetaError: The banner could not be obtained or parsed.
    """
    config = ctx.config or RustcMetaConfig()
    parser = config.make_parser()

    if input_path is not None:
        if str(input_path) == STDIN_MARKER:
            logger.info("Reading rustc -vV output from stdin")
            raw = click.get_binary_stream("stdin").read()
        else:
            logger.info("Reading rustc -vV output from %s", input_path)
            raw = safe_read_bytes(input_path)
        return parser.parse(decode_banner(raw))

    command = resolve_rustc(rustc or config.rustc)
    logger.info("Querying %s", command)
    return version_meta_for_command(command, parser=parser)
