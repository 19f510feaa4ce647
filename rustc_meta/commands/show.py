"""Show command implementation for rustc-meta.

Parses the compiler's verbose version banner and prints the resulting
metadata.

Typical usage::

    # Query the compiler on PATH (or $RUSTC)
    $ rustc-meta show

    # Machine-readable JSON output
    $ rustc-meta show --format json

    # Parse saved output
    $ rustc -vV | rustc-meta show --input -
"""

from __future__ import annotations

import sys
import json
from pathlib import Path
from typing import Dict, List, Optional

import click

from rustc_meta.models import VersionMeta
from rustc_meta.exceptions import RustcMetaError
from rustc_meta.context import pass_context, RustcMetaContext
from rustc_meta.commands.common import load_version_meta, source_options
from rustc_meta.utils import (
    colorize_channel,
    get_logger,
    get_raw_console,
    print_error,
    print_table,
)

logger = get_logger("commands.show")

_MISSING = "-"


@click.command()
@source_options
@click.option(
    "--format",
    "-f",
    type=click.Choice(["table", "simple", "json"], case_sensitive=False),
    default="table",
    help="Output format.",
)
@pass_context
def show(
    ctx: RustcMetaContext,
    input_path: Optional[Path],
    rustc: Optional[str],
    format: str,
) -> None:
    """Show version metadata of the Rust compiler.

    Exits 0 on success and 1 if the banner could not be obtained or
    parsed.
    """
    try:
        meta = load_version_meta(ctx, input_path, rustc)
    except RustcMetaError as e:
        print_error(f"{e}")
        logger.debug("Failed to obtain version metadata", exc_info=True)
        sys.exit(1)

    format = format.lower()
    if format == "table":
        _display_table(meta)
    elif format == "simple":
        _display_simple(meta)
    else:  # json
        _display_json(meta)


# ---------------------------------------------------------------------------
# Display renderers
# ---------------------------------------------------------------------------


def _rows(meta: VersionMeta) -> List[Dict[str, str]]:
    """Return ``(field, value)`` rows with missing values rendered as ``-``."""
    data = meta.to_json()
    fields = [
        ("Version", data["version"]),
        ("Channel", data["channel"]),
        ("Commit hash", data["commit_hash"]),
        ("Commit date", data["commit_date"]),
        ("Build date", data["build_date"]),
        ("Host", data["host"]),
        ("LLVM version", data["llvm_version"]),
    ]
    return [
        {"Field": name, "Value": value if value is not None else _MISSING}
        for name, value in fields
    ]


def _display_table(meta: VersionMeta) -> None:
    """Render metadata as a two-column Rich table titled by the short version."""
    data = _rows(meta)
    for row in data:
        if row["Field"] == "Channel":
            row["Value"] = colorize_channel(row["Value"])

    print_table(
        data,
        title=meta.short_version_string,
        column_styles={
            "Field": {"style": "bold cyan", "no_wrap": True},
            "Value": {"no_wrap": False},
        },
    )


def _display_simple(meta: VersionMeta) -> None:
    """Render metadata as ``key: value`` lines, suitable for piping."""
    console = get_raw_console()
    for row in _rows(meta):
        key = row["Field"].lower().replace(" ", "-")
        console.print(f"{key}: {row['Value']}", markup=False, highlight=False)


def _display_json(meta: VersionMeta) -> None:
    """Render metadata as formatted JSON for machine consumption."""
    print(json.dumps(meta.to_json(), indent=2))
