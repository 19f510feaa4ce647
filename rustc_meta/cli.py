"""
Command-line interface for rustc-meta.

This module provides the main CLI entry point and handles global options,
configuration loading, and command registration.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Optional

import click

from rustc_meta.config import load_config
from rustc_meta.__version__ import __version__
from rustc_meta.context import RustcMetaContext
from rustc_meta.exceptions import ConfigError, RustcMetaError
from rustc_meta.utils.logger import get_logger, setup_logging
from rustc_meta.utils.console import (
    print_error,
    print_warning,
    reconfigure_console,
)

logger = get_logger("cli")


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file.",
    envvar="RUSTC_META_CONFIG",
)
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Increase verbosity (can be repeated: -v, -vv).",
)
@click.option(
    "--color/--no-color",
    default=True,
    help="Enable or disable colored output.",
    envvar="RUSTC_META_COLOR",
)
@click.version_option(
    version=__version__,
    prog_name="rustc-meta",
    message="%(prog)s %(version)s",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[Path],
    verbose: int,
    color: bool,
) -> None:
    """rustc-meta: structured version metadata from `rustc -vV`.

    \b
    Available commands:
      rustc-meta show              Show the compiler's version metadata
      rustc-meta check             Check the compiler against minimums

    \b
    Examples:
      rustc-meta show
      rustc-meta show --format json
      rustc -vV | rustc-meta show --input -
      rustc-meta check --min-version 1.56.0 --channel stable

    Use ``rustc-meta COMMAND --help`` for command-specific options.
    """
    setup_logging(verbose, color=color)

    try:
        loaded_config = load_config(config)
    except ConfigError as exc:
        print_error(str(exc))
        raise SystemExit(1) from exc

    rustc_meta_ctx = RustcMetaContext()
    rustc_meta_ctx.config_path = config or loaded_config.source_path
    rustc_meta_ctx.color = color
    rustc_meta_ctx.verbose = verbose
    rustc_meta_ctx.config = loaded_config
    ctx.obj = rustc_meta_ctx

    # Respect NO_COLOR for downstream libraries
    if color:
        os.environ.pop("NO_COLOR", None)
    else:
        os.environ["NO_COLOR"] = "1"
    reconfigure_console()

    logger.debug("rustc-meta v%s", __version__)
    logger.debug("Config path: %s", rustc_meta_ctx.config_path)
    if loaded_config.source_path:
        logger.debug("Loaded configuration: %s", loaded_config.to_log_dict())
    logger.debug("Verbosity: %s | Color: %s", verbose, color)


# Register CLI subcommands
from rustc_meta.commands.check import check  # noqa: E402
from rustc_meta.commands.show import show  # noqa: E402

cli.add_command(show)
cli.add_command(check)


def main() -> int:
    """Main entry point for the rustc-meta CLI.

    Returns:
        Exit code:
            0   Success
            1   Unhandled or application error
            2   Usage error (Click)
            130 Interrupted by user (Ctrl+C)
    """
    try:
        cli(standalone_mode=False)
        return 0

    except click.ClickException as exc:
        exc.show()
        return exc.exit_code

    except click.exceptions.Abort:
        print_warning("\nOperation cancelled by user")
        return 130

    except RustcMetaError as exc:
        print_error(str(exc))
        logger.debug(
            "RustcMetaError details: %s",
            exc.details or "<none>",
            exc_info=True,
        )
        return 1

    except KeyboardInterrupt:
        print_warning("\nOperation cancelled by user")
        return 130

    except Exception as exc:
        print_error(f"Unexpected error: {exc}")
        logger.exception("Unhandled exception in CLI")
        return 1


if __name__ == "__main__":
    sys.exit(main())
