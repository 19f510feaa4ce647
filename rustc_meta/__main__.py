"""
Executable module for rustc-meta.

Running:
    python -m rustc_meta

is equivalent to:
    rustc-meta

This module simply forwards execution to the CLI entrypoint defined in
`rustc_meta.cli`.
"""

from __future__ import annotations

import sys


def _print_startup_error(exc: ImportError) -> None:
    """Explain why the CLI could not be loaded."""
    sys.stderr.write("rustc-meta CLI could not be loaded.\n")
    sys.stderr.write(f"Python version : {sys.version}\n")
    try:
        from rustc_meta.__version__ import __version__

        sys.stderr.write(f"rustc-meta version: {__version__}\n")
    except ImportError:
        sys.stderr.write("rustc-meta version: <unknown>\n")
    sys.stderr.write(f"ImportError: {exc}\n")


def main() -> int:
    """
    Main entrypoint when executing `python -m rustc_meta`.

    Returns:
        Exit code returned by the CLI.
    """
    try:
        # Import lazily so dependencies are only loaded during CLI use
        from rustc_meta.cli import main as cli_main
    except ImportError as exc:
        _print_startup_error(exc)
        return 1

    return cli_main()


if __name__ == "__main__":
    sys.exit(main())
