"""
Shared context object for rustc-meta CLI commands.

This module defines the global Click context used to share configuration
and runtime options across CLI subcommands.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from rustc_meta.config import RustcMetaConfig


class RustcMetaContext:
    """Global context object for rustc-meta CLI commands.

    An instance of this class is created once per CLI invocation and
    passed to commands using Click's context mechanism.

    Attributes:
        config_path: Path to the rustc-meta configuration file, if any.
        verbose: Verbosity level (0=WARNING, 1=INFO, 2+=DEBUG).
        color: Whether colored terminal output is enabled.
        config: Loaded configuration, or ``None`` before loading.
    """

    __slots__ = ("config_path", "verbose", "color", "config")

    def __init__(self) -> None:
        self.config_path: Optional[Path] = None
        self.verbose: int = 0
        self.color: bool = True
        self.config: Optional[RustcMetaConfig] = None


#: Click decorator for injecting :class:`RustcMetaContext` into commands.
pass_context = click.make_pass_decorator(RustcMetaContext, ensure=True)
