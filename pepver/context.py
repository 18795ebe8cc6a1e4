"""
Shared context object for pepver CLI commands.

This module defines the Click context object that carries the loaded
configuration and global flags from the ``pepver`` group down to its
subcommands.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from pepver.config import PepverConfig


class PepverContext:
    """Per-invocation state shared by pepver CLI commands.

    Attributes:
        config_path: Path to the configuration file in use, if any.
        verbose: Verbosity level (0=WARNING, 1=INFO, 2+=DEBUG).
        color: Whether colored terminal output is enabled.
        config: Loaded configuration; defaults when no file was found.
    """

    __slots__ = ("config_path", "verbose", "color", "config")

    def __init__(self) -> None:
        self.config_path: Optional[Path] = None
        self.verbose: int = 0
        self.color: bool = True
        self.config: PepverConfig = PepverConfig()

    def resolve_prereleases(self, flag: Optional[bool]) -> Optional[bool]:
        """Combine a ``--pre/--no-pre`` flag with the configured default."""
        return flag if flag is not None else self.config.allow_prereleases


#: Click decorator for injecting :class:`PepverContext` into commands.
pass_context = click.make_pass_decorator(PepverContext, ensure=True)
