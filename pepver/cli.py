"""
Command-line interface for pepver.

This module provides the main CLI entry point and handles global options,
configuration loading, and command registration.
"""

from __future__ import annotations

import os
import sys
import logging
from pathlib import Path
from typing import Optional

import click

from pepver.config import load_config
from pepver.__version__ import __version__
from pepver.context import PepverContext
from pepver.exceptions import ConfigError, PepverError
from pepver.constants import CONFIG_ENV_VAR
from pepver.utils.logger import get_logger, level_for_verbosity, setup_logging
from pepver.utils.console import print_error, print_warning, reconfigure_console

logger = get_logger("cli")


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file.",
    envvar=CONFIG_ENV_VAR,
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
    envvar="PEPVER_COLOR",
)
@click.version_option(
    version=__version__,
    prog_name="pepver",
    message="%(prog)s %(version)s",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[Path],
    verbose: int,
    color: bool,
) -> None:
    """pepver: PEP 440 versions and specifiers from the command line.

    \b
    Available commands:
      pepver normalize   Print canonical forms of versions
      pepver compare     Compare two versions
      pepver sort        Sort versions in PEP 440 order
      pepver check       Test versions against a specifier set
      pepver filter      Print the versions a specifier set accepts

    \b
    Examples:
      pepver normalize 1.0-ALPHA.1
      pepver check ">=1.0,<2" 1.5 2.0rc1
      pepver -v sort 1.0 1.0a1 1.0.post1

    Use ``pepver COMMAND --help`` for command-specific options.
    """
    _configure_logging(verbose)

    try:
        loaded_config = load_config(config)
    except ConfigError as exc:
        print_error(str(exc))
        raise SystemExit(1) from exc

    pepver_ctx = PepverContext()
    pepver_ctx.config_path = config or loaded_config.source_path
    pepver_ctx.color = color
    pepver_ctx.verbose = verbose
    pepver_ctx.config = loaded_config
    ctx.obj = pepver_ctx

    if color:
        os.environ.pop("NO_COLOR", None)
    else:
        os.environ["NO_COLOR"] = "1"
    reconfigure_console()

    logger.debug("pepver v%s", __version__)
    logger.debug("Config path: %s", pepver_ctx.config_path)
    logger.debug("Verbosity: %s | Color: %s", verbose, color)


def _configure_logging(verbose: int) -> None:
    """Configure logging level based on verbosity flags."""
    level = level_for_verbosity(verbose)
    setup_logging(level=level, verbose=verbose >= 2)
    logger.debug("Logging initialized at %s level", logging.getLevelName(level))


# Register CLI subcommands
from pepver.commands.check import check, filter_command  # noqa: E402
from pepver.commands.normalize import normalize  # noqa: E402
from pepver.commands.sort import compare, sort  # noqa: E402

cli.add_command(normalize)
cli.add_command(compare)
cli.add_command(sort)
cli.add_command(check)
cli.add_command(filter_command)


def main() -> int:
    """Main entry point for the pepver CLI.

    Returns:
        Exit code:
            0   Success
            1   Application error, or a check that did not pass
            2   Usage error (Click)
            130 Interrupted by user (Ctrl+C)
    """
    try:
        result = cli(standalone_mode=False)
        return result if isinstance(result, int) else 0

    except click.ClickException as exc:
        exc.show()
        return exc.exit_code

    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else 1

    except PepverError as exc:
        print_error(str(exc))
        logger.debug("PepverError details: %s", exc.details or "<none>", exc_info=True)
        return 1

    except click.Abort:
        print_warning("Operation cancelled by user")
        return 130

    except KeyboardInterrupt:
        print_warning("Operation cancelled by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
