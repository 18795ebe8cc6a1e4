"""
Executable module for pepver.

Running:
    python -m pepver

is equivalent to:
    pepver
"""

from __future__ import annotations

import sys


def _print_startup_error(exc: ImportError) -> None:
    """Report a CLI import failure on stderr."""
    sys.stderr.write("pepver CLI could not be started.\n")
    sys.stderr.write(f"Python version : {sys.version}\n")
    try:
        from pepver.__version__ import __version__

        sys.stderr.write(f"pepver version: {__version__}\n")
    except ImportError:
        sys.stderr.write("pepver version: <unknown>\n")
    sys.stderr.write("\n")
    sys.stderr.write(f"ImportError: {exc}\n")


def main() -> int:
    """Entrypoint for ``python -m pepver``.

    Returns:
        Exit code returned by the CLI, or 1 when it cannot be imported.
    """
    try:
        # Import lazily so click and rich load only for CLI use
        from pepver.cli import main as cli_main
    except ImportError as exc:
        _print_startup_error(exc)
        return 1

    return cli_main()


if __name__ == "__main__":
    sys.exit(main())
