"""Check and filter commands for pepver.

``check`` reports, for every version given, whether it satisfies a
specifier set. ``filter`` prints only the versions that do, applying the
same pre-release hold-back as :meth:`SpecifierSet.filter`: when nothing
but pre-releases match and no policy was given, those pre-releases are
printed.

The pre-release policy is taken from ``--pre/--no-pre`` when given, then
from ``allow_prereleases`` in the configuration file, and otherwise from
the specifiers themselves.

Typical usage::

    # Table of results, exit 1 if any version fails
    $ pepver check ">=1.0,!=1.3.*,<2" 1.2 1.3.1 2.0rc1

    # Machine-readable JSON output
    $ pepver check --format json "~=2.2" 2.2.5 2.3 3.0

    # Only the matching versions, one per line
    $ pepver filter --pre ">=1.0" 0.9 1.0a1 1.1
"""

from __future__ import annotations

import sys
import json
from typing import Any, Dict, List, Optional, Tuple

import click

from pepver.models import SpecifierSet
from pepver.exceptions import InvalidSpecifier
from pepver.context import pass_context, PepverContext
from pepver.utils import (
    get_logger,
    print_error,
    print_success,
    print_table,
    colorize_match,
)

logger = get_logger("commands.check")

_pre_option = click.option(
    "--pre/--no-pre",
    "pre",
    default=None,
    help="Allow or reject pre-releases (default: decided by the specifiers).",
)


@click.command()
@click.argument("specifiers")
@click.argument("versions", nargs=-1, required=True)
@_pre_option
@click.option(
    "--format",
    "-f",
    type=click.Choice(["table", "simple", "json"], case_sensitive=False),
    default="table",
    help="Output format.",
)
@pass_context
def check(
    ctx: PepverContext,
    specifiers: str,
    versions: Tuple[str, ...],
    pre: Optional[bool],
    format: str,
) -> None:
    """Check each VERSION against SPECIFIERS.

    SPECIFIERS is a comma-separated specifier set such as
    ``">=1.0,<2"``; an empty string accepts every final release.

    Exits:
        0 if every version satisfies the set, 1 if any does not or the
        specifiers are invalid.
    """
    specs = _build_set(specifiers)
    prereleases = ctx.resolve_prereleases(pre)

    results = [(text, specs.contains(text, prereleases=prereleases)) for text in versions]
    failed = sum(1 for _, matched in results if not matched)
    logger.debug(
        "%d of %d version(s) satisfy %r", len(results) - failed, len(results), str(specs)
    )

    if format == "json":
        _display_json(specs, prereleases, results)
    elif format == "simple":
        _display_simple(results)
    else:
        _display_table(specs, results)
        if not failed:
            print_success(f"All {len(results)} version(s) satisfy '{specs}'")

    sys.exit(1 if failed else 0)


@click.command(name="filter")
@click.argument("specifiers")
@click.argument("versions", nargs=-1, required=True)
@_pre_option
@pass_context
def filter_command(
    ctx: PepverContext,
    specifiers: str,
    versions: Tuple[str, ...],
    pre: Optional[bool],
) -> None:
    """Print the VERSIONS accepted by SPECIFIERS, in input order."""
    specs = _build_set(specifiers)
    for text in specs.filter(versions, prereleases=ctx.resolve_prereleases(pre)):
        click.echo(text)


def _build_set(specifiers: str) -> SpecifierSet:
    """Parse the specifier argument, exiting with 1 when it is invalid."""
    try:
        return SpecifierSet(specifiers)
    except InvalidSpecifier as exc:
        print_error(str(exc))
        sys.exit(1)


# ---------------------------------------------------------------------------
# Output formats
# ---------------------------------------------------------------------------


def _display_table(specs: SpecifierSet, results: List[Tuple[str, bool]]) -> None:
    rows: List[Dict[str, Any]] = [
        {"Version": text, "Matches": colorize_match(matched)} for text, matched in results
    ]
    print_table(
        rows,
        title=f"Specifiers: {specs or '<any>'}",
        column_styles={
            "Version": {"style": "bold", "no_wrap": True},
            "Matches": {"justify": "center"},
        },
    )


def _display_simple(results: List[Tuple[str, bool]]) -> None:
    for text, matched in results:
        click.echo(f"{text}: {'yes' if matched else 'no'}")


def _display_json(
    specs: SpecifierSet,
    prereleases: Optional[bool],
    results: List[Tuple[str, bool]],
) -> None:
    """Render results as JSON for scripts.

    Example::

        {
          "specifiers": "<2,>=1.0",
          "prereleases": null,
          "results": [{"version": "1.5", "matches": true}]
        }
    """
    data = {
        "specifiers": str(specs),
        "prereleases": prereleases,
        "results": [
            {"version": text, "matches": matched} for text, matched in results
        ],
    }
    click.echo(json.dumps(data, indent=2))
