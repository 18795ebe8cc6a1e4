"""Normalize command implementation for pepver.

Prints the canonical PEP 440 spelling of each version given on the
command line. Strings that are not PEP 440 versions are reported as
legacy versions, or rejected with ``--strict``.

Typical usage::

    $ pepver normalize 1.0-ALPHA.1 v2.0.0-r3
    $ pepver normalize --format json 1!2.0+local.7
    $ pepver normalize --strict "not a version"
"""

from __future__ import annotations

import sys
import json
from typing import Any, Dict, List, Optional, Tuple

import click

from pepver.exceptions import InvalidVersion
from pepver.models import AnyVersion, parse
from pepver.context import pass_context, PepverContext
from pepver.utils import get_logger, print_error, print_table

logger = get_logger("commands.normalize")


@click.command()
@click.argument("versions", nargs=-1, required=True)
@click.option(
    "--strict/--no-strict",
    default=None,
    help="Reject strings that are not PEP 440 versions.",
)
@click.option(
    "--format",
    "-f",
    type=click.Choice(["table", "simple", "json"], case_sensitive=False),
    default="simple",
    help="Output format.",
)
@pass_context
def normalize(
    ctx: PepverContext,
    versions: Tuple[str, ...],
    strict: Optional[bool],
    format: str,
) -> None:
    """Print the canonical form of each VERSION.

    Exits with 1 when ``--strict`` is in effect and any input is not a
    PEP 440 version.
    """
    if strict is None:
        strict = ctx.config.strict

    parsed: List[AnyVersion] = []
    failures = 0
    for text in versions:
        try:
            parsed.append(parse(text, strict=strict))
        except InvalidVersion as exc:
            print_error(str(exc))
            failures += 1

    logger.debug("Normalized %d of %d version(s)", len(parsed), len(versions))

    if format == "json":
        click.echo(json.dumps([version.as_dict() for version in parsed], indent=2))
    elif format == "table":
        _display_table(parsed)
    else:
        for version in parsed:
            click.echo(str(version))

    if failures:
        sys.exit(1)


def _display_table(parsed: List[AnyVersion]) -> None:
    rows: List[Dict[str, Any]] = [
        {
            "Input": version.text,
            "Canonical": str(version),
            "Kind": _kind(version),
        }
        for version in parsed
    ]
    print_table(
        rows,
        title="Normalized versions",
        column_styles={
            "Input": {"style": "dim"},
            "Canonical": {"style": "bold", "no_wrap": True},
        },
    )


def _kind(version: AnyVersion) -> str:
    """Short classification label for the table view."""
    if version.is_legacy:
        return "[legacy]legacy[/legacy]"
    if version.is_devrelease:
        return "dev"
    if version.pre is not None:
        return "pre"
    if version.is_postrelease:
        return "post"
    return "final"
