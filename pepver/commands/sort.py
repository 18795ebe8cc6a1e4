"""Ordering commands for pepver: ``compare`` and ``sort``.

Both commands parse their arguments with the legacy fallback, so any
strings can be ordered. Non-PEP 440 strings sort below every PEP 440
version; a warning names them unless ``--strict`` rejects them outright.
"""

from __future__ import annotations

import sys
from typing import List, Optional, Tuple

import click

from pepver.core import compare as compare_versions, sort_versions
from pepver.exceptions import InvalidVersion
from pepver.models import AnyVersion, parse
from pepver.context import pass_context, PepverContext
from pepver.utils import get_logger, print_error

logger = get_logger("commands.sort")

_SYMBOLS = {-1: "<", 0: "==", 1: ">"}

_strict_option = click.option(
    "--strict/--no-strict",
    default=None,
    help="Reject strings that are not PEP 440 versions.",
)


@click.command()
@click.argument("left")
@click.argument("right")
@_strict_option
@pass_context
def compare(
    ctx: PepverContext,
    left: str,
    right: str,
    strict: Optional[bool],
) -> None:
    """Compare two versions and print their relation.

    \b
    Example:
      $ pepver compare 1.0.dev1 1.0a1
      1.0.dev1 < 1.0a1
    """
    parsed = _parse_all(ctx, (left, right), strict)
    result = compare_versions(parsed[0], parsed[1])
    click.echo(f"{left} {_SYMBOLS[result]} {right}")


@click.command()
@click.argument("versions", nargs=-1, required=True)
@click.option(
    "--reverse",
    "-r",
    is_flag=True,
    help="Print the highest version first.",
)
@_strict_option
@pass_context
def sort(
    ctx: PepverContext,
    versions: Tuple[str, ...],
    reverse: bool,
    strict: Optional[bool],
) -> None:
    """Print VERSIONS one per line in PEP 440 order.

    Versions with equal keys (``1.0`` and ``1.0.0``) keep their input
    order.
    """
    parsed = _parse_all(ctx, versions, strict)
    for version in sort_versions(parsed, reverse=reverse):
        click.echo(version.text)


def _parse_all(
    ctx: PepverContext,
    versions: Tuple[str, ...],
    strict: Optional[bool],
) -> List[AnyVersion]:
    """Parse every argument, exiting with 1 on strict failures."""
    if strict is None:
        strict = ctx.config.strict

    parsed: List[AnyVersion] = []
    failed = False
    for text in versions:
        try:
            version = parse(text, strict=strict)
        except InvalidVersion as exc:
            print_error(str(exc))
            failed = True
            continue
        if version.is_legacy:
            logger.warning("%r is not a PEP 440 version, using legacy ordering", text)
        parsed.append(version)

    if failed:
        sys.exit(1)

    logger.debug("Parsed %d version(s)", len(parsed))
    return parsed
