"""Grammar layer for PEP 440 version strings and specifier clauses.

This module turns raw text into plain, normalized field records. It knows
nothing about comparison or containment: :mod:`pepver.core.ordering`
derives sort keys from the records produced here, and the model classes
in :mod:`pepver.models` wrap them into immutable value objects.

Two entry points are provided:

- :func:`parse_version_text` matches a version string against the PEP 440
  grammar and returns a :class:`ParsedVersion`, or ``None`` when the text
  does not conform. Callers decide whether that means a legacy fallback
  or a strict-mode error.
- :func:`parse_specifier_clause` splits a single ``<operator><version>``
  clause and validates the operator/operand pairing, raising
  :class:`~pepver.exceptions.InvalidSpecifier` on any problem.

Example::

    >>> parse_version_text("V1.0-Alpha_2.post3")
    ParsedVersion(epoch=0, release=(1, 0), pre=('a', 2), post=3, dev=None, local=None)
    >>> parse_specifier_clause("== 1.1.*").wildcard
    True
"""

from __future__ import annotations

import re
from typing import NamedTuple, Optional, Tuple

from pepver.exceptions import InvalidSpecifier
from pepver.constants import (
    OPERATOR_TOKENS,
    PRE_RELEASE_SPELLINGS,
    WILDCARD_SUFFIX,
)

# The grammar is not anchored so that the pattern can be embedded in larger
# expressions; :data:`_VERSION_RE` anchors it and allows surrounding space.
VERSION_PATTERN = r"""
    v?                                              # optional leading v
    (?:(?P<epoch>[0-9]+)!)?                         # epoch
    (?P<release>[0-9]+(?:\.[0-9]+)*)                # release segment
    (?P<pre>                                        # pre-release
        [-_.]?
        (?P<pre_l>alpha|a|beta|b|preview|pre|c|rc)
        [-_.]?
        (?P<pre_n>[0-9]+)?
    )?
    (?P<post>                                       # post release
        (?:-(?P<post_n1>[0-9]+))
        |
        (?:
            [-_.]?
            (?P<post_l>post|rev|r)
            [-_.]?
            (?P<post_n2>[0-9]+)?
        )
    )?
    (?P<dev>                                        # dev release
        [-_.]?
        (?P<dev_l>dev)
        [-_.]?
        (?P<dev_n>[0-9]+)?
    )?
    (?:\+(?P<local>[a-z0-9]+(?:[-_.][a-z0-9]+)*))?  # local version
"""

_VERSION_RE = re.compile(
    r"^\s*" + VERSION_PATTERN + r"\s*$",
    re.VERBOSE | re.IGNORECASE,
)

_LOCAL_SEPARATOR_RE = re.compile(r"[-_.]")

# Digit runs longer than this are converted in pieces; see digits_to_int.
_DIGIT_CHUNK = 1000
_CHUNK_BASE = 10**_DIGIT_CHUNK


class ParsedVersion(NamedTuple):
    """Normalized fields of a PEP 440 version.

    ``local`` keeps the literal lower-cased tokens; numeric-looking tokens
    are only converted to integers when a comparison key is built.
    """

    epoch: int
    release: Tuple[int, ...]
    pre: Optional[Tuple[str, int]]
    post: Optional[int]
    dev: Optional[int]
    local: Optional[Tuple[str, ...]]


class ParsedClause(NamedTuple):
    """A single specifier clause split into its validated parts.

    ``version`` is ``None`` only for the ``===`` operator, whose operand is
    compared as a raw string and never parsed.
    """

    operator: str
    operand: str
    version: Optional[ParsedVersion]
    wildcard: bool


def parse_version_text(text: str) -> Optional[ParsedVersion]:
    """Match ``text`` against the PEP 440 grammar.

    Matching is case-insensitive and ignores surrounding whitespace. The
    whole string must be consumed; trailing garbage rejects the input.

    Args:
        text: Raw version string.

    Returns:
        The normalized :class:`ParsedVersion`, or ``None`` if ``text`` is
        not a valid PEP 440 version.
    """
    match = _VERSION_RE.match(text)
    if match is None:
        return None

    pre_label = match.group("pre_l")
    pre: Optional[Tuple[str, int]] = None
    if pre_label is not None:
        pre = (
            PRE_RELEASE_SPELLINGS[pre_label.lower()],
            _number(match.group("pre_n")),
        )

    post: Optional[int] = None
    if match.group("post") is not None:
        post = _number(match.group("post_n1") or match.group("post_n2"))

    dev: Optional[int] = None
    if match.group("dev") is not None:
        dev = _number(match.group("dev_n"))

    local: Optional[Tuple[str, ...]] = None
    if match.group("local") is not None:
        local = tuple(_LOCAL_SEPARATOR_RE.split(match.group("local").lower()))

    return ParsedVersion(
        epoch=_number(match.group("epoch")),
        release=tuple(
            digits_to_int(part) for part in match.group("release").split(".")
        ),
        pre=pre,
        post=post,
        dev=dev,
        local=local,
    )


def _number(digits: Optional[str]) -> int:
    """Convert an optional digit run to an int; a missing number means 0."""
    return digits_to_int(digits) if digits else 0


def digits_to_int(digits: str) -> int:
    """Convert an ASCII digit run of any length to an int.

    Runs longer than :data:`_DIGIT_CHUNK` are converted chunk by chunk, so
    the interpreter's limit on integer string conversion never applies.
    """
    if len(digits) <= _DIGIT_CHUNK:
        return int(digits)
    head = len(digits) % _DIGIT_CHUNK or _DIGIT_CHUNK
    value = int(digits[:head])
    for start in range(head, len(digits), _DIGIT_CHUNK):
        value = value * _CHUNK_BASE + int(digits[start : start + _DIGIT_CHUNK])
    return value


def format_number(value: int) -> str:
    """Render a non-negative int of any size as decimal digits."""
    if value < _CHUNK_BASE:
        return str(value)
    chunks = []
    while value >= _CHUNK_BASE:
        value, low = divmod(value, _CHUNK_BASE)
        chunks.append(str(low).zfill(_DIGIT_CHUNK))
    chunks.append(str(value))
    return "".join(reversed(chunks))


def parse_specifier_clause(text: str) -> ParsedClause:
    """Split and validate a single specifier clause.

    Args:
        text: Clause such as ``">=1.0"``, ``"== 2.*"`` or ``"===foobar"``.

    Returns:
        The validated :class:`ParsedClause`.

    Raises:
        InvalidSpecifier: Unknown or missing operator, empty or invalid
            operand, misplaced wildcard, a local label where the operator
            forbids one, or a ``~=`` operand with a single release segment.
    """
    if not isinstance(text, str):
        raise InvalidSpecifier(repr(text), reason="specifier must be a string")

    clause = text.strip()
    operator = next((tok for tok in OPERATOR_TOKENS if clause.startswith(tok)), None)
    if operator is None:
        raise InvalidSpecifier(text, reason="missing or unknown operator")

    operand = clause[len(operator) :].strip()
    if not operand:
        raise InvalidSpecifier(text, reason="missing version")

    # Arbitrary equality compares raw strings and bypasses the grammar.
    if operator == "===":
        if any(ch.isspace() for ch in operand):
            raise InvalidSpecifier(text, reason="'===' operand cannot contain whitespace")
        return ParsedClause(operator, operand, None, False)

    wildcard = operand.endswith(WILDCARD_SUFFIX)
    base = operand[: -len(WILDCARD_SUFFIX)] if wildcard else operand

    if wildcard and operator not in ("==", "!="):
        raise InvalidSpecifier(
            text, reason=f"wildcard is not allowed with {operator!r}"
        )

    version = parse_version_text(base)
    if version is None:
        raise InvalidSpecifier(text, reason=f"invalid version {base!r}")

    if version.local is not None:
        if wildcard:
            raise InvalidSpecifier(
                text, reason="wildcard cannot follow a local version label"
            )
        if operator not in ("==", "!="):
            raise InvalidSpecifier(
                text, reason=f"local version label is not allowed with {operator!r}"
            )

    if operator == "~=" and len(version.release) < 2:
        raise InvalidSpecifier(
            text, reason="'~=' requires at least two release segments"
        )

    return ParsedClause(operator, base, version, wildcard)
