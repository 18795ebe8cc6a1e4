"""
Specifier data models for pepver.

A :class:`Specifier` is a single ``<operator><version>`` constraint clause
such as ``>=1.0``, ``==1.1.*`` or ``~=2.2``. Parsing and validation happen
once, at construction; containment checks are delegated to
:func:`pepver.core.evaluator.matches`.

Example:
    >>> spec = Specifier("~=2.2")
    >>> spec.contains("2.3")
    True
    >>> "3.0" in spec
    False
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Hashable, Iterable, Iterator, Optional, TypeVar, Union

from pepver.core import evaluator
from pepver.core.parser import parse_specifier_clause
from pepver.exceptions import InvalidSpecifier, InvalidVersion
from pepver.models.version import Version

T = TypeVar("T")


class Operator(Enum):
    """Comparison operators of a version specifier."""

    ARBITRARY_EQUAL = "==="
    EQUAL = "=="
    NOT_EQUAL = "!="
    COMPATIBLE = "~="
    LESS_EQUAL = "<="
    GREATER_EQUAL = ">="
    LESS = "<"
    GREATER = ">"

    def __str__(self) -> str:
        return self.value


class Specifier:
    """A single version constraint.

    Args:
        spec: Clause text, e.g. ``">= 1.0"``; surrounding whitespace and
            whitespace after the operator are ignored.
        prereleases: Explicit pre-release policy. ``None`` lets the operand
            decide (see :attr:`prereleases`).

    Raises:
        InvalidSpecifier: The clause is malformed (see
            :func:`pepver.core.parser.parse_specifier_clause`).
    """

    __slots__ = ("_operator", "_version", "_raw_version", "_wildcard", "_prereleases")

    def __init__(self, spec: str, prereleases: Optional[bool] = None) -> None:
        clause = parse_specifier_clause(spec)

        self._operator = Operator(clause.operator)
        self._raw_version = clause.operand
        self._wildcard = clause.wildcard
        self._prereleases = prereleases
        self._version: Optional[Version] = (
            Version.from_parsed(clause.version, clause.operand)
            if clause.version is not None
            else None
        )

    @classmethod
    def from_version(
        cls,
        version: Union[str, Version],
        operator: Operator = Operator.EQUAL,
        prereleases: Optional[bool] = None,
    ) -> "Specifier":
        """Build a specifier pinning ``version`` with ``operator``.

        Raises:
            InvalidSpecifier: The combination is not a valid clause, e.g. a
                ``~=`` pin of a single-segment release.
        """
        return cls(f"{operator.value}{version}", prereleases=prereleases)

    # ------------------------------------------------------------------
    # Fields
    # ------------------------------------------------------------------

    @property
    def operator(self) -> Operator:
        return self._operator

    @property
    def version(self) -> Optional[Version]:
        """The parsed operand, or ``None`` for ``===``."""
        return self._version

    @property
    def raw_version(self) -> str:
        """Operand text as written, without any ``.*`` suffix."""
        return self._raw_version

    @property
    def wildcard(self) -> bool:
        """Whether the operand ends in ``.*`` (prefix matching)."""
        return self._wildcard

    @property
    def prereleases(self) -> bool:
        """Whether pre-release candidates may match.

        An explicit constructor value wins. Otherwise pre-releases are
        allowed implicitly when the operand is itself a pre-release or dev
        release, except for ``!=``, which never opts in.
        """
        if self._prereleases is not None:
            return self._prereleases

        if self._operator is Operator.NOT_EQUAL:
            return False

        if self._version is None:
            try:
                return Version(self._raw_version).is_prerelease
            except InvalidVersion:
                return False

        return self._version.is_prerelease

    # ------------------------------------------------------------------
    # Containment
    # ------------------------------------------------------------------

    def contains(
        self,
        item: Any,
        prereleases: Optional[bool] = None,
        *,
        allow_prereleases: Optional[bool] = None,
    ) -> bool:
        """Return ``True`` if ``item`` satisfies this specifier.

        Args:
            item: Version string or parsed version.
            prereleases: Override the pre-release policy for this call.
            allow_prereleases: Keyword spelling of ``prereleases``.
        """
        prereleases = evaluator.resolve_override(prereleases, allow_prereleases)
        return evaluator.matches(self, item, prereleases)

    def __contains__(self, item: Any) -> bool:
        return self.contains(item)

    def filter(
        self,
        iterable: Iterable[T],
        prereleases: Optional[bool] = None,
    ) -> Iterator[T]:
        """Yield the items of ``iterable`` that satisfy this specifier.

        When no policy is given and only pre-releases match, those
        pre-releases are yielded.
        """
        return evaluator.select(self.contains, iterable, prereleases, self.prereleases)

    # ------------------------------------------------------------------
    # Rendering and identity
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        if self._version is None:
            return f"{self._operator.value}{self._raw_version}"
        suffix = ".*" if self._wildcard else ""
        return f"{self._operator.value}{self._version}{suffix}"

    def __repr__(self) -> str:
        pre = (
            f", prereleases={self._prereleases!r}"
            if self._prereleases is not None
            else ""
        )
        return f"<Specifier({str(self)!r}{pre})>"

    @property
    def _canonical(self) -> Hashable:
        if self._version is None:
            return (self._operator, self._raw_version.lower())
        # Compatible-release and wildcard operands depend on their length.
        if self._wildcard or self._operator is Operator.COMPATIBLE:
            return (self._operator, str(self._version), self._wildcard)
        return (self._operator, self._version.sort_key, False)

    def __hash__(self) -> int:
        return hash(self._canonical)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, str):
            try:
                other = self.__class__(other)
            except InvalidSpecifier:
                return NotImplemented
        elif not isinstance(other, self.__class__):
            return NotImplemented

        return self._canonical == other._canonical

