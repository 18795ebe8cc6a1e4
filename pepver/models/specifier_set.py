"""
Specifier set data model for pepver.

A :class:`SpecifierSet` is a comma-separated conjunction of
:class:`~pepver.models.specifier.Specifier` clauses. There is no
disjunction in the grammar: a candidate is contained only if every member
contains it.

The pre-release policy of a set is computed once, at construction, from
its members: pre-releases are allowed when any member operand is itself a
pre-release or dev release. An explicit ``prereleases`` value overrides
that, and a per-call ``prereleases`` argument overrides both.

Example:
    >>> specs = SpecifierSet(">=1.0, !=1.3.*, <2")
    >>> specs.contains("1.2.1")
    True
    >>> specs.contains("1.1a1")
    False
    >>> specs.contains("1.1a1", prereleases=True)
    True
"""

from __future__ import annotations

from typing import Any, Iterable, Iterator, List, Optional, Tuple, TypeVar, Union

from pepver.core import evaluator
from pepver.constants import CLAUSE_SEPARATOR
from pepver.exceptions import InvalidSpecifier
from pepver.models.specifier import Specifier
from pepver.models.version import BaseVersion, parse

T = TypeVar("T")


class SpecifierSet:
    """A conjunction of version specifiers.

    Args:
        specifiers: Comma-separated clauses (``">=1.0,<2"``), or an
            iterable of clause strings and :class:`Specifier` objects.
            Empty clauses are ignored; an empty set matches every version
            allowed by the pre-release policy.
        prereleases: Explicit pre-release policy for the whole set.

    Raises:
        InvalidSpecifier: Any clause fails to parse.
    """

    __slots__ = ("_specs", "_prereleases", "_implicit_prereleases")

    def __init__(
        self,
        specifiers: Union[str, Iterable[Union[str, Specifier]]] = "",
        prereleases: Optional[bool] = None,
    ) -> None:
        if isinstance(specifiers, str):
            clauses: Iterable[Union[str, Specifier]] = [
                clause.strip()
                for clause in specifiers.split(CLAUSE_SEPARATOR)
                if clause.strip()
            ]
        else:
            clauses = specifiers

        parsed: List[Specifier] = []
        for clause in clauses:
            spec = clause if isinstance(clause, Specifier) else Specifier(clause)
            if spec not in parsed:
                parsed.append(spec)

        self._specs: Tuple[Specifier, ...] = tuple(parsed)
        self._prereleases = prereleases
        self._implicit_prereleases = any(spec.prereleases for spec in self._specs)

    # ------------------------------------------------------------------
    # Policy
    # ------------------------------------------------------------------

    @property
    def prereleases(self) -> Optional[bool]:
        """Resolved pre-release policy of the set.

        Returns the explicit value if one was given, ``True`` if any member
        allows pre-releases, and ``None`` (deny) otherwise, including for an
        empty set.
        """
        if self._prereleases is not None:
            return self._prereleases
        if self._implicit_prereleases:
            return True
        return None

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
        """Return ``True`` if ``item`` satisfies every member specifier.

        Args:
            item: Version string or parsed version.
            prereleases: Override the set's pre-release policy.
            allow_prereleases: Keyword spelling of ``prereleases``.
        """
        prereleases = evaluator.resolve_override(prereleases, allow_prereleases)
        candidate = item if isinstance(item, BaseVersion) else parse(item)

        if prereleases is None:
            prereleases = self.prereleases

        if candidate.is_prerelease and not prereleases:
            return False

        return all(
            evaluator.matches(spec, candidate, prereleases=True) for spec in self._specs
        )

    def __contains__(self, item: Any) -> bool:
        return self.contains(item)

    def filter(
        self,
        iterable: Iterable[T],
        prereleases: Optional[bool] = None,
    ) -> Iterator[T]:
        """Yield the items of ``iterable`` that satisfy the whole set.

        When no policy is given and only pre-releases match, those
        pre-releases are yielded.
        """
        return evaluator.select(self.contains, iterable, prereleases, self.prereleases)

    # ------------------------------------------------------------------
    # Composition
    # ------------------------------------------------------------------

    def __and__(self, other: Union["SpecifierSet", str]) -> "SpecifierSet":
        """Intersect two sets into a new one.

        Raises:
            ValueError: Both sets carry different explicit pre-release
                overrides.
        """
        if isinstance(other, str):
            other = SpecifierSet(other)
        elif not isinstance(other, SpecifierSet):
            return NotImplemented

        if self._prereleases is None:
            prereleases = other._prereleases
        elif other._prereleases is None or self._prereleases == other._prereleases:
            prereleases = self._prereleases
        else:
            raise ValueError(
                "Cannot combine SpecifierSets with conflicting pre-release overrides"
            )

        return SpecifierSet(self._specs + other._specs, prereleases=prereleases)

    # ------------------------------------------------------------------
    # Collection protocol, rendering and identity
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._specs)

    def __iter__(self) -> Iterator[Specifier]:
        return iter(self._specs)

    def __bool__(self) -> bool:
        return bool(self._specs)

    def __str__(self) -> str:
        return CLAUSE_SEPARATOR.join(sorted(str(spec) for spec in self._specs))

    def __repr__(self) -> str:
        pre = (
            f", prereleases={self._prereleases!r}"
            if self._prereleases is not None
            else ""
        )
        return f"<SpecifierSet({str(self)!r}{pre})>"

    def __hash__(self) -> int:
        return hash(frozenset(self._specs))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (str, Specifier)):
            try:
                other = SpecifierSet(str(other))
            except InvalidSpecifier:
                return NotImplemented
        elif not isinstance(other, SpecifierSet):
            return NotImplemented

        return frozenset(self._specs) == frozenset(other._specs)
