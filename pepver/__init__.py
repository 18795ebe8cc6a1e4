"""
pepver: PEP 440 versions and version specifiers

pepver parses Python package version identifiers, orders them exactly as
PEP 440 prescribes, and decides whether a version satisfies a specifier
or a comma-separated set of specifiers.

Features include:
    • Canonical parsing and rendering of PEP 440 versions
    • Total ordering, with a deterministic fallback for legacy strings
    • All specifier operators: ==, !=, <=, >=, <, >, ~= and ===
    • Wildcard (prefix) matching and compatible-release ranges
    • Explicit, overridable pre-release policy

Example:
    >>> from pepver import SpecifierSet, parse
    >>> parse("1.0.post1.dev1") < parse("1.0.post1")
    True
    >>> SpecifierSet("~=2.2").contains("2.3")
    True
"""

from __future__ import annotations

from pepver.__version__ import __version__
from pepver.exceptions import InvalidSpecifier, InvalidVersion, PepverError
from pepver.core import compare, sort_versions
from pepver.models import (
    BaseVersion,
    LegacyVersion,
    Operator,
    Specifier,
    SpecifierSet,
    Version,
    canonicalize_version,
    parse,
)

# ---------------------------------------------------------------------------
# Package Metadata
# ---------------------------------------------------------------------------

__author__ = "pepver Contributors"
__license__ = "Apache-2.0"
__description__ = "PEP 440 version parsing, ordering and specifier matching."

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

__all__ = [
    "__version__",
    # Versions
    "BaseVersion",
    "LegacyVersion",
    "Version",
    "canonicalize_version",
    "parse",
    # Ordering
    "compare",
    "sort_versions",
    # Specifiers
    "Operator",
    "Specifier",
    "SpecifierSet",
    # Errors
    "PepverError",
    "InvalidSpecifier",
    "InvalidVersion",
]
