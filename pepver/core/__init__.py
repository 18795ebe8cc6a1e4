"""
Core functionality exports for pepver.

This module provides convenient access to the core subsystems of pepver:
the grammar layer, the comparison key builder, and the specifier
evaluator. Importing from here keeps user-facing imports clean and stable:

    from pepver.core import compare, sort_versions

The model classes in :mod:`pepver.models` are built on top of these
functions; most callers will want those instead.
"""

from __future__ import annotations

from pepver.core.parser import (
    VERSION_PATTERN,
    ParsedClause,
    ParsedVersion,
    parse_specifier_clause,
    parse_version_text,
)
from pepver.core.ordering import (
    compare,
    legacy_key,
    public_key,
    release_key,
    sort_versions,
    version_key,
)
from pepver.core.evaluator import matches

__all__ = [
    # Grammar
    "VERSION_PATTERN",
    "ParsedClause",
    "ParsedVersion",
    "parse_specifier_clause",
    "parse_version_text",
    # Ordering
    "compare",
    "legacy_key",
    "public_key",
    "release_key",
    "sort_versions",
    "version_key",
    # Evaluation
    "matches",
]
