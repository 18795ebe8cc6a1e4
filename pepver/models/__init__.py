"""
Unified data model exports for pepver.

This module re-exports all core data models to provide a stable and
convenient public API. Users can import models directly from
``pepver.models`` instead of individual submodules.

Example:
    >>> from pepver.models import Version, Specifier, SpecifierSet
"""

from __future__ import annotations

from pepver.models.version import (
    AnyVersion,
    BaseVersion,
    LegacyVersion,
    Version,
    canonicalize_version,
    parse,
)
from pepver.models.specifier import Operator, Specifier
from pepver.models.specifier_set import SpecifierSet

__all__ = [
    "AnyVersion",
    "BaseVersion",
    "LegacyVersion",
    "Version",
    "canonicalize_version",
    "parse",
    "Operator",
    "Specifier",
    "SpecifierSet",
]
