"""
pepver version information.

This module provides a single source of truth for the package version.
The version string is itself a PEP 440 version, so the structured
metadata below is derived with pepver's own grammar.

Examples:
    0.1.0
    0.1.0.dev0
    1.0.0rc1
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Main version (single source of truth)
# ---------------------------------------------------------------------------

__version__ = "0.1.0.dev0"


# ---------------------------------------------------------------------------
# Structured version metadata
# ---------------------------------------------------------------------------


def _version_info(version: str):
    """Break the package version into components.

    Returns:
        dict: {
            "major": int,
            "minor": int,
            "patch": int,
            "prerelease": str | None,
            "is_dev": bool,
        }
    """
    from pepver.core.parser import parse_version_text

    parsed = parse_version_text(version)
    if parsed is None:
        error_message = f"Invalid version string: {version}"
        raise ValueError(error_message)

    release = parsed.release + (0,) * (3 - len(parsed.release))
    pre = f"{parsed.pre[0]}{parsed.pre[1]}" if parsed.pre else None

    return {
        "major": release[0],
        "minor": release[1],
        "patch": release[2],
        "prerelease": pre,
        "is_dev": parsed.dev is not None,
    }


VERSION_INFO = _version_info(__version__)

