"""
Custom exception hierarchy for pepver.

This module defines structured exception types used across pepver.
All exceptions inherit from :class:`PepverError` and support optional
structured metadata via the ``details`` attribute to improve diagnostics
and logging.

Parsing a bare version string never raises: non-conforming text degrades
to a :class:`~pepver.models.version.LegacyVersion`. :class:`InvalidVersion`
is only raised by strict parsing, while :class:`InvalidSpecifier` is always
surfaced to the caller.
"""

from __future__ import annotations

from typing import Any, Mapping, MutableMapping, Optional


class PepverError(Exception):
    """Base exception for all pepver errors.

    All pepver-specific exceptions should inherit from this class.
    It supports structured metadata via ``details`` for richer error
    reporting and debugging.

    Args:
        message: Human-readable error message.
        details: Optional structured metadata describing the error.
    """

    __slots__ = ("message", "details")

    def __init__(
        self,
        message: str,
        details: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.message: str = message
        # Internally normalize to a mutable dict
        self.details: MutableMapping[str, Any] = dict(details) if details else {}
        super().__init__(message)

    def __str__(self) -> str:
        if not self.details:
            return self.message
        formatted = ", ".join(f"{k}={v}" for k, v in self.details.items())
        return f"{self.message} ({formatted})"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, details={dict(self.details)!r})"
        )


def _add_if(details: MutableMapping[str, Any], key: str, value: Any) -> None:
    """Add a key to ``details`` only if ``value`` is not ``None``."""
    if value is not None:
        details[key] = value


def _truncate(text: str, max_length: int = 200) -> str:
    """Truncate long text for safe logging or error reporting."""
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."


class InvalidVersion(PepverError, ValueError):
    """Raised by strict parsing when text is not a PEP 440 version.

    Args:
        version: The offending input text.
        message: Optional error description; a default is derived from
            ``version`` when omitted.
    """

    __slots__ = ("version",)

    def __init__(self, version: Any, message: Optional[str] = None) -> None:
        text = version if isinstance(version, str) else repr(version)
        super().__init__(
            message or f"Invalid version: {_truncate(text)!r}",
        )
        self.version = version


class InvalidSpecifier(PepverError, ValueError):
    """Raised when a specifier clause or specifier set cannot be parsed.

    Args:
        specifier: The offending clause text.
        reason: Short explanation of what is wrong with the clause.
    """

    __slots__ = ("specifier", "reason")

    def __init__(
        self,
        specifier: str,
        *,
        reason: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "reason", reason)

        super().__init__(f"Invalid specifier: {_truncate(specifier)!r}", details)

        self.specifier = specifier
        self.reason = reason


class ConfigError(PepverError):
    """Raised when a configuration file cannot be loaded or validated.

    Args:
        message: Error description.
        config_path: Path to the configuration file involved.
        option: Name of the offending option, if any.
    """

    __slots__ = ("config_path", "option")

    def __init__(
        self,
        message: str,
        *,
        config_path: Optional[str] = None,
        option: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "path", config_path)
        _add_if(details, "option", option)

        super().__init__(message, details)

        self.config_path = config_path
        self.option = option
