"""
Version data models for pepver.

A parsed version is one of two variants sharing :class:`BaseVersion`:

- :class:`Version`: a string that conforms to PEP 440, stored as
  normalized fields (epoch, release, pre, post, dev, local).
- :class:`LegacyVersion`: any other string, kept verbatim and ordered by
  a deterministic run-based fallback below every :class:`Version`.

Both variants are immutable, hashable and totally ordered against each
other through :attr:`BaseVersion.sort_key`. Call sites that need to tell
them apart check :attr:`BaseVersion.is_legacy`.

Example:
    >>> parse("1.0-Alpha1")
    <Version('1.0a1')>
    >>> parse("2004d")
    <LegacyVersion('2004d')>
    >>> parse("2004d") < parse("0.1")
    True
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple, Union

from pepver.exceptions import InvalidVersion
from pepver.utils.logger import get_logger
from pepver.core.parser import ParsedVersion, format_number, parse_version_text
from pepver.core.ordering import CmpKey, legacy_key, public_key, version_key

logger = get_logger("models.version")


class BaseVersion:
    """Common comparison behaviour of :class:`Version` and :class:`LegacyVersion`.

    Subclasses provide ``sort_key``; hashing and all six rich comparisons
    are derived from it, so equality is always consistent with ordering.
    """

    __slots__ = ()

    sort_key: CmpKey
    is_legacy: bool

    def __hash__(self) -> int:
        return hash(self.sort_key)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, BaseVersion):
            return NotImplemented
        return self.sort_key < other.sort_key

    def __le__(self, other: object) -> bool:
        if not isinstance(other, BaseVersion):
            return NotImplemented
        return self.sort_key <= other.sort_key

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BaseVersion):
            return NotImplemented
        return self.sort_key == other.sort_key

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, BaseVersion):
            return NotImplemented
        return self.sort_key >= other.sort_key

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, BaseVersion):
            return NotImplemented
        return self.sort_key > other.sort_key

    def __ne__(self, other: object) -> bool:
        if not isinstance(other, BaseVersion):
            return NotImplemented
        return self.sort_key != other.sort_key


class Version(BaseVersion):
    """A PEP 440 version.

    Construction is strict: text that does not conform to the grammar
    raises :class:`~pepver.exceptions.InvalidVersion`. Use :func:`parse`
    for the permissive behaviour that falls back to :class:`LegacyVersion`.

    Args:
        version: Version string, e.g. ``"1!2.0rc1.post2.dev3+ubuntu.1"``.

    Raises:
        InvalidVersion: ``version`` is not a string or not a PEP 440 version.
    """

    __slots__ = (
        "_text",
        "_epoch",
        "_release",
        "_pre",
        "_post",
        "_dev",
        "_local",
        "_public_key",
        "sort_key",
    )

    is_legacy = False

    def __init__(self, version: str) -> None:
        if not isinstance(version, str):
            raise InvalidVersion(
                version,
                f"Version must be a string, got {type(version).__name__}",
            )

        parsed = parse_version_text(version)
        if parsed is None:
            raise InvalidVersion(version)

        self._assign(parsed, version.strip())

    @classmethod
    def from_parsed(cls, parsed: ParsedVersion, text: Optional[str] = None) -> "Version":
        """Build a :class:`Version` from already-validated fields.

        Args:
            parsed: Normalized fields, as returned by the grammar layer.
            text: Original text; defaults to the canonical rendering.
        """
        version = cls.__new__(cls)
        version._assign(parsed, text)
        return version

    def _assign(self, parsed: ParsedVersion, text: Optional[str]) -> None:
        self._epoch = parsed.epoch
        self._release = parsed.release
        self._pre = parsed.pre
        self._post = parsed.post
        self._dev = parsed.dev
        self._local = parsed.local
        self._public_key = public_key(
            parsed.epoch, parsed.release, parsed.pre, parsed.post, parsed.dev
        )
        self.sort_key = version_key(
            parsed.epoch,
            parsed.release,
            parsed.pre,
            parsed.post,
            parsed.dev,
            parsed.local,
        )
        self._text = text if text is not None else str(self)

    def __repr__(self) -> str:
        return f"<Version({str(self)!r})>"

    def __str__(self) -> str:
        version = ".".join(format_number(part) for part in self._release)

        if self._epoch:
            version = f"{format_number(self._epoch)}!{version}"

        if self._pre is not None:
            version += f"{self._pre[0]}{format_number(self._pre[1])}"

        if self._post is not None:
            version += f".post{format_number(self._post)}"

        if self._dev is not None:
            version += f".dev{format_number(self._dev)}"

        if self._local is not None:
            version += f"+{self.local}"

        return version

    # ------------------------------------------------------------------
    # Fields
    # ------------------------------------------------------------------

    @property
    def text(self) -> str:
        """The original input text, stripped of surrounding whitespace."""
        return self._text

    @property
    def epoch(self) -> int:
        return self._epoch

    @property
    def release(self) -> Tuple[int, ...]:
        """Release segment as written, trailing zeros included."""
        return self._release

    @property
    def pre(self) -> Optional[Tuple[str, int]]:
        """Pre-release as ``(kind, number)`` with kind in ``a``, ``b``, ``rc``."""
        return self._pre

    @property
    def post(self) -> Optional[int]:
        return self._post

    @property
    def dev(self) -> Optional[int]:
        return self._dev

    @property
    def local(self) -> Optional[str]:
        """Local version label joined with ``.``, or ``None``."""
        if self._local is None:
            return None
        return ".".join(self._local)

    @property
    def local_segments(self) -> Tuple[str, ...]:
        """Local version label split into its lower-cased tokens."""
        return self._local or ()

    # ------------------------------------------------------------------
    # Derived forms
    # ------------------------------------------------------------------

    @property
    def public(self) -> str:
        """The canonical form without the local version label."""
        return str(self).split("+", 1)[0]

    @property
    def base_version(self) -> str:
        """Epoch and release only, without pre/post/dev/local markers."""
        release = ".".join(format_number(part) for part in self._release)
        if self._epoch:
            return f"{format_number(self._epoch)}!{release}"
        return release

    @property
    def public_sort_key(self) -> CmpKey:
        """Comparison key with the local label left out."""
        return self._public_key

    @property
    def major(self) -> int:
        return self._release[0]

    @property
    def minor(self) -> int:
        return self._release[1] if len(self._release) >= 2 else 0

    @property
    def micro(self) -> int:
        return self._release[2] if len(self._release) >= 3 else 0

    @property
    def is_prerelease(self) -> bool:
        """Whether this is a pre-release or a development release."""
        return self._pre is not None or self._dev is not None

    @property
    def is_postrelease(self) -> bool:
        return self._post is not None

    @property
    def is_devrelease(self) -> bool:
        return self._dev is not None

    def as_dict(self) -> Dict[str, Any]:
        """Return the normalized fields as a plain dictionary."""
        return {
            "text": self._text,
            "canonical": str(self),
            "legacy": False,
            "epoch": self._epoch,
            "release": list(self._release),
            "pre": list(self._pre) if self._pre else None,
            "post": self._post,
            "dev": self._dev,
            "local": self.local,
        }


class LegacyVersion(BaseVersion):
    """A version string that does not conform to PEP 440.

    Only the stripped original text is kept. Legacy versions order among
    themselves by their digit/non-digit runs and always sort below every
    :class:`Version`.
    """

    __slots__ = ("_text", "sort_key")

    is_legacy = True

    def __init__(self, version: str) -> None:
        if not isinstance(version, str):
            raise InvalidVersion(
                version,
                f"Version must be a string, got {type(version).__name__}",
            )
        self._text = version.strip()
        self.sort_key = legacy_key(self._text)

    def __repr__(self) -> str:
        return f"<LegacyVersion({self._text!r})>"

    def __str__(self) -> str:
        return self._text

    @property
    def text(self) -> str:
        return self._text

    @property
    def public(self) -> str:
        return self._text

    @property
    def base_version(self) -> str:
        return self._text

    @property
    def epoch(self) -> int:
        return -1

    @property
    def release(self) -> None:
        return None

    @property
    def pre(self) -> None:
        return None

    @property
    def post(self) -> None:
        return None

    @property
    def dev(self) -> None:
        return None

    @property
    def local(self) -> None:
        return None

    @property
    def is_prerelease(self) -> bool:
        return False

    @property
    def is_postrelease(self) -> bool:
        return False

    @property
    def is_devrelease(self) -> bool:
        return False

    def as_dict(self) -> Dict[str, Any]:
        return {
            "text": self._text,
            "canonical": self._text,
            "legacy": True,
        }


AnyVersion = Union[Version, LegacyVersion]


def parse(version: str, *, strict: bool = False) -> AnyVersion:
    """Parse a version string.

    Args:
        version: Text to parse.
        strict: Raise instead of falling back to :class:`LegacyVersion`.

    Returns:
        A :class:`Version` when ``version`` conforms to PEP 440, otherwise
        a :class:`LegacyVersion` (unless ``strict`` is set).

    Raises:
        InvalidVersion: ``version`` is not a string, or ``strict`` is set
            and ``version`` is not a PEP 440 version.

    Examples:
        >>> parse("v1.0")
        <Version('1.0')>
        >>> parse("not a version")
        <LegacyVersion('not a version')>
    """
    try:
        return Version(version)
    except InvalidVersion:
        if strict or not isinstance(version, str):
            raise
        logger.debug("%r is not a PEP 440 version, using legacy ordering", version)
        return LegacyVersion(version)


def canonicalize_version(version: str) -> str:
    """Return the canonical spelling of ``version``.

    Legacy strings are returned stripped but otherwise unchanged.

    Examples:
        >>> canonicalize_version("1.0-ALPHA_1")
        '1.0a1'
        >>> canonicalize_version("1.0.0-r2")
        '1.0.0.post2'
    """
    return str(parse(version))
