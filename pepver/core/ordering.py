"""Comparison keys for PEP 440 and legacy versions.

Every parsed version is ordered through a plain tuple key, so equality,
hashing and sorting all agree. The key layout for a PEP 440 version is::

    (epoch, release, pre, post, dev, local)

where each optional component is encoded as a small tagged tuple so that
"absent" lands on the correct side of "present":

- ``release``: trailing zeros removed, so ``1.0 == 1.0.0``.
- ``pre``: ``(-1, "", 0)`` for a dev-only release, ``(0, kind, n)`` for a
  pre-release (``a < b < rc``), ``(1, "", 0)`` for none.
- ``post``: ``(-1, 0)`` when absent, ``(0, n)`` when present.
- ``dev``: ``(1, 0)`` when absent, ``(0, n)`` when present.
- ``local``: ``()`` when absent; numeric segments sort above alphanumeric
  ones and a strict prefix sorts lower.

Legacy strings get ``(-1, runs)``. No PEP 440 epoch is negative, so every
legacy version sorts below every PEP 440 version and the two layouts are
never compared past their first element.
"""

from __future__ import annotations

import re
from typing import Any, Iterable, List, Optional, Sequence, Tuple, Union

from pepver.core.parser import digits_to_int

LEGACY_EPOCH = -1

_NO_PRE = (1, "", 0)
_DEV_ONLY_PRE = (-1, "", 0)
_NO_POST = (-1, 0)
_NO_DEV = (1, 0)

_RUN_RE = re.compile(r"[0-9]+|[^0-9]+")

LocalKey = Tuple[Tuple[int, int, str], ...]
CmpKey = Tuple[Any, ...]


def release_key(release: Sequence[int]) -> Tuple[int, ...]:
    """Return ``release`` with trailing zero segments removed."""
    end = len(release)
    while end and release[end - 1] == 0:
        end -= 1
    return tuple(release[:end])


def local_key(local: Optional[Sequence[str]]) -> LocalKey:
    """Return the ordering key for a local version label.

    Numeric-looking tokens compare as integers (``007 == 7``) and sort above
    any alphanumeric token in the same position.
    """
    if not local:
        return ()
    return tuple(
        (1, digits_to_int(token), "") if _is_digits(token) else (0, 0, token)
        for token in local
    )


def public_key(
    epoch: int,
    release: Sequence[int],
    pre: Optional[Tuple[str, int]],
    post: Optional[int],
    dev: Optional[int],
) -> CmpKey:
    """Build the comparison key of a version without its local label."""
    if pre is None and post is None and dev is not None:
        pre_rank: Tuple[int, str, int] = _DEV_ONLY_PRE
    elif pre is None:
        pre_rank = _NO_PRE
    else:
        pre_rank = (0, pre[0], pre[1])

    post_rank = _NO_POST if post is None else (0, post)
    dev_rank = _NO_DEV if dev is None else (0, dev)

    return (epoch, release_key(release), pre_rank, post_rank, dev_rank)


def version_key(
    epoch: int,
    release: Sequence[int],
    pre: Optional[Tuple[str, int]],
    post: Optional[int],
    dev: Optional[int],
    local: Optional[Sequence[str]],
) -> CmpKey:
    """Build the full comparison key of a PEP 440 version."""
    return public_key(epoch, release, pre, post, dev) + (local_key(local),)


def legacy_key(text: str) -> CmpKey:
    """Build the comparison key of a string that is not a PEP 440 version.

    The lower-cased text is split into alternating digit and non-digit
    runs. Digit runs compare numerically, other runs lexically, and a
    digit run sorts below a text run in the same position. Trailing zero
    digit runs are dropped, which makes a shorter run sequence compare as
    if padded with empty or zero runs.
    """
    runs: List[Tuple[int, int, str]] = [
        (0, digits_to_int(run), "") if _is_digits(run) else (1, 0, run)
        for run in _RUN_RE.findall(text.strip().lower())
    ]
    while runs and runs[-1] == (0, 0, ""):
        runs.pop()
    return (LEGACY_EPOCH, tuple(runs))


def compare(left: Any, right: Any) -> int:
    """Three-way comparison of two versions or version strings.

    Strings are parsed with the legacy fallback, so any pair of inputs is
    comparable.

    Returns:
        ``-1`` if ``left < right``, ``0`` if equal, ``1`` if greater.

    Example::

        >>> compare("1.0.dev1", "1.0a1")
        -1
        >>> compare("1.0", "1.0.0")
        0
    """
    left_key = _coerce(left).sort_key
    right_key = _coerce(right).sort_key
    if left_key < right_key:
        return -1
    if left_key > right_key:
        return 1
    return 0


def sort_versions(versions: Iterable[Union[str, Any]], *, reverse: bool = False) -> List[Any]:
    """Sort versions or version strings in PEP 440 order.

    The original items are returned (strings stay strings); sorting is
    stable, so key-equal items such as ``"1.0"`` and ``"1.0.0"`` keep
    their input order.
    """
    return sorted(versions, key=lambda item: _coerce(item).sort_key, reverse=reverse)


def _coerce(value: Any) -> Any:
    # Imported lazily: the model layer depends on this module.
    from pepver.models.version import BaseVersion, parse

    if isinstance(value, BaseVersion):
        return value
    return parse(value)


def _is_digits(text: str) -> bool:
    # str.isdigit() also accepts characters such as "²" that int() rejects.
    return text.isascii() and text.isdigit()
