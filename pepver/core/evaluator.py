"""Containment checks between a specifier and a candidate version.

:func:`matches` judges a single candidate. It first applies the
pre-release policy, then dispatches on the specifier's operator:

======== ==============================================================
``==``   equal keys; the candidate's local label is ignored unless the
         operand has one. With ``.*`` the operand is a prefix.
``!=``   negation of ``==``, wildcard included.
``<=``   public keys compared, candidate local label stripped.
``>=``   as ``<=``.
``<``    strictly less, excluding pre-releases of the operand's own
         release unless the operand is itself a pre-release.
``>``    strictly greater, excluding post-releases of the operand's own
         release unless the operand is itself a post-release.
``~=``   ``>= V`` and ``== prefix.*`` with the last release segment of
         ``V`` dropped from the prefix.
``===``  case-insensitive equality of the raw texts.
======== ==============================================================

Legacy candidates carry no semantic fields and can only satisfy ``===``.

The module operates on already-parsed values and never imports the model
classes at runtime, so the model layer can depend on it freely.
"""

from __future__ import annotations

from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    Dict,
    Iterable,
    Iterator,
    List,
    Optional,
    Tuple,
    TypeVar,
)

from pepver.core.ordering import release_key
from pepver.utils.logger import get_logger

if TYPE_CHECKING:
    from pepver.models.specifier import Specifier
    from pepver.models.version import Version

logger = get_logger("core.evaluator")

Marker = Tuple[str, Any]
T = TypeVar("T")


def matches(
    specifier: "Specifier",
    candidate: Any,
    prereleases: Optional[bool] = None,
) -> bool:
    """Decide whether ``candidate`` satisfies ``specifier``.

    Args:
        specifier: The parsed specifier.
        candidate: A parsed version, or a string parsed with the legacy
            fallback.
        prereleases: Pre-release policy override. ``None`` defers to
            :attr:`Specifier.prereleases`; a falsy resolved policy rejects
            pre-release and dev-release candidates outright.

    Returns:
        ``True`` if the candidate is contained in the specifier.
    """
    candidate = _coerce_candidate(candidate)

    if prereleases is None:
        prereleases = specifier.prereleases

    if candidate.is_prerelease and not prereleases:
        logger.debug("Rejecting pre-release %s for %s", candidate, specifier)
        return False

    operator = specifier.operator.value
    if operator == "===":
        return _arbitrary_equal(specifier, candidate)

    if candidate.is_legacy:
        return False

    return _OPERATORS[operator](specifier, candidate)


def select(
    contains: Callable[..., bool],
    items: Iterable[T],
    prereleases: Optional[bool],
    default_policy: Optional[bool],
) -> Iterator[T]:
    """Yield the items accepted by ``contains``.

    With an explicit ``prereleases`` policy every item is judged under it.
    Otherwise pre-releases are held back and only yielded when nothing
    else matched, so a range with no final release in it still selects
    something.

    Args:
        contains: Bound ``contains(candidate, prereleases=...)`` method.
        items: Version strings or parsed versions; yielded unchanged.
        prereleases: Caller override for the pre-release policy.
        default_policy: The specifier's (or set's) own policy.
    """
    held_back: List[T] = []
    yielded = False

    check_with = True if prereleases is None else prereleases
    for item in items:
        candidate = _coerce_candidate(item)
        if not contains(candidate, prereleases=check_with):
            continue
        if candidate.is_prerelease and not (prereleases or default_policy):
            held_back.append(item)
        else:
            yielded = True
            yield item

    if not yielded and prereleases is None:
        yield from held_back


def resolve_override(
    prereleases: Optional[bool], allow_prereleases: Optional[bool]
) -> Optional[bool]:
    """Merge the two spellings of the caller's pre-release override.

    Raises:
        TypeError: Both spellings were given.
    """
    if allow_prereleases is None:
        return prereleases
    if prereleases is not None:
        raise TypeError("pass either 'prereleases' or 'allow_prereleases', not both")
    return allow_prereleases


def _coerce_candidate(candidate: Any) -> Any:
    from pepver.models.version import BaseVersion, parse

    if isinstance(candidate, BaseVersion):
        return candidate
    return parse(candidate)


# ---------------------------------------------------------------------------
# Operator implementations
# ---------------------------------------------------------------------------


def _arbitrary_equal(specifier: "Specifier", candidate: Any) -> bool:
    return candidate.text.lower() == specifier.raw_version.lower()


def _equal(specifier: "Specifier", candidate: "Version") -> bool:
    operand = specifier.version
    if specifier.wildcard:
        return _prefix_match(operand, candidate)

    # A public operand ignores the candidate's local label.
    if operand.local is None:
        return candidate.public_sort_key == operand.public_sort_key
    return candidate.sort_key == operand.sort_key


def _not_equal(specifier: "Specifier", candidate: "Version") -> bool:
    return not _equal(specifier, candidate)


def _less_equal(specifier: "Specifier", candidate: "Version") -> bool:
    return candidate.public_sort_key <= specifier.version.public_sort_key


def _greater_equal(specifier: "Specifier", candidate: "Version") -> bool:
    return candidate.public_sort_key >= specifier.version.public_sort_key


def _less_than(specifier: "Specifier", candidate: "Version") -> bool:
    operand = specifier.version
    if not candidate.public_sort_key < operand.public_sort_key:
        return False

    # <V never admits a pre-release of V itself, unless V is one.
    if not operand.is_prerelease and candidate.is_prerelease:
        if _same_base(candidate, operand):
            return False

    return True


def _greater_than(specifier: "Specifier", candidate: "Version") -> bool:
    operand = specifier.version
    if not candidate.public_sort_key > operand.public_sort_key:
        return False

    # >V never admits a post-release of V itself, unless V is one.
    if not operand.is_postrelease and candidate.is_postrelease:
        if _same_base(candidate, operand):
            return False

    return True


def _compatible(specifier: "Specifier", candidate: "Version") -> bool:
    operand = specifier.version
    if candidate.public_sort_key < operand.public_sort_key:
        return False
    return (
        candidate.epoch == operand.epoch
        and _release_prefix(candidate.release, len(operand.release) - 1)
        == operand.release[:-1]
    )


_OPERATORS: Dict[str, Callable[["Specifier", "Version"], bool]] = {
    "==": _equal,
    "!=": _not_equal,
    "<=": _less_equal,
    ">=": _greater_equal,
    "<": _less_than,
    ">": _greater_than,
    "~=": _compatible,
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _same_base(left: "Version", right: "Version") -> bool:
    return left.epoch == right.epoch and release_key(left.release) == release_key(
        right.release
    )


def _release_prefix(release: Tuple[int, ...], length: int) -> Tuple[int, ...]:
    """Zero-pad or truncate ``release`` to exactly ``length`` segments."""
    padded = release + (0,) * (length - len(release))
    return padded[:length]


def _markers(version: "Version") -> Tuple[Marker, ...]:
    """The pre/post/dev markers of ``version`` in written order."""
    markers = []
    if version.pre is not None:
        markers.append(("pre", version.pre))
    if version.post is not None:
        markers.append(("post", version.post))
    if version.dev is not None:
        markers.append(("dev", version.dev))
    return tuple(markers)


def _prefix_match(operand: "Version", candidate: "Version") -> bool:
    """Wildcard equality: does ``candidate`` start with ``operand``?

    When the operand stops at its release segment the candidate's release
    is padded or truncated to the same length, so ``1.1`` matches
    ``1.1.0``, ``1.1.5`` and ``1.1rc1``. When the operand carries
    pre/post/dev markers the releases must be equal up to trailing zeros
    and the candidate's markers must begin with the operand's.
    """
    if candidate.epoch != operand.epoch:
        return False

    operand_markers = _markers(operand)
    if not operand_markers:
        return (
            _release_prefix(candidate.release, len(operand.release))
            == operand.release
        )

    if release_key(candidate.release) != release_key(operand.release):
        return False

    candidate_markers = _markers(candidate)
    return candidate_markers[: len(operand_markers)] == operand_markers
