from __future__ import annotations

from typing import List

import pytest

from pepver.core.evaluator import matches, select
from pepver.models.specifier import Specifier
from pepver.models.version import LegacyVersion, Version, parse


def _check(spec: str, candidate: str, prereleases=None) -> bool:
    return matches(Specifier(spec), parse(candidate), prereleases=prereleases)


@pytest.mark.unit
class TestEquality:
    """Tests for == and != without wildcards."""

    @pytest.mark.parametrize(
        "spec, candidate, expected",
        [
            ("==1.0", "1.0", True),
            ("==1.0", "1.0.0", True),
            ("==1.0.0", "1", True),
            ("==1.0", "1.0.1", False),
            ("==1.0", "1.0+local", True),
            ("==1.0+local", "1.0+local", True),
            ("==1.0+local", "1.0", False),
            ("==1.0+local", "1.0+other", False),
            ("==1.0.post1", "1.0.post1", True),
            ("==1.0.post1", "1.0", False),
            ("!=1.0", "1.0", False),
            ("!=1.0", "1.0+local", False),
            ("!=1.0", "1.1", True),
        ],
    )
    def test_equality(self, spec: str, candidate: str, expected: bool) -> None:
        assert _check(spec, candidate) is expected


@pytest.mark.unit
class TestWildcard:
    """Tests for prefix matching with .*"""

    @pytest.mark.parametrize(
        "spec, candidate, expected",
        [
            ("==1.1.*", "1.1.0", True),
            ("==1.1.*", "1.1", True),
            ("==1.1.*", "1.1.5", True),
            ("==1.1.*", "1.1.post1", True),
            ("==1.1.*", "1.1.0+local", True),
            ("==1.1.*", "1.2.0", False),
            ("==1.1.*", "1.10", False),
            ("==1.*", "1.9.9", True),
            ("==1.*", "2.0", False),
            ("==1.0.0.*", "1", True),
            ("==1!1.*", "1.1", False),
            ("==1!1.*", "1!1.4", True),
            ("!=1.1.*", "1.1.3", False),
            ("!=1.1.*", "1.2", True),
        ],
    )
    def test_release_prefix(self, spec: str, candidate: str, expected: bool) -> None:
        assert _check(spec, candidate) is expected

    def test_prefix_admits_prerelease_when_allowed(self) -> None:
        assert _check("==1.1.*", "1.1rc1") is False
        assert _check("==1.1.*", "1.1rc1", prereleases=True) is True

    @pytest.mark.parametrize(
        "spec, candidate, expected",
        [
            ("==1.0a1.*", "1.0a1", True),
            ("==1.0a1.*", "1.0a1.dev3", True),
            ("==1.0a1.*", "1.0.0a1.post2", True),
            ("==1.0a1.*", "1.0a2", False),
            ("==1.0a1.*", "1.0", False),
            ("==1.0.post1.*", "1.0.post1.dev2", True),
        ],
    )
    def test_prefix_with_markers(self, spec: str, candidate: str, expected: bool) -> None:
        assert _check(spec, candidate, prereleases=True) is expected


@pytest.mark.unit
class TestInclusiveComparisons:
    """Tests for <= and >=."""

    @pytest.mark.parametrize(
        "spec, candidate, expected",
        [
            ("<=1.0", "1.0", True),
            ("<=1.0", "1.0+abc", True),
            ("<=1.0", "1.0.post1", False),
            ("<=1.0", "0.9", True),
            (">=1.0", "1.0", True),
            (">=1.0", "1.0+abc", True),
            (">=1.0", "0.9.9", False),
            (">=1.0", "1!0.1", True),
        ],
    )
    def test_inclusive(self, spec: str, candidate: str, expected: bool) -> None:
        assert _check(spec, candidate) is expected


@pytest.mark.unit
class TestExclusiveComparisons:
    """Tests for < and >, including their pre/post exclusions."""

    @pytest.mark.parametrize(
        "spec, candidate, expected",
        [
            ("<2.0", "1.9", True),
            ("<2.0", "2.0", False),
            ("<2.0", "2.0a1", False),
            ("<2.0", "2.0.dev1", False),
            ("<2.0", "1.9a1", True),
            ("<2.0rc1", "2.0b1", True),
            ("<2.0rc1", "2.0rc1", False),
            ("<2.0", "2.0+local", False),
        ],
    )
    def test_less_than(self, spec: str, candidate: str, expected: bool) -> None:
        assert _check(spec, candidate, prereleases=True) is expected

    @pytest.mark.parametrize(
        "spec, candidate, expected",
        [
            (">1.0", "1.1", True),
            (">1.0", "1.0", False),
            (">1.0", "1.0.post1", False),
            (">1.0", "1.0+local", False),
            (">1.0", "1.1.post1", True),
            (">1.0.post1", "1.0.post2", True),
            (">1.0.post1", "1.0.post1+local", False),
        ],
    )
    def test_greater_than(self, spec: str, candidate: str, expected: bool) -> None:
        assert _check(spec, candidate) is expected


@pytest.mark.unit
class TestCompatibleRelease:
    """Tests for ~=."""

    @pytest.mark.parametrize(
        "spec, candidate, expected",
        [
            ("~=2.2", "2.2", True),
            ("~=2.2", "2.3", True),
            ("~=2.2", "2.9.9", True),
            ("~=2.2", "3.0", False),
            ("~=2.2", "2.1", False),
            ("~=2.2.1", "2.2.0", False),
            ("~=2.2.1", "2.2.5", True),
            ("~=2.2.1", "2.3", False),
            ("~=2.2.0", "2.2", True),
            ("~=2.2", "2.2.post1", True),
            ("~=2.2", "2.2+local", True),
            ("~=1!2.2", "2.3", False),
            ("~=1!2.2", "1!2.3", True),
        ],
    )
    def test_compatible(self, spec: str, candidate: str, expected: bool) -> None:
        assert _check(spec, candidate) is expected

    def test_prerelease_operand(self) -> None:
        """A pre-release operand opts its own clause into pre-releases."""
        assert _check("~=2.2a1", "2.2b1") is True
        assert _check("~=2.2a1", "2.3") is True
        assert _check("~=2.2a1", "2.2.dev1") is False


@pytest.mark.unit
class TestArbitraryEquality:
    """Tests for ===."""

    def test_matches_original_text(self) -> None:
        assert _check("===1.0", "1.0") is True
        assert _check("===1.0", "1.0.0") is False

    def test_case_insensitive(self) -> None:
        assert _check("===FooBar", "foobar") is True

    def test_only_operator_for_legacy_candidates(self) -> None:
        legacy = LegacyVersion("french toast")

        assert matches(Specifier("===french"), legacy) is False
        assert matches(Specifier(">=0"), legacy) is False
        assert matches(Specifier("!=1.0"), legacy) is False

    def test_legacy_candidate_with_matching_text(self) -> None:
        assert matches(Specifier("===foobar"), "foobar") is True


@pytest.mark.unit
class TestPrereleasePolicy:
    """Tests for the pre-release exclusion applied before operators."""

    def test_excluded_by_default(self) -> None:
        assert _check(">=1.0", "1.1a1") is False
        assert _check(">=1.0", "1.1.dev1") is False

    def test_explicit_allow(self) -> None:
        assert _check(">=1.0", "1.1a1", prereleases=True) is True

    def test_explicit_deny_beats_operand(self) -> None:
        assert _check(">=1.0a1", "1.1a1") is True
        assert _check(">=1.0a1", "1.1a1", prereleases=False) is False

    def test_specifier_level_override(self) -> None:
        spec = Specifier(">=1.0", prereleases=True)

        assert matches(spec, parse("1.1a1")) is True

    def test_postrelease_is_not_prerelease(self) -> None:
        assert _check(">=1.0", "1.0.post1") is True

    def test_accepts_strings(self) -> None:
        assert matches(Specifier(">=1.0"), "1.5") is True


@pytest.mark.unit
class TestSelect:
    """Tests for the filter helper with pre-release hold-back."""

    def _run(self, spec: str, items: List[str], prereleases=None) -> List[str]:
        specifier = Specifier(spec)
        return list(select(specifier.contains, items, prereleases, specifier.prereleases))

    def test_final_releases_only(self) -> None:
        assert self._run(">=1.0", ["0.9", "1.0", "1.1a1", "1.2"]) == ["1.0", "1.2"]

    def test_falls_back_to_prereleases(self) -> None:
        assert self._run(">=1.0", ["0.9", "1.1a1", "1.2b1"]) == ["1.1a1", "1.2b1"]

    def test_explicit_deny_yields_nothing(self) -> None:
        assert self._run(">=1.0", ["1.1a1"], prereleases=False) == []

    def test_explicit_allow_keeps_order(self) -> None:
        assert self._run(">=1.0", ["1.2", "1.1a1"], prereleases=True) == ["1.2", "1.1a1"]

    def test_yields_original_items(self) -> None:
        items = [Version("1.5"), "2.0"]
        specifier = Specifier("<2")

        result = list(select(specifier.contains, items, None, specifier.prereleases))

        assert result == [items[0]]
        assert result[0] is items[0]
