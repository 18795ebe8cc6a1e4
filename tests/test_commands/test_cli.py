from __future__ import annotations

import json
from pathlib import Path
from typing import Generator
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from pepver.cli import cli, main
from pepver.utils.logger import disable_logging


@pytest.fixture(autouse=True)
def isolated_cli(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[None, None, None]:
    """Run every command from an empty directory without inherited settings."""
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.delenv("PEPVER_CONFIG", raising=False)
    monkeypatch.delenv("PEPVER_COLOR", raising=False)
    with patch("pepver.config.Path.cwd", return_value=tmp_path):
        yield
    disable_logging()


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.mark.integration
class TestGroup:
    """Tests for global options of the pepver group."""

    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert result.output.startswith("pepver ")

    def test_help_lists_commands(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        for command in ["normalize", "compare", "sort", "check", "filter"]:
            assert command in result.output

    def test_missing_explicit_config(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(
            cli, ["--config", str(tmp_path / "missing.toml"), "sort", "1.0"]
        )

        assert result.exit_code == 2

    def test_invalid_config_file(self, runner: CliRunner, tmp_path: Path) -> None:
        config_file = tmp_path / "pepver.toml"
        config_file.write_text("[pepver]\nstrict = 'yes'\n", encoding="utf-8")

        result = runner.invoke(cli, ["sort", "1.0"])

        assert result.exit_code == 1
        assert "strict must be a boolean" in result.output


@pytest.mark.integration
class TestNormalize:
    """Tests for the normalize command."""

    def test_simple(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["normalize", "1.0-ALPHA.1", "v2.0.0-r3"])

        assert result.exit_code == 0
        assert result.output.splitlines() == ["1.0a1", "2.0.0.post3"]

    def test_legacy_passes_through(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["normalize", "french toast"])

        assert result.exit_code == 0
        assert result.output.strip() == "french toast"

    def test_strict_rejects_legacy(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["normalize", "--strict", "1.0", "french toast"])

        assert result.exit_code == 1
        assert "Invalid version" in result.output
        assert "1.0" in result.output

    def test_strict_from_config(self, runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "pepver.toml").write_text("[pepver]\nstrict = true\n", encoding="utf-8")

        result = runner.invoke(cli, ["normalize", "french toast"])

        assert result.exit_code == 1

    def test_json(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["normalize", "--format", "json", "1!2.0rc1+Local"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data[0]["canonical"] == "1!2.0rc1+local"
        assert data[0]["epoch"] == 1
        assert data[0]["pre"] == ["rc", 1]

    def test_table(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["normalize", "--format", "table", "1.0-dev", "abc"])

        assert result.exit_code == 0
        assert "1.0.dev0" in result.output
        assert "legacy" in result.output


@pytest.mark.integration
class TestCompareAndSort:
    """Tests for the compare and sort commands."""

    @pytest.mark.parametrize(
        "left, right, symbol",
        [
            ("1.0.dev1", "1.0a1", "<"),
            ("1.0", "1.0.0", "=="),
            ("1.0.post1", "1.0.post1.dev1", ">"),
        ],
    )
    def test_compare(self, runner: CliRunner, left: str, right: str, symbol: str) -> None:
        result = runner.invoke(cli, ["compare", left, right])

        assert result.exit_code == 0
        assert result.output.strip() == f"{left} {symbol} {right}"

    def test_sort(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["sort", "1.0", "1.0a1", "1.0.post1", "1.0.dev1"])

        assert result.exit_code == 0
        assert result.output.splitlines() == ["1.0.dev1", "1.0a1", "1.0", "1.0.post1"]

    def test_sort_reverse(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["sort", "-r", "1.0", "2.0", "1.5"])

        assert result.output.splitlines() == ["2.0", "1.5", "1.0"]

    def test_sort_reverse_keeps_equal_versions_in_input_order(
        self, runner: CliRunner
    ) -> None:
        result = runner.invoke(cli, ["sort", "-r", "1.0", "2.0", "1.0.0", "v1"])

        assert result.output.splitlines() == ["2.0", "1.0", "1.0.0", "v1"]

    def test_sort_mixes_legacy_below(self, runner: CliRunner) -> None:
        versions = ["1.0", "french toast", "1²"]

        result = runner.invoke(cli, ["sort", *versions])

        # Legacy warnings may share the captured output with the result.
        printed = [line for line in result.output.splitlines() if line in versions]
        assert result.exit_code == 0
        assert printed == ["1²", "french toast", "1.0"]

    def test_sort_strict_rejects_legacy(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["sort", "--strict", "1.0", "banana"])

        assert result.exit_code == 1
        assert "Invalid version" in result.output


@pytest.mark.integration
class TestCheck:
    """Tests for the check command."""

    def test_all_match(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["check", ">=1.0,<2", "1.0", "1.5"])

        assert result.exit_code == 0
        assert "All 2 version(s) satisfy" in result.output

    def test_any_failure_exits_one(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["check", "--format", "simple", ">=1.0,<2", "1.5", "2.0"])

        assert result.exit_code == 1
        assert result.output.splitlines() == ["1.5: yes", "2.0: no"]

    def test_prerelease_flag(self, runner: CliRunner) -> None:
        denied = runner.invoke(cli, ["check", "-f", "simple", ">=1.0", "1.1a1"])
        allowed = runner.invoke(cli, ["check", "-f", "simple", "--pre", ">=1.0", "1.1a1"])

        assert denied.exit_code == 1
        assert allowed.exit_code == 0

    def test_prerelease_from_config(self, runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text(
            "[tool.pepver]\nallow_prereleases = true\n", encoding="utf-8"
        )

        result = runner.invoke(cli, ["check", "-f", "simple", ">=1.0", "1.1a1"])

        assert result.exit_code == 0

    def test_json(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["check", "-f", "json", "~=2.2", "2.3", "3.0"])

        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["specifiers"] == "~=2.2"
        assert data["prereleases"] is None
        assert data["results"] == [
            {"version": "2.3", "matches": True},
            {"version": "3.0", "matches": False},
        ]

    def test_table(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["check", "==1.1.*", "1.1.0", "1.2"])

        assert result.exit_code == 1
        assert "1.1.0" in result.output
        assert "yes" in result.output
        assert "no" in result.output

    def test_invalid_specifier(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["check", "~=1", "1.0"])

        assert result.exit_code == 1
        assert "Invalid specifier" in result.output


@pytest.mark.integration
class TestFilter:
    """Tests for the filter command."""

    def test_filter(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["filter", ">=1.0", "0.9", "1.0", "1.1a1", "1.2"])

        assert result.exit_code == 0
        assert result.output.splitlines() == ["1.0", "1.2"]

    def test_filter_prerelease_fallback(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["filter", ">=1.0", "0.9", "1.1a1"])

        assert result.output.splitlines() == ["1.1a1"]

    def test_filter_no_pre(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["filter", "--no-pre", ">=1.0", "0.9", "1.1a1"])

        assert result.exit_code == 0
        assert result.output == ""


@pytest.mark.unit
class TestMainEntryPoint:
    """Tests for exit codes returned by pepver.cli.main."""

    def test_success(self) -> None:
        with patch("sys.argv", ["pepver", "compare", "1.0", "2.0"]):
            assert main() == 0

    def test_failed_check(self) -> None:
        with patch("sys.argv", ["pepver", "check", ">=2", "1.0"]):
            assert main() == 1

    def test_usage_error(self) -> None:
        with patch("sys.argv", ["pepver", "no-such-command"]):
            assert main() == 2
