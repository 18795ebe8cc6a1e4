from __future__ import annotations

import sys
from typing import Generator
from unittest.mock import patch

import pytest
from rich.table import Table
from rich.console import Console

from pepver.utils.console import (
    PEPVER_THEME,
    _get_console,
    _should_use_color,
    colorize_match,
    get_raw_console,
    print_error,
    print_success,
    print_table,
    print_warning,
    reconfigure_console,
)


@pytest.fixture(autouse=True)
def reset_console() -> Generator[None, None, None]:
    """Reset the console singleton before and after each test."""
    reconfigure_console()
    yield
    reconfigure_console()


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("NO_COLOR", raising=False)


@pytest.mark.unit
class TestThemeConfiguration:
    """Tests for PEPVER_THEME configuration."""

    def test_theme_has_required_styles(self) -> None:
        for style in ["success", "error", "warning", "info", "dim", "legacy"]:
            assert style in PEPVER_THEME.styles


@pytest.mark.unit
class TestShouldUseColor:
    """Tests for _should_use_color environment detection."""

    def test_no_color_disables(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NO_COLOR", "1")

        assert _should_use_color() is False

    def test_tty_enables(self, clean_env: None) -> None:
        with patch.object(sys.stdout, "isatty", return_value=True):
            assert _should_use_color() is True

    def test_non_tty_disables(self, clean_env: None) -> None:
        with patch.object(sys.stdout, "isatty", return_value=False):
            assert _should_use_color() is False


@pytest.mark.unit
class TestConsoleLifecycle:
    """Tests for the shared console singleton."""

    def test_console_is_cached(self) -> None:
        assert _get_console() is _get_console()
        assert get_raw_console() is _get_console()

    def test_reconfigure_drops_instance(self) -> None:
        first = _get_console()

        reconfigure_console()

        assert _get_console() is not first


@pytest.mark.unit
class TestStatusMessages:
    """Tests for print_success / print_error / print_warning."""

    @pytest.mark.parametrize(
        "func, prefix, style",
        [
            (print_success, "[OK]", "success"),
            (print_error, "[ERROR]", "error"),
            (print_warning, "[WARNING]", "warning"),
        ],
    )
    def test_prefix_and_style(self, func, prefix: str, style: str) -> None:
        with patch.object(Console, "print") as mock_print:
            func("message")

        mock_print.assert_called_once_with(f"{prefix} message", style=style)

    def test_custom_prefix(self) -> None:
        with patch.object(Console, "print") as mock_print:
            print_error("bad clause", prefix="!")

        mock_print.assert_called_once_with("! bad clause", style="error")


@pytest.mark.unit
class TestPrintTable:
    """Tests for print_table rendering."""

    def test_empty_rows_print_nothing(self) -> None:
        with patch.object(Console, "print") as mock_print:
            print_table([])

        mock_print.assert_not_called()

    def test_headers_default_to_first_row_keys(self) -> None:
        rows = [{"Version": "1.0", "Matches": "yes"}]

        with patch.object(Console, "print") as mock_print:
            print_table(rows, title="Results")

        table = mock_print.call_args[0][0]
        assert isinstance(table, Table)
        assert table.title == "Results"
        assert [column.header for column in table.columns] == ["Version", "Matches"]
        assert table.row_count == 1

    def test_explicit_headers_and_missing_cells(self) -> None:
        rows = [{"Version": "1.0"}, {"Version": "2.0", "Kind": "final"}]

        with patch.object(Console, "print") as mock_print:
            print_table(
                rows,
                headers=["Version", "Kind"],
                column_styles={"Kind": {"justify": "center"}},
            )

        table = mock_print.call_args[0][0]
        assert table.columns[1].justify == "center"
        assert table.row_count == 2


@pytest.mark.unit
class TestColorizeMatch:
    """Tests for colorize_match labels."""

    def test_match(self) -> None:
        assert colorize_match(True) == "[green]✓ yes[/green]"

    def test_no_match(self) -> None:
        assert colorize_match(False) == "[red]✗ no[/red]"
