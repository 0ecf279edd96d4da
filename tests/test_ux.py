"""Tests for terminal output helpers."""

from __future__ import annotations

import io

import pytest

from releasesuite.models import ParsedItem, ParsedRelease
from releasesuite.ux import Colors, colorize, print_release_table


def _release(version: str, date: str, *categories: str | None) -> ParsedRelease:
    items = tuple(
        ParsedItem(azure_devops_id=100 + n, title=f"Item {n}", category=category)
        for n, category in enumerate(categories)
    )
    return ParsedRelease(version=version, release_date=f"{date}T00:00:00.000Z", items=items)


def test_colorize_with_tty_support(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.setenv("TERM", "xterm-256color")
    stream = io.StringIO()
    stream.isatty = lambda: True  # type: ignore[method-assign]

    result = colorize("25.01.17", Colors.CYAN, bold=True, stream=stream)
    assert result == f"{Colors.BOLD}{Colors.CYAN}25.01.17{Colors.RESET}"


def test_colorize_respects_no_color(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NO_COLOR", "1")
    assert colorize("25.01.17", Colors.RED) == "25.01.17"


def test_release_table_rows_and_category_mix() -> None:
    stream = io.StringIO()
    releases = [
        _release("25.01.17", "2025-01-17", "bug", "bug", None),
        _release("25.04.11", "2025-04-11"),
    ]
    print_release_table(releases, stream=stream)

    lines = stream.getvalue().splitlines()
    assert lines[0] == "  25.01.17   2025-01-17  items: 3  (bug=2, uncategorized=1)"
    assert lines[1] == "  25.04.11   2025-04-11  items: 0"


def test_release_table_limit_collapses_rest() -> None:
    stream = io.StringIO()
    releases = [_release(f"25.01.{d:02d}", f"2025-01-{d:02d}", "implementation") for d in range(1, 6)]
    print_release_table(releases, limit=2, stream=stream)

    lines = stream.getvalue().splitlines()
    assert len(lines) == 3
    assert lines[-1] == "  ... (3 more)"
