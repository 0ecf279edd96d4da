from __future__ import annotations

import pytest

from releasesuite.classify import category_from_keyword, detect_category, detect_component


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Mobile Web", "mobile_web"),
        ("mobile", "mobile_web"),
        ("mobile_web", "mobile_web"),
        ("HTML5 Portal", "html5_portal"),
        ("Customer portal", "html5_portal"),
        ("Desktop", "desktop"),
        ("Windows client", "desktop"),
        ("REST API", "api"),
        ("capital gains report", None),
        ("", None),
    ],
)
def test_detect_component(text: str, expected: str | None) -> None:
    assert detect_component(text) == expected


def test_detect_component_uses_table_order() -> None:
    # "portal" is listed before "desktop"
    assert detect_component("desktop portal") == "html5_portal"


@pytest.mark.parametrize(
    "title, description, expected",
    [
        ("Fix LP status stuck on Released", "", "bug"),
        ("Login error on Safari", "", "bug"),
        ("Add export to CSV", "", "implementation"),
        ("Search", "Enable fuzzy matching", "implementation"),
        ("Refactor core scheduler", "", "core_development"),
        ("Improve performance of search", "", "core_development"),
        ("Update copy on landing page", "", None),
    ],
)
def test_detect_category(title: str, description: str, expected: str | None) -> None:
    assert detect_category(title, description) == expected


@pytest.mark.parametrize(
    "title, expected",
    [
        ("Debugger hangs on attach", "bug"),
        ("Hotfixes rolled into nightly", "bug"),
        ("Readded the legacy toggle", "implementation"),
    ],
)
def test_detect_category_matches_inside_words(title: str, expected: str) -> None:
    assert detect_category(title) == expected


def test_bug_wins_over_feature() -> None:
    assert detect_category("New feature", "includes a fix for paging") == "bug"


@pytest.mark.parametrize(
    "token, expected",
    [
        ("bug", "bug"),
        ("Bugfix", "bug"),
        ("Feature", "implementation"),
        ("Implementation", "implementation"),
        ("Core Development", "core_development"),
        ("perf", "core_development"),
        ("docs", None),
    ],
)
def test_category_from_keyword(token: str, expected: str | None) -> None:
    assert category_from_keyword(token) == expected
