from __future__ import annotations

import textwrap

from releasesuite.parser import (
    CUTOFF_DATE,
    extract_release_sections,
    parse_multiple_release_notes,
)
from releasesuite.payloads import to_store_payloads


def test_extracts_two_sections(two_releases_text: str) -> None:
    sections = extract_release_sections(two_releases_text)
    assert len(sections) == 2
    first, second = sections
    assert first.startswith("25.01.17\n")
    assert second.startswith("25.04.11\n")
    assert "25.04.11" not in first
    assert "25.01.17" not in second
    assert first.count("25.01.17") == 1


def test_header_needs_adjacent_dash_rule() -> None:
    text = textwrap.dedent(
        """\
        25.01.17
        ----------
        215139 Fix A
        25.02.01
        215140 Fix B
        """
    )
    sections = extract_release_sections(text)
    assert len(sections) == 1
    assert "215140 Fix B" in sections[0]


def test_no_headers_returns_whole_text() -> None:
    text = "25.01.17\n215139 Fix A\n"
    assert extract_release_sections(text) == [text]


def test_parse_multiple(two_releases_text: str) -> None:
    releases = parse_multiple_release_notes(two_releases_text)
    assert [r.version for r in releases] == ["25.01.17", "25.04.11"]
    first, second = releases
    assert first.items[0].azure_devops_id == 215139
    assert first.items[0].description == "Status no longer sticks after publishing."
    assert second.items[0].component == "desktop"


def test_single_release_fallback_without_dash_rules() -> None:
    releases = parse_multiple_release_notes("25.01.17\n215139 Mobile Web - Fix A\n")
    assert len(releases) == 1
    assert releases[0].items[0].component == "mobile_web"


def test_unparseable_input_yields_nothing() -> None:
    assert parse_multiple_release_notes("just some words\nand more words") == []


def test_bad_section_is_skipped() -> None:
    text = textwrap.dedent(
        """\
        ----------
        13.13.2024
        ----------
        215139 Broken header
        ----------
        25.01.17
        ----------
        215140 Fix B
        """
    )
    releases = parse_multiple_release_notes(text)
    assert [r.version for r in releases] == ["25.01.17"]


def test_cutoff_filters_old_releases() -> None:
    text = textwrap.dedent(
        """\
        ----------
        22.12.01
        ----------
        215100 Old fix
        ----------
        23.05.19
        ----------
        215139 Boundary fix
        ----------
        25.01.17
        ----------
        215140 New fix
        """
    )
    releases = parse_multiple_release_notes(text)
    assert [r.version for r in releases] == ["23.05.19", "25.01.17"]
    assert all(r.release_date[:10] >= CUTOFF_DATE for r in releases)


def test_payload_dates_match_release_dates(two_releases_text: str) -> None:
    releases = parse_multiple_release_notes(two_releases_text)
    payloads = to_store_payloads(releases)
    assert len(payloads) == len(releases) == 2
    for release, payload in zip(releases, payloads):
        assert payload["release"]["release_date"] == release.release_date[:10]
        assert payload["release"]["version"] == release.version


def test_parsing_twice_is_identical(two_releases_text: str) -> None:
    assert parse_multiple_release_notes(two_releases_text) == parse_multiple_release_notes(
        two_releases_text
    )
