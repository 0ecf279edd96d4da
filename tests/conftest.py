"""Pytest configuration for releasesuite tests.

Ensures the in-repo `src` directory is on `sys.path` so the package can be
imported without an editable install (`pip install -e .`).
"""

from __future__ import annotations

import sys
import textwrap
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

TWO_RELEASES = textwrap.dedent(
    """\
    ----------
    25.01.17
    ----------
    215139 Mobile Web - Fix LP status stuck on Released
    Status no longer sticks after publishing.

    ----------
    25.04.11
    ----------
    215200 Desktop - Add export to CSV
    Exports include hidden columns.
    """
)


@pytest.fixture
def two_releases_text() -> str:
    return TWO_RELEASES


@pytest.fixture
def notes_file(tmp_path: Path) -> Path:
    path = tmp_path / "RELEASE_NOTES.txt"
    path.write_text(TWO_RELEASES, encoding="utf-8")
    return path
