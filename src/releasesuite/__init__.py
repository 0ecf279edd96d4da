"""releasesuite - release-notes parsing and ingestion.

Turns loosely structured changelog text (or JSON) into structured release and
item records, ready for a release store or a JSON export.

from releasesuite import parse_multiple_release_notes, to_store_payloads

releases = parse_multiple_release_notes(open('notes.txt').read())
for payload in to_store_payloads(releases):
    print(payload['release'], len(payload['items']))

The CLI (``releasesuite`` / ``python -m releasesuite``) wraps the same calls.
"""

from __future__ import annotations

from .config import SuiteConfig, load_config
from .models import ParsedItem, ParsedRelease
from .parser import (
    CUTOFF_DATE,
    ParseError,
    extract_release_sections,
    parse_multiple_release_notes,
    parse_release_notes,
)
from .payloads import export_releases_json, to_store_payload, to_store_payloads

# Version constant (sync manually with pyproject)
__version__ = "0.1.0"

__all__ = [
    "CUTOFF_DATE",
    "ParseError",
    "ParsedItem",
    "ParsedRelease",
    "SuiteConfig",
    "export_releases_json",
    "extract_release_sections",
    "load_config",
    "parse_multiple_release_notes",
    "parse_release_notes",
    "to_store_payload",
    "to_store_payloads",
    "__version__",
]
