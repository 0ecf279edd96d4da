from __future__ import annotations

import logging
import re

from .dates import DATE_LINE_RE, DateToken, parse_date_token
from .json_ingest import parse_json_releases
from .models import ParsedRelease
from .segmenter import is_dash_line, segment_items

# Releases dated before this are dropped from every parse result.
CUTOFF_DATE = '2023-05-19'

HEADER_SCAN_LINES = 100
HEADER_MAX_LENGTH = 20

logger = logging.getLogger(__name__)


class ParseError(ValueError):
    pass


_TOKEN = r'\d{4}[./-]\d{1,2}[./-]\d{1,2}|\d{2}[./-]\d{2}[./-]\d{2}(?:\d{2})?'
_PREFIXED_HEADER_RE = re.compile(
    rf'^(?:version|release|footprint\s*version)\s*[:\-]?\s*({_TOKEN})$', re.IGNORECASE
)
_BARE_HEADER_RE = re.compile(rf'^({_TOKEN})$')
_RELAXED_RES = (
    re.compile(r'\b(\d{2}[./-]\d{2}[./-]\d{2}(?:\d{2})?)\b'),
    re.compile(r'\b(\d{1,2}/\d{1,2}/\d{2,4})\b'),
)
_DASH_TRANSLATION = str.maketrans({'\u2013': '-', '\u2014': '-', '\u00a0': ' '})


def normalize_text(text: str) -> str:
    """CRLF to LF, en/em dashes to ``-``, non-breaking spaces to spaces."""
    return text.replace('\r\n', '\n').translate(_DASH_TRANSLATION)


def _header_candidate(line: str) -> str | None:
    if len(line) > HEADER_MAX_LENGTH:
        return None
    m = _PREFIXED_HEADER_RE.match(line) or _BARE_HEADER_RE.match(line)
    return m.group(1).strip() if m else None


def resolve_header(lines: list[str]) -> DateToken | None:
    """Find the release's date/version token.

    Tried in order, first success wins:
    1. the first short ``version|release <token>`` or bare-token line among
       the first lines of the document;
    2. the last standalone token line anywhere;
    3. the last date-like substring anywhere, including ``m/d/y`` forms.
    """
    for raw in lines[:HEADER_SCAN_LINES]:
        line = raw.strip()
        if not line:
            continue
        token = _header_candidate(line)
        if token:
            parsed = parse_date_token(token)
            if parsed:
                return parsed
            break

    standalone = [raw.strip() for raw in lines if DATE_LINE_RE.match(raw.strip())]
    if standalone:
        parsed = parse_date_token(standalone[-1])
        if parsed:
            return parsed

    blob = '\n'.join(lines)
    for pattern in _RELAXED_RES:
        matches = pattern.findall(blob)
        if matches:
            parsed = parse_date_token(matches[-1])
            if parsed:
                return parsed
    return None


def parse_release_notes(text: str) -> ParsedRelease:
    """Parse a single release's text into a :class:`ParsedRelease`.

    Raises :class:`ParseError` when no date/version token can be found.
    """
    lines = normalize_text(text).split('\n')
    header = resolve_header(lines)
    if header is None:
        raise ParseError('Unable to parse release date/version')
    items = segment_items(lines)
    return ParsedRelease(version=header.version, release_date=header.iso, items=tuple(items))


def _is_release_header(lines: list[str], idx: int) -> bool:
    if not DATE_LINE_RE.match(lines[idx].strip()):
        return False
    above = idx - 1 >= 0 and is_dash_line(lines[idx - 1])
    below = idx + 1 < len(lines) and is_dash_line(lines[idx + 1])
    return above or below


def extract_release_sections(text: str) -> list[str]:
    """Split a multi-release document into one text block per release.

    A release header is a standalone token line with a dash rule directly
    above or below it. Each section is ``<header>\\n<body>`` so the single
    release parser finds its own header first. Without any header the whole
    document is returned as one section.
    """
    lines = normalize_text(text).split('\n')
    headers = [i for i in range(len(lines)) if _is_release_header(lines, i)]
    if not headers:
        return [text]
    sections: list[str] = []
    for pos, idx in enumerate(headers):
        end = headers[pos + 1] if pos + 1 < len(headers) else len(lines)
        start = idx + 1
        if start < len(lines) and is_dash_line(lines[start]):
            start += 1
        header_line = lines[idx].strip()
        body = '\n'.join(lines[start:end])
        sections.append(f'{header_line}\n{body}'.strip())
    return sections


def is_after_cutoff(release: ParsedRelease) -> bool:
    return release.release_date[:10] >= CUTOFF_DATE


def parse_multiple_release_notes(text: str) -> list[ParsedRelease]:
    """Parse a document holding any number of releases.

    JSON input (starting with ``[`` or ``{``) is mapped structurally; if it
    does not decode, the text heuristics take over. Sections whose date cannot
    be resolved are skipped, and releases before :data:`CUTOFF_DATE` are
    removed.
    """
    from_json = parse_json_releases(text)
    if from_json is not None:
        return [r for r in from_json if is_after_cutoff(r)]

    releases: list[ParsedRelease] = []
    for section in extract_release_sections(text):
        try:
            release = parse_release_notes(section)
        except ParseError as exc:
            logger.debug('Skipping release section %r: %s', section.split('\n', 1)[0], exc)
            continue
        if is_after_cutoff(release):
            releases.append(release)
        else:
            logger.debug('Dropping release %s dated before cutoff %s', release.version, CUTOFF_DATE)
    return releases


__all__ = [
    'CUTOFF_DATE',
    'ParseError',
    'normalize_text',
    'resolve_header',
    'parse_release_notes',
    'extract_release_sections',
    'parse_multiple_release_notes',
    'is_after_cutoff',
]
