"""Structural ingestion of release notes supplied as JSON.

Accepts a single release object or an array of them::

    {"version": "25.01.17", "items": [{"azure_devops_id": 215139, "title": "..."}]}

No separator or ordering heuristics apply here; the structure is trusted and
only the release date has to be resolvable.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from .classify import detect_component
from .dates import DateToken, parse_date_token
from .models import CATEGORIES, COMPONENTS, ParsedItem, ParsedRelease

logger = logging.getLogger(__name__)

_ISO_DATE_RE = re.compile(r'^(\d{4})-(\d{2})-(\d{2})$')
_ISO_PREFIX_RE = re.compile(r'^(\d{4}-\d{2}-\d{2})T')


def _looks_like_json(text: str) -> bool:
    t = text.strip()
    return t.startswith('[') or t.startswith('{')


def _int_or_none(value: Any) -> int | None:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def _component(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    if value in COMPONENTS:
        return value
    return detect_component(value)


def _category(value: Any) -> str | None:
    return value if isinstance(value, str) and value in CATEGORIES else None


def _item_from_json(raw: Any) -> ParsedItem | None:
    if not isinstance(raw, dict):
        return None
    azure_id = _int_or_none(raw.get('azureDevopsId'))
    if azure_id is None:
        azure_id = _int_or_none(raw.get('azure_devops_id'))
    return ParsedItem(
        azure_devops_id=azure_id,
        title=str(raw.get('title') or ''),
        description=str(raw.get('description') or ''),
        component=_component(raw.get('component')),
        category=_category(raw.get('category')),
    )


def _from_release_date(value: str) -> DateToken | None:
    m = _ISO_DATE_RE.match(value)
    if not m:
        return None
    parsed = parse_date_token(value.replace('-', '.'))
    if parsed is None:
        return None
    year, month, day = m.groups()
    return DateToken(parsed.iso, f'{day}.{month}.{year[2:]}')


def _resolve_date(raw: dict[str, Any]) -> DateToken | None:
    for key in ('version', 'releaseDate'):
        value = raw.get(key)
        if value is None or value == '':
            continue
        token = str(value).strip()
        parsed = parse_date_token(token)
        if parsed is None:
            m = _ISO_PREFIX_RE.match(token)
            parsed = _from_release_date(m.group(1)) if m else None
        if parsed:
            return parsed
    release_date = raw.get('release_date')
    if isinstance(release_date, str):
        return _from_release_date(release_date)
    return None


def _release_from_json(raw: Any) -> ParsedRelease | None:
    if not isinstance(raw, dict):
        return None
    header = _resolve_date(raw)
    if header is None:
        logger.debug('Dropping JSON release without a resolvable date: %r', raw.get('version'))
        return None
    items_raw = raw.get('items')
    items: list[ParsedItem] = []
    if isinstance(items_raw, list):
        for entry in items_raw:
            item = _item_from_json(entry)
            if item is not None:
                items.append(item)
    return ParsedRelease(version=header.version, release_date=header.iso, items=tuple(items))


def parse_json_releases(text: str) -> list[ParsedRelease] | None:
    """Map JSON release data onto :class:`ParsedRelease` values.

    Returns ``None`` when ``text`` is not JSON so the caller can fall back to
    the text heuristics. Releases without a resolvable date are dropped.
    """
    if not _looks_like_json(text):
        return None
    try:
        loaded: Any = json.loads(text.strip())
    except (ValueError, RecursionError) as exc:
        # JSONDecodeError is a ValueError; deep nesting exhausts the decoder stack
        logger.debug('Input looked like JSON but did not decode (%s); using text parser', exc)
        return None
    entries = loaded if isinstance(loaded, list) else [loaded]
    releases: list[ParsedRelease] = []
    for entry in entries:
        release = _release_from_json(entry)
        if release is not None:
            releases.append(release)
    return releases


__all__ = ['parse_json_releases']
