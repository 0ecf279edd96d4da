"""Line-by-line segmentation of a release body into change items.

The segmenter is a small finite-state accumulator. It is either idle
(``NO_ITEM``) or collecting one item (``IN_ITEM``). Each line is classified
into one of the events below and fed to :meth:`ItemSegmenter.feed`:

``DATE``      standalone date/version token: flush, go idle
``HEADER``    ``<4-9 digit id> <text>``: flush, start a new item
``METADATA``  ``id: <id> | component: X | category: Y``: flush, start a new
              item titled after the nearest preceding content or header
              line (that line also stays in the previous description)
``CONTENT``   anything else: append to the current item's description
``SKIP``      blank lines and dash rules

:meth:`ItemSegmenter.finish` is the end-of-input transition.
"""

from __future__ import annotations

import enum
import re
from collections.abc import Iterable
from dataclasses import dataclass, field

from .classify import category_from_keyword, detect_category, detect_component
from .dates import is_date_line
from .models import ParsedItem

UNTITLED = 'Untitled'

_DASH_RE = re.compile(r'^-+$')
_HEADER_RE = re.compile(r'^(\d{4,9})\s+(.+)$')
_COMPONENT_SPLIT_RE = re.compile(r'\s+-\s+')
_METADATA_RE = re.compile(
    r'^id\s*:\s*(\d{3,9})'
    r'(?:\s*\|\s*component\s*:\s*([^|]+))?'
    r'(?:\s*\|\s*category\s*:\s*([^|]+))?',
    re.IGNORECASE,
)
_METADATA_PREFIX_RE = re.compile(r'^id\s*:', re.IGNORECASE)


class State(enum.Enum):
    NO_ITEM = 'no_item'
    IN_ITEM = 'in_item'


class LineKind(enum.Enum):
    SKIP = 'skip'
    DATE = 'date'
    HEADER = 'header'
    METADATA = 'metadata'
    CONTENT = 'content'


def is_dash_line(line: str) -> bool:
    return bool(_DASH_RE.match(line.strip()))


def classify_line(line: str) -> LineKind:
    stripped = line.strip()
    if not stripped or _DASH_RE.match(stripped):
        return LineKind.SKIP
    if is_date_line(stripped):
        return LineKind.DATE
    if _HEADER_RE.match(stripped):
        return LineKind.HEADER
    if _METADATA_RE.match(stripped):
        return LineKind.METADATA
    return LineKind.CONTENT


@dataclass
class _Draft:
    azure_devops_id: int | None
    title: str
    component: str | None = None
    category: str | None = None
    lines: list[str] = field(default_factory=list)

    def freeze(self) -> ParsedItem:
        description = '\n'.join(self.lines).strip()
        component = self.component or detect_component(f'{self.title}\n{description}')
        category = self.category or detect_category(self.title, description)
        return ParsedItem(
            azure_devops_id=self.azure_devops_id,
            title=self.title,
            description=description,
            component=component,
            category=category,
        )


def _split_component(rest: str) -> tuple[str | None, str]:
    """Split ``"Mobile Web - Fix thing"`` into (component, title)."""
    parts = _COMPONENT_SPLIT_RE.split(rest)
    if len(parts) >= 2:
        component = detect_component(parts[0])
        if component:
            return component, ' - '.join(parts[1:]).strip()
    return None, rest.strip()


class ItemSegmenter:
    """Accumulates items from a sequence of lines.

    Instances are single-use per release body; nothing is shared between
    parses.
    """

    def __init__(self) -> None:
        self.state = State.NO_ITEM
        self.items: list[ParsedItem] = []
        self._current: _Draft | None = None
        self._last_content: str | None = None

    def _flush(self) -> None:
        if self._current is not None:
            self.items.append(self._current.freeze())
        self._current = None
        self.state = State.NO_ITEM

    def _start(self, draft: _Draft) -> None:
        self._flush()
        self._current = draft
        self.state = State.IN_ITEM

    def feed(self, raw: str) -> LineKind:
        kind = classify_line(raw)
        line = raw.strip()
        if kind is LineKind.SKIP:
            return kind
        if kind is LineKind.DATE:
            self._flush()
            self._last_content = None
        elif kind is LineKind.HEADER:
            m = _HEADER_RE.match(line)
            if m is None:  # pragma: no cover - classify_line guarantees a match
                return LineKind.CONTENT
            component, title = _split_component(m.group(2))
            self._start(_Draft(int(m.group(1)), title, component=component))
            # a metadata line right after a header is titled by the whole header line
            self._last_content = line
        elif kind is LineKind.METADATA:
            self._on_metadata(line)
            self._last_content = None
        else:
            if self._current is not None:
                self._current.lines.append(raw)
            self._last_content = line
        return kind

    def _on_metadata(self, line: str) -> None:
        m = _METADATA_RE.match(line)
        if m is None:  # pragma: no cover - classify_line guarantees a match
            return
        title = self._last_content or UNTITLED
        comp_token = (m.group(2) or '').strip()
        cat_token = (m.group(3) or '').strip()
        self._start(
            _Draft(
                int(m.group(1)),
                title,
                component=detect_component(comp_token) if comp_token else None,
                category=category_from_keyword(cat_token) if cat_token else None,
            )
        )

    def finish(self) -> list[ParsedItem]:
        self._flush()
        return self.items


def segment_items(lines: Iterable[str]) -> list[ParsedItem]:
    segmenter = ItemSegmenter()
    for raw in lines:
        segmenter.feed(raw)
    return segmenter.finish()


__all__ = [
    'State',
    'LineKind',
    'ItemSegmenter',
    'classify_line',
    'is_dash_line',
    'segment_items',
    'UNTITLED',
]
