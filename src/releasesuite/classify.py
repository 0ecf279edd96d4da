from __future__ import annotations

import re

# Ordered: earlier keys win when several match the same text.
COMPONENT_SYNONYMS: dict[str, str] = {
    'html5 portal': 'html5_portal',
    'portal': 'html5_portal',
    'mobile web': 'mobile_web',
    'mobile': 'mobile_web',
    'desktop': 'desktop',
    'client': 'desktop',
    'api': 'api',
    'rest api': 'api',
}

_COMPONENT_RES: list[tuple[re.Pattern[str], str]] = [
    (re.compile(rf'(?<!\w){re.escape(key)}(?!\w)'), value)
    for key, value in COMPONENT_SYNONYMS.items()
]

# Substring matches: "debugger" and "hotfixes" count as bug text.
_BUG_RE = re.compile(r'bug|fix|fixed|error|issue|defect|hotfix')
_IMPLEMENTATION_RE = re.compile(r'implement|implementation|feature|add|support|enable')
_CORE_RE = re.compile(r'core|refactor|performance|optimi[sz]e|infra|architecture')


def _normalize(text: str) -> str:
    # Enum spellings ("mobile_web") should hit the same synonyms as prose.
    return text.lower().replace('_', ' ').strip()


def detect_component(text: str) -> str | None:
    n = _normalize(text)
    if not n:
        return None
    for pattern, component in _COMPONENT_RES:
        if pattern.search(n):
            return component
    return None


def detect_category(title: str, description: str = '') -> str | None:
    """Keyword triage over an item's text; bug patterns take precedence."""
    blob = f'{title}\n{description}'.lower()
    if _BUG_RE.search(blob):
        return 'bug'
    if _IMPLEMENTATION_RE.search(blob):
        return 'implementation'
    if _CORE_RE.search(blob):
        return 'core_development'
    return None


def category_from_keyword(token: str) -> str | None:
    """Map an explicit ``Category:`` metadata value onto the category enum."""
    n = token.lower()
    if re.search(r'bug|fix', n):
        return 'bug'
    if re.search(r'implement|feature', n):
        return 'implementation'
    if re.search(r'core|refactor|perf|infra', n):
        return 'core_development'
    return None


__all__ = [
    'COMPONENT_SYNONYMS',
    'detect_component',
    'detect_category',
    'category_from_keyword',
]
