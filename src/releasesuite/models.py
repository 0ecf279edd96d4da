from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

COMPONENTS = ("mobile_web", "desktop", "api", "html5_portal")
CATEGORIES = ("bug", "core_development", "implementation")


@dataclass(frozen=True)
class ParsedItem:
    """A single change entry within a release.

    ``component`` and ``category`` are best-effort classifications and may be
    ``None`` when nothing in the item text matched.
    """

    azure_devops_id: int | None
    title: str
    description: str = ""
    component: str | None = None
    category: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "azureDevopsId": self.azure_devops_id,
            "title": self.title,
            "description": self.description,
            "component": self.component,
            "category": self.category,
        }


@dataclass(frozen=True)
class ParsedRelease:
    """Canonical in-memory representation of one parsed release.

    ``version`` is the short canonical token (``25.01.17``) and
    ``release_date`` an ISO-8601 UTC midnight timestamp. The pair is what the
    persistence layer joins on; no surrogate ids live here.
    """

    version: str
    release_date: str
    items: tuple[ParsedItem, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        # Field names are the export schema; keep them stable.
        return {
            "version": self.version,
            "releaseDate": self.release_date,
            "items": [item.to_dict() for item in self.items],
        }


__all__ = ["ParsedItem", "ParsedRelease", "COMPONENTS", "CATEGORIES"]
