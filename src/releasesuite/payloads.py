from __future__ import annotations

import json
from collections.abc import Iterable
from typing import Any, TypedDict

from .models import ParsedRelease


class ReleaseRow(TypedDict):
    version: str
    release_date: str


class ItemRow(TypedDict):
    title: str
    description: str
    azure_devops_id: int | None
    component: str | None


class StorePayload(TypedDict):
    release: ReleaseRow
    items: list[ItemRow]


def to_store_payload(parsed: ParsedRelease) -> StorePayload:
    """Shape one release into the release row plus item rows the store inserts.

    Surrogate ids, batch tags and upsert decisions belong to the store.
    """
    return {
        'release': {
            'version': parsed.version,
            # date column wants YYYY-MM-DD
            'release_date': parsed.release_date[:10],
        },
        'items': [
            {
                'title': item.title,
                'description': item.description,
                'azure_devops_id': item.azure_devops_id,
                'component': item.component,
            }
            for item in parsed.items
        ],
    }


def to_store_payloads(releases: Iterable[ParsedRelease]) -> list[StorePayload]:
    return [to_store_payload(r) for r in releases]


def releases_to_json_data(releases: Iterable[ParsedRelease]) -> list[dict[str, Any]]:
    return [r.to_dict() for r in releases]


def export_releases_json(releases: Iterable[ParsedRelease], *, pretty: bool = True) -> str:
    """Serialize parsed releases for the file export feature."""
    data = releases_to_json_data(releases)
    if pretty:
        return json.dumps(data, indent=2) + '\n'
    return json.dumps(data)


__all__ = [
    'ReleaseRow',
    'ItemRow',
    'StorePayload',
    'to_store_payload',
    'to_store_payloads',
    'releases_to_json_data',
    'export_releases_json',
]
