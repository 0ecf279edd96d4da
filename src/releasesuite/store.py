"""Persistence boundary for parsed releases.

The parser never talks to storage. :class:`ReleaseStore` is the narrow
interface the upload flow needs (look up release rows by version, insert a
release, bulk insert items, delete), and the helpers below implement the
admin uploader's save / delete / replace / rollback behaviour on top of it.

:class:`JsonReleaseStore` is a file-backed implementation used by the CLI
and tests; a database client can implement the same protocol.
"""

from __future__ import annotations

import json
import logging
import uuid
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Protocol

from .models import ParsedRelease
from .payloads import to_store_payloads

logger = logging.getLogger(__name__)

STORE_VERSION = 1


class StoreError(RuntimeError):
    pass


class ReleaseStore(Protocol):
    def find_release_ids(self, versions: Sequence[str]) -> dict[str, str]: ...

    def insert_release(self, version: str, release_date: str, batch_id: str) -> str: ...

    def insert_items(self, rows: Sequence[dict[str, Any]]) -> None: ...

    def delete_releases(self, release_ids: Sequence[str]) -> int: ...

    def delete_batch(self, batch_id: str) -> int: ...


@dataclass
class SaveResult:
    batch_id: str
    created: list[str] = field(default_factory=list)
    reused: list[str] = field(default_factory=list)
    items_inserted: int = 0


def new_batch_id() -> str:
    return uuid.uuid4().hex


def _versions(releases: Iterable[ParsedRelease]) -> list[str]:
    return list(dict.fromkeys(r.version for r in releases))


def existing_versions(store: ReleaseStore, releases: Iterable[ParsedRelease]) -> dict[str, str]:
    versions = _versions(releases)
    if not versions:
        return {}
    return store.find_release_ids(versions)


def save_releases(
    store: ReleaseStore, releases: Sequence[ParsedRelease], batch_id: str | None = None
) -> SaveResult:
    """Insert releases and their items, reusing release rows that already exist."""
    result = SaveResult(batch_id=batch_id or new_batch_id())
    known = existing_versions(store, releases)
    for payload in to_store_payloads(releases):
        version = payload['release']['version']
        release_id = known.get(version)
        if release_id is None:
            release_id = store.insert_release(
                version, payload['release']['release_date'], result.batch_id
            )
            known[version] = release_id
            result.created.append(version)
        else:
            result.reused.append(version)
        rows = [
            {**item, 'release_id': release_id, 'upload_batch_id': result.batch_id}
            for item in payload['items']
        ]
        if rows:
            store.insert_items(rows)
            result.items_inserted += len(rows)
    return result


def delete_existing(store: ReleaseStore, releases: Sequence[ParsedRelease]) -> int:
    """Delete stored releases (and, by cascade, their items) sharing a parsed version."""
    ids = list(existing_versions(store, releases).values())
    if not ids:
        return 0
    return store.delete_releases(ids)


def replace_existing(
    store: ReleaseStore, releases: Sequence[ParsedRelease], batch_id: str | None = None
) -> SaveResult:
    delete_existing(store, releases)
    return save_releases(store, releases, batch_id=batch_id)


def rollback_batch(store: ReleaseStore, batch_id: str) -> int:
    return store.delete_batch(batch_id)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class JsonReleaseStore:
    """Release/item rows kept in a single JSON document on disk."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._releases: list[dict[str, Any]] = []
        self._items: list[dict[str, Any]] = []
        self._load()

    @property
    def releases(self) -> list[dict[str, Any]]:
        return list(self._releases)

    @property
    def items(self) -> list[dict[str, Any]]:
        return list(self._items)

    def _load(self) -> None:
        if not self.path.exists():
            return
        try:
            raw: Any = json.loads(self.path.read_text(encoding='utf-8'))
        except (OSError, json.JSONDecodeError) as exc:
            raise StoreError(f'Unreadable release store {self.path}: {exc}') from exc
        if not isinstance(raw, dict):
            raise StoreError(f'Release store {self.path} must contain a JSON object')
        releases = raw.get('releases')
        items = raw.get('items')
        self._releases = [r for r in releases if isinstance(r, dict)] if isinstance(releases, list) else []
        self._items = [i for i in items if isinstance(i, dict)] if isinstance(items, list) else []

    def _persist(self) -> None:
        payload = {
            'version': STORE_VERSION,
            'releases': self._releases,
            'items': self._items,
        }
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + '.tmp')
        tmp.write_text(json.dumps(payload, indent=2) + '\n', encoding='utf-8')
        tmp.replace(self.path)

    def find_release_ids(self, versions: Sequence[str]) -> dict[str, str]:
        wanted = set(versions)
        return {r['version']: r['id'] for r in self._releases if r.get('version') in wanted}

    def insert_release(self, version: str, release_date: str, batch_id: str) -> str:
        release_id = str(uuid.uuid4())
        self._releases.append(
            {
                'id': release_id,
                'version': version,
                'release_date': release_date,
                'upload_batch_id': batch_id,
                'created_at': _now(),
            }
        )
        self._persist()
        return release_id

    def insert_items(self, rows: Sequence[dict[str, Any]]) -> None:
        created = _now()
        for row in rows:
            self._items.append({'id': str(uuid.uuid4()), 'created_at': created, **row})
        self._persist()

    def delete_releases(self, release_ids: Sequence[str]) -> int:
        doomed = set(release_ids)
        before = len(self._releases)
        self._releases = [r for r in self._releases if r.get('id') not in doomed]
        self._items = [i for i in self._items if i.get('release_id') not in doomed]
        removed = before - len(self._releases)
        if removed:
            self._persist()
        logger.debug('Deleted %d releases from %s', removed, self.path)
        return removed

    def delete_batch(self, batch_id: str) -> int:
        doomed = {r['id'] for r in self._releases if r.get('upload_batch_id') == batch_id}
        before = len(self._items)
        self._items = [
            i
            for i in self._items
            if i.get('upload_batch_id') != batch_id and i.get('release_id') not in doomed
        ]
        self._releases = [r for r in self._releases if r.get('id') not in doomed]
        removed = len(doomed) + (before - len(self._items))
        if removed:
            self._persist()
        return removed


__all__ = [
    'ReleaseStore',
    'JsonReleaseStore',
    'SaveResult',
    'StoreError',
    'new_batch_id',
    'existing_versions',
    'save_releases',
    'delete_existing',
    'replace_existing',
    'rollback_batch',
]
