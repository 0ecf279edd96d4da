from __future__ import annotations

from pathlib import Path

import pytest

from releasesuite.parser import parse_multiple_release_notes
from releasesuite.store import (
    JsonReleaseStore,
    StoreError,
    delete_existing,
    existing_versions,
    replace_existing,
    rollback_batch,
    save_releases,
)


@pytest.fixture
def store(tmp_path: Path) -> JsonReleaseStore:
    return JsonReleaseStore(tmp_path / ".releasesuite" / "store.json")


def test_save_creates_release_and_item_rows(store: JsonReleaseStore, two_releases_text: str) -> None:
    releases = parse_multiple_release_notes(two_releases_text)
    result = save_releases(store, releases, batch_id="batch-1")
    assert result.batch_id == "batch-1"
    assert result.created == ["25.01.17", "25.04.11"]
    assert result.reused == []
    assert result.items_inserted == 2
    rows = store.releases
    assert {r["version"] for r in rows} == {"25.01.17", "25.04.11"}
    assert {r["release_date"] for r in rows} == {"2025-01-17", "2025-04-11"}
    ids = {r["version"]: r["id"] for r in rows}
    item = next(i for i in store.items if i["azure_devops_id"] == 215139)
    assert item["release_id"] == ids["25.01.17"]
    assert item["upload_batch_id"] == "batch-1"
    assert item["component"] == "mobile_web"


def test_save_generates_batch_id(store: JsonReleaseStore, two_releases_text: str) -> None:
    result = save_releases(store, parse_multiple_release_notes(two_releases_text))
    assert len(result.batch_id) == 32


def test_save_reuses_existing_versions(store: JsonReleaseStore, two_releases_text: str) -> None:
    releases = parse_multiple_release_notes(two_releases_text)
    save_releases(store, releases)
    second = save_releases(store, releases)
    assert second.created == []
    assert second.reused == ["25.01.17", "25.04.11"]
    assert len(store.releases) == 2
    assert len(store.items) == 4
    assert set(existing_versions(store, releases)) == {"25.01.17", "25.04.11"}


def test_store_persists_to_disk(store: JsonReleaseStore, two_releases_text: str) -> None:
    save_releases(store, parse_multiple_release_notes(two_releases_text))
    reloaded = JsonReleaseStore(store.path)
    assert reloaded.releases == store.releases
    assert reloaded.items == store.items


def test_delete_existing_cascades(store: JsonReleaseStore, two_releases_text: str) -> None:
    releases = parse_multiple_release_notes(two_releases_text)
    save_releases(store, releases)
    assert delete_existing(store, releases) == 2
    assert store.releases == []
    assert store.items == []
    assert delete_existing(store, releases) == 0


def test_replace_existing(store: JsonReleaseStore, two_releases_text: str) -> None:
    releases = parse_multiple_release_notes(two_releases_text)
    save_releases(store, releases)
    save_releases(store, releases)
    result = replace_existing(store, releases, batch_id="again")
    assert result.created == ["25.01.17", "25.04.11"]
    assert len(store.items) == 2
    assert {i["upload_batch_id"] for i in store.items} == {"again"}


def test_rollback_batch(store: JsonReleaseStore, two_releases_text: str) -> None:
    releases = parse_multiple_release_notes(two_releases_text)
    save_releases(store, releases[:1], batch_id="first")
    save_releases(store, releases, batch_id="second")
    # second batch created one release (25.04.11) and added items to both
    assert rollback_batch(store, "second") == 3
    assert [r["version"] for r in store.releases] == ["25.01.17"]
    assert [i["upload_batch_id"] for i in store.items] == ["first"]
    assert rollback_batch(store, "missing") == 0


def test_corrupt_store_raises(tmp_path: Path) -> None:
    path = tmp_path / "store.json"
    path.write_text("{not json")
    with pytest.raises(StoreError):
        JsonReleaseStore(path)
