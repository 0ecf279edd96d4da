"""Central schema registry with version metadata and filenames."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class SchemaDescriptor:
    """Describes a schema artifact shipped with releasesuite."""

    name: str
    version: str
    filename: str
    description: str


_REGISTRY: dict[str, SchemaDescriptor] = {
    "export": SchemaDescriptor(
        name="export",
        version="20250117",
        filename="release_notes_export.schema.json",
        description="Parsed releases as written by the JSON export.",
    ),
    "payload": SchemaDescriptor(
        name="payload",
        version="20250117",
        filename="release_store_payload.schema.json",
        description="Release and item rows handed to the release store.",
    ),
}


def get_schema_descriptor(name: str) -> SchemaDescriptor:
    try:
        return _REGISTRY[name]
    except KeyError as exc:
        raise KeyError(f"Unknown schema '{name}'") from exc


def iter_schema_descriptors() -> Iterable[SchemaDescriptor]:
    yield from _REGISTRY.values()


__all__ = ["SchemaDescriptor", "get_schema_descriptor", "iter_schema_descriptors"]
