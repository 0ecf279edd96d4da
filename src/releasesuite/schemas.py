"""JSON Schemas for the export document and the store payload.

The export schema pins the camelCase field names consumers rely on; nested
objects stay closed so a renamed field is caught by validation.
"""

from __future__ import annotations

from typing import Any

from .models import CATEGORIES, COMPONENTS
from .schema_registry import get_schema_descriptor

SCHEMA_KEY = "$schema"
SCHEMA_URL = "http://json-schema.org/draft-07/schema#"

_NULLABLE_COMPONENT = {"enum": [*COMPONENTS, None]}
_ISO_MIDNIGHT = r"^\d{4}-\d{2}-\d{2}T00:00:00(\.000)?Z$"


def get_schemas() -> dict[str, Any]:
    """Return a mapping of schema name -> JSON Schema dictionary.

    Keys:
        export:  list of parsed releases (file export).
        payload: list of store payloads (release row + item rows).
    """
    export_descriptor = get_schema_descriptor("export")
    export_schema: dict[str, Any] = {
        SCHEMA_KEY: SCHEMA_URL,
        "$comment": f"releasesuite export schema v{export_descriptor.version}",
        "title": "ParsedReleaseExport",
        "type": "array",
        "items": {
            "type": "object",
            "required": ["version", "releaseDate", "items"],
            "additionalProperties": False,
            "properties": {
                "version": {"type": "string", "minLength": 1},
                "releaseDate": {"type": "string", "pattern": _ISO_MIDNIGHT},
                "items": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "required": ["azureDevopsId", "title", "description", "component", "category"],
                        "additionalProperties": False,
                        "properties": {
                            "azureDevopsId": {"type": ["integer", "null"]},
                            "title": {"type": "string"},
                            "description": {"type": "string"},
                            "component": _NULLABLE_COMPONENT,
                            "category": {"enum": [*CATEGORIES, None]},
                        },
                    },
                },
            },
        },
    }

    payload_descriptor = get_schema_descriptor("payload")
    payload_schema: dict[str, Any] = {
        SCHEMA_KEY: SCHEMA_URL,
        "$comment": f"releasesuite payload schema v{payload_descriptor.version}",
        "title": "ReleaseStorePayloads",
        "type": "array",
        "items": {
            "type": "object",
            "required": ["release", "items"],
            "properties": {
                "release": {
                    "type": "object",
                    "required": ["version", "release_date"],
                    "properties": {
                        "version": {"type": "string"},
                        "release_date": {"type": "string", "pattern": r"^\d{4}-\d{2}-\d{2}$"},
                    },
                },
                "items": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "required": ["title", "description", "azure_devops_id", "component"],
                        "properties": {
                            "title": {"type": "string"},
                            "description": {"type": "string"},
                            "azure_devops_id": {"type": ["integer", "null"]},
                            "component": _NULLABLE_COMPONENT,
                        },
                    },
                },
            },
        },
    }

    return {"export": export_schema, "payload": payload_schema}


__all__ = ["get_schemas", "SCHEMA_URL"]
