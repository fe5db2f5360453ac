"""Shared serialization for MaterialDocument payloads.

This module centralizes the canonical document field layout.
It is reused by the store bulk loader and by preview rendering.
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Sequence

from core.constants import PREVIEW_JSON_INDENT
from core.errors import MigrationError
from core.types import MaterialDocument, NormalizedMeasurement, PropertyValue


def material_document_to_payload(document: MaterialDocument) -> dict[str, object]:
    """Serialize a MaterialDocument into a store-ready payload.

    Timestamps stay ``datetime`` objects so the store keeps native dates.

    Args:
        document: Material document instance.

    Returns:
        Dictionary payload with canonical camelCase field names.
    """
    return {
        "companyId": document.company_id,
        "category": document.category,
        "name": document.name,
        "price": {
            "currency": document.price.currency,
            "amount": document.price.amount,
        },
        "unitSystem": document.unit_system,
        "specStandard": document.spec_standard,
        "properties": {
            name: _property_to_payload(value) for name, value in document.properties.items()
        },
        "isActive": document.is_active,
        "createdAt": document.created_at,
        "updatedAt": document.updated_at,
        "version": document.version,
    }


def render_preview_json(documents: Sequence[MaterialDocument]) -> str:
    """Render documents as indented JSON text.

    Args:
        documents: Documents to render.

    Returns:
        JSON array text with ISO-8601 timestamps.
    """
    payloads = [material_document_to_payload(document) for document in documents]
    return json.dumps(
        payloads,
        indent=PREVIEW_JSON_INDENT,
        ensure_ascii=False,
        default=_json_default,
    )


def write_preview_file(preview_path: Path, documents: Sequence[MaterialDocument]) -> None:
    """Write the full transformed sequence to a preview file.

    Args:
        preview_path: Output JSON file path.
        documents: Documents to serialize.

    Raises:
        MigrationError: If the file cannot be written.
    """
    try:
        preview_path.parent.mkdir(parents=True, exist_ok=True)
        preview_path.write_text(render_preview_json(documents), encoding="utf-8")
    except OSError as error:
        raise MigrationError(
            f"Failed to write preview file at {preview_path}: {error}. "
            "Check the directory exists and is writable."
        ) from error


def _property_to_payload(value: PropertyValue) -> object:
    if isinstance(value, NormalizedMeasurement):
        return {
            "value": value.value,
            "unit": value.unit,
            "sourceUnit": value.source_unit,
            "sourceValue": value.source_value,
        }
    return value


def _json_default(value: object) -> str:
    if isinstance(value, datetime):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")
