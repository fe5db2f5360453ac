"""Unit tests for material document serialization."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

from core.types import MaterialDocument, NormalizedMeasurement, Price
from store.document_payload import (
    material_document_to_payload,
    render_preview_json,
    write_preview_file,
)

INSTANT = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


def _document() -> MaterialDocument:
    return MaterialDocument(
        company_id="company-1",
        category="Трубы",
        name="20",
        price=Price(amount=55.2),
        properties={
            "diameter": NormalizedMeasurement(value=0.1, source_value=100.0),
            "rawId": "AB12",
        },
        created_at=INSTANT,
        updated_at=INSTANT,
    )


def test_payload_uses_canonical_field_names() -> None:
    """Payload keys follow the canonical document schema."""
    payload = material_document_to_payload(_document())

    assert payload["companyId"] == "company-1"
    assert payload["price"] == {"currency": "RUB", "amount": 55.2}
    assert payload["properties"] == {
        "diameter": {"value": 0.1, "unit": "m", "sourceUnit": "mm", "sourceValue": 100.0},
        "rawId": "AB12",
    }
    assert (payload["unitSystem"], payload["specStandard"]) == ("SI", "GOST")
    assert (payload["isActive"], payload["version"]) == (True, 1)
    assert payload["createdAt"] is INSTANT


def test_render_preview_json_serializes_timestamps_and_cyrillic() -> None:
    """Preview JSON keeps Cyrillic readable and dates as ISO strings."""
    text = render_preview_json([_document()])

    assert "Трубы" in text
    assert json.loads(text)[0]["createdAt"] == "2024-01-02T03:04:05+00:00"


def test_write_preview_file_creates_parent_directories(tmp_path: Path) -> None:
    """Preview file is written with its parent directory."""
    preview_path = tmp_path / "nested" / "preview.json"

    write_preview_file(preview_path, [_document(), _document()])

    assert len(json.loads(preview_path.read_text(encoding="utf-8"))) == 2
