"""Unit tests for canonical document assembly."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from core.types import FieldMapping, NormalizedMeasurement
from transforms.document_builder import build_material_document

PRICE_KEY = "Стоимость, руб./кг. без НДС"


def test_build_material_document_maps_pipe_record() -> None:
    """A complete record becomes a fully populated document."""
    record = {"Марка стали": "20", PRICE_KEY: 55.2, "d": 100, "S,мм": 4, "id": "AB12"}

    document = build_material_document("Трубы", record, "company-1", FieldMapping())

    assert document is not None
    assert (document.category, document.name, document.company_id) == (
        "Трубы",
        "20",
        "company-1",
    )
    assert (document.price.amount, document.price.currency) == (55.2, "RUB")
    assert document.properties["diameter"] == NormalizedMeasurement(value=0.1, source_value=100)
    wall_thickness = document.properties["wallThickness"]
    assert isinstance(wall_thickness, NormalizedMeasurement)
    assert wall_thickness.value == pytest.approx(0.004)
    assert document.properties["rawId"] == "AB12"


def test_build_material_document_stamps_creation_metadata() -> None:
    """New documents are active, version 1, with equal timestamps."""
    instant = datetime(2024, 1, 2, tzinfo=timezone.utc)

    document = build_material_document(
        "Трубы", {PRICE_KEY: 10}, "company-1", FieldMapping(), instant
    )

    assert document is not None
    assert document.created_at == document.updated_at == instant
    assert (document.version, document.is_active) == (1, True)
    assert (document.unit_system, document.spec_standard) == ("SI", "GOST")


@pytest.mark.parametrize("record", [{"Марка стали": "20"}, {PRICE_KEY: 0}, {PRICE_KEY: -3}])
def test_build_material_document_rejects_missing_or_invalid_price(record: dict) -> None:
    """Records without a positive price produce no document."""
    assert build_material_document("Трубы", record, "company-1", FieldMapping()) is None


def test_build_material_document_only_includes_produced_properties() -> None:
    """Unusable dimensions and dash identifiers leave no property keys."""
    record = {PRICE_KEY: 10, "d": "abc", "S,мм": 2, "id": "-"}

    document = build_material_document("Трубы", record, "company-1", FieldMapping())

    assert document is not None
    assert set(document.properties) == {"wallThickness"}


def test_build_material_document_uses_placeholder_company() -> None:
    """Preview runs without a tenant get the placeholder id."""
    document = build_material_document("Трубы", {PRICE_KEY: 10}, "", FieldMapping())

    assert document is not None
    assert document.company_id == "<provide companyId>"
