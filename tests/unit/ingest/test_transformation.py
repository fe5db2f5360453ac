"""Unit tests for whole-dataset transformation."""

from __future__ import annotations

import json
from dataclasses import replace

import pytest

from core.errors import SourceReadError
from core.types import FieldMapping
from ingest.transformation import count_source_records, transform_all

PRICE_KEY = "Стоимость, руб./кг. без НДС"


def _without_timestamps(documents: list) -> list:
    return [replace(document, created_at=None, updated_at=None) for document in documents]


def test_transform_all_pipe_scenario() -> None:
    """A priced pipe record becomes one normalized document."""
    groups = {"Трубы": [{"Марка стали": "20", PRICE_KEY: 55.2, "d": 100, "S,мм": 4}]}

    documents = transform_all(groups, "company-1", FieldMapping())

    assert len(documents) == 1
    document = documents[0]
    assert (document.name, document.price.amount) == ("20", 55.2)
    assert document.properties["diameter"].value == pytest.approx(0.1)
    assert document.properties["wallThickness"].value == pytest.approx(0.004)


def test_transform_all_drops_unpriced_records() -> None:
    """A record without a price leaves no document."""
    groups = {"Трубы": [{"Марка стали": "20", "d": 100, "S,мм": 4}]}

    assert transform_all(groups, "company-1", FieldMapping()) == []


def test_transform_all_preserves_category_and_record_order() -> None:
    """Output follows category order, then record order."""
    groups = {
        "B": [{"Марка стали": "b1", PRICE_KEY: 1}, {"Марка стали": "b2", PRICE_KEY: 2}],
        "A": [{"Марка стали": "a1", PRICE_KEY: 3}],
    }

    documents = transform_all(groups, "company-1", FieldMapping())

    assert [(doc.category, doc.name) for doc in documents] == [
        ("B", "b1"),
        ("B", "b2"),
        ("A", "a1"),
    ]


def test_transform_all_skips_malformed_categories_and_items() -> None:
    """Non-list categories and non-object items are ignored."""
    groups = {
        "Примечания": "free text",
        "Счётчик": 3,
        "Трубы": ["junk", None, {PRICE_KEY: 5}],
    }

    documents = transform_all(groups, "company-1", FieldMapping())

    assert [doc.category for doc in documents] == ["Трубы"]


def test_transform_all_is_repeatable() -> None:
    """Two runs over the same input match apart from timestamps."""
    groups = {
        "Трубы": [
            {"Марка стали": "20", PRICE_KEY: 55.2, "d": 100, "id": "AB12"},
            {"Марка стали": "10", PRICE_KEY: 0},
        ]
    }

    first_run = transform_all(groups, "company-1", FieldMapping())
    second_run = transform_all(groups, "company-1", FieldMapping())

    assert _without_timestamps(first_run) == _without_timestamps(second_run)


def test_transform_all_stamps_one_instant_per_run() -> None:
    """All documents from one run share the transformation instant."""
    groups = {"Трубы": [{PRICE_KEY: 1}, {PRICE_KEY: 2}]}

    documents = transform_all(groups, "company-1", FieldMapping())

    assert documents[0].created_at == documents[1].created_at


def test_transform_all_raises_for_non_mapping_input() -> None:
    """A top-level list cannot be interpreted as category groups."""
    with pytest.raises(SourceReadError):
        transform_all([{"Трубы": []}], "company-1", FieldMapping())  # type: ignore[arg-type]


def test_count_source_records_ignores_malformed_categories() -> None:
    """Record count only covers list-valued categories."""
    groups = {"Трубы": [{}, {}], "Примечания": "text"}

    assert count_source_records(groups) == 2


def test_transform_all_skips_out_of_range_numbers() -> None:
    """Huge integers leave no dimension and no price, without aborting the run."""
    groups = json.loads(
        '{"Трубы": [{"' + PRICE_KEY + '": 5, "d": 1' + "0" * 400 + "}, "
        '{"' + PRICE_KEY + '": 1' + "0" * 400 + "}]}"
    )

    documents = transform_all(groups, "company-1", FieldMapping())

    assert len(documents) == 1
    assert documents[0].price.amount == 5
    assert "diameter" not in documents[0].properties
