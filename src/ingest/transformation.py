"""Transformation of all legacy category groups.

This module walks categories and records in source order and collects
the accepted canonical documents.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Mapping, Sequence

from core.errors import SourceReadError
from core.logging_config import get_logger
from core.types import FieldMapping, MaterialDocument
from transforms.document_builder import build_material_document

_LOGGER = get_logger(__name__)


def transform_all(
    category_groups: Mapping[str, object],
    company_id: str,
    mapping: FieldMapping,
) -> list[MaterialDocument]:
    """Transform every legacy record into canonical documents.

    Args:
        category_groups: Mapping of category name to record list.
        company_id: Tenant identifier stamped on each document.
        mapping: Recognized legacy field names.

    Returns:
        Accepted documents ordered by category, then record order.

    Raises:
        SourceReadError: If the input is not a mapping.
    """
    if not isinstance(category_groups, Mapping):
        raise SourceReadError(
            "Invalid legacy dataset: expected mapping of category name to record list, "
            f"got {type(category_groups).__name__}."
        )
    created_at = datetime.now(timezone.utc)
    documents: list[MaterialDocument] = []
    for category, records in category_groups.items():
        if not _is_record_sequence(records):
            _LOGGER.warning("category_skipped", category=category, reason="not_a_list")
            continue
        for record in records:
            if not isinstance(record, Mapping):
                continue
            document = build_material_document(
                str(category), record, company_id, mapping, created_at
            )
            if document is not None:
                documents.append(document)
    _LOGGER.info(
        "transform_completed",
        category_count=len(category_groups),
        accepted_count=len(documents),
    )
    return documents


def count_source_records(category_groups: Mapping[str, object]) -> int:
    """Count records across all well-formed categories."""
    return sum(
        len(records) for records in category_groups.values() if _is_record_sequence(records)
    )


def _is_record_sequence(value: object) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))
