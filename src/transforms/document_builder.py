"""Canonical material document assembly.

This module turns one legacy record into one material document.
Records without a valid price are rejected and produce no document.
"""

from __future__ import annotations

from datetime import datetime, timezone

from core.constants import PLACEHOLDER_COMPANY_ID
from core.logging_config import get_logger
from core.types import FieldMapping, MaterialDocument, Price, PropertyValue, RawRecord
from transforms.field_mapping import identify_fields, identify_price
from transforms.record_validation import accept_price
from transforms.unit_conversion import to_meters

_LOGGER = get_logger(__name__)


def build_material_document(
    category: str,
    record: RawRecord,
    company_id: str,
    mapping: FieldMapping,
    created_at: datetime | None = None,
) -> MaterialDocument | None:
    """Build a canonical material document from a legacy record.

    Args:
        category: Source category name.
        record: Legacy record mapping.
        company_id: Tenant identifier, placeholder used when empty.
        mapping: Recognized legacy field names.
        created_at: Transformation instant, defaults to current UTC time.

    Returns:
        Material document, or None when the record is rejected.
    """
    price_amount = identify_price(record, mapping)
    if price_amount is None or not accept_price(price_amount):
        _LOGGER.debug("record_skipped", category=category, reason="price_missing_or_invalid")
        return None
    fields = identify_fields(record, mapping)
    properties: dict[str, PropertyValue] = {}
    diameter = to_meters(fields.diameter_mm)
    if diameter is not None:
        properties["diameter"] = diameter
    wall_thickness = to_meters(fields.wall_thickness_mm)
    if wall_thickness is not None:
        properties["wallThickness"] = wall_thickness
    if fields.raw_id is not None:
        properties["rawId"] = fields.raw_id
    timestamp = created_at or datetime.now(timezone.utc)
    return MaterialDocument(
        company_id=company_id or PLACEHOLDER_COMPANY_ID,
        category=category,
        name=fields.grade,
        price=Price(amount=price_amount),
        properties=properties,
        created_at=timestamp,
        updated_at=timestamp,
    )
