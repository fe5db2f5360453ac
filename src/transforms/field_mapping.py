"""Legacy field reconciliation.

This module maps recognized legacy column names onto canonical fields.
It only extracts values; validation happens in record_validation.
"""

from __future__ import annotations

from core.types import FieldMapping, LegacyFields, RawRecord
from transforms.legacy_fields import read_legacy_field
from transforms.unit_conversion import coerce_number


def identify_price(record: RawRecord, mapping: FieldMapping) -> float | None:
    """Find the price using the first present price column synonym.

    Args:
        record: Legacy record mapping.
        mapping: Recognized legacy field names.

    Returns:
        Numeric price candidate, or None if no usable price exists.
    """
    for price_key in mapping.price_keys:
        price_field = read_legacy_field(record, price_key, mapping.missing_token)
        if price_field.presence == "absent":
            continue
        if not price_field.is_usable:
            return None
        return coerce_number(price_field.value)
    return None


def identify_fields(record: RawRecord, mapping: FieldMapping) -> LegacyFields:
    """Extract grade, dimensions, and raw identifier from a legacy record.

    Args:
        record: Legacy record mapping.
        mapping: Recognized legacy field names.

    Returns:
        Extracted fields. Dimensions are left raw for unit conversion.
    """
    grade_field = read_legacy_field(record, mapping.grade_key, mapping.missing_token)
    diameter_field = read_legacy_field(record, mapping.diameter_key, mapping.missing_token)
    wall_field = read_legacy_field(record, mapping.wall_thickness_key, mapping.missing_token)
    raw_id_field = read_legacy_field(record, mapping.raw_id_key, mapping.missing_token)
    grade = mapping.unspecified_grade
    if grade_field.is_usable and str(grade_field.value).strip():
        grade = str(grade_field.value)
    raw_id = None
    if raw_id_field.is_usable and str(raw_id_field.value).strip():
        raw_id = str(raw_id_field.value)
    return LegacyFields(
        grade=grade,
        diameter_mm=diameter_field.value if diameter_field.is_usable else None,
        wall_thickness_mm=wall_field.value if wall_field.is_usable else None,
        raw_id=raw_id,
    )


def legacy_field_destinations(mapping: FieldMapping) -> dict[str, str]:
    """Build the legacy name to canonical destination table for traceability.

    Args:
        mapping: Recognized legacy field names.

    Returns:
        Ordered mapping of legacy column name to destination path.
    """
    destinations = {mapping.grade_key: "name"}
    for price_key in mapping.price_keys:
        destinations[price_key] = "price.amount"
    destinations[mapping.wall_thickness_key] = "properties.wallThickness (m, from mm)"
    destinations[mapping.diameter_key] = "properties.diameter (m, from mm)"
    destinations[mapping.raw_id_key] = "properties.rawId"
    return destinations
