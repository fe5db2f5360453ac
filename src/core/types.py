"""Shared typed models.

This module defines immutable data models used by the transform,
ingest, and store layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Mapping, Union

from core.constants import (
    DOCUMENT_VERSION,
    LEGACY_DIAMETER_KEY,
    LEGACY_GRADE_KEY,
    LEGACY_PRICE_KEYS,
    LEGACY_RAW_ID_KEY,
    LEGACY_WALL_THICKNESS_KEY,
    METER_UNIT,
    MILLIMETER_UNIT,
    MISSING_VALUE_TOKEN,
    PRICE_CURRENCY,
    SPEC_STANDARD,
    UNIT_SYSTEM,
    UNSPECIFIED_GRADE,
)

RawRecord = Mapping[str, object]


@dataclass(frozen=True)
class NormalizedMeasurement:
    """Linear measurement normalized to SI meters.

    Attributes:
        value: Measurement in meters.
        source_value: Original numeric value before conversion.
        unit: Normalized unit, always meters.
        source_unit: Unit of the source value, always millimeters.
    """

    value: float
    source_value: float
    unit: str = METER_UNIT
    source_unit: str = MILLIMETER_UNIT


PropertyValue = Union[NormalizedMeasurement, str]


@dataclass(frozen=True)
class Price:
    """Material price per kilogram excluding VAT."""

    amount: float
    currency: str = PRICE_CURRENCY


@dataclass(frozen=True)
class MaterialDocument:
    """Canonical material document.

    Attributes:
        company_id: Tenant identifier owning the material.
        category: Source category name, copied verbatim.
        name: Material grade or the unspecified-grade sentinel.
        price: Validated positive price.
        properties: Produced dimensional properties and raw identifier.
        created_at: Transformation instant.
        updated_at: Equal to ``created_at`` on creation.
        unit_system: Measurement system of all properties.
        spec_standard: Standard the grades refer to.
        is_active: Whether the material is active.
        version: Document schema version stamp.
    """

    company_id: str
    category: str
    name: str
    price: Price
    properties: Mapping[str, PropertyValue]
    created_at: datetime
    updated_at: datetime
    unit_system: str = UNIT_SYSTEM
    spec_standard: str = SPEC_STANDARD
    is_active: bool = True
    version: int = DOCUMENT_VERSION


@dataclass(frozen=True)
class FieldMapping:
    """Recognized legacy field names and sentinel values.

    Attributes:
        price_keys: Ordered price column synonyms, first present wins.
        grade_key: Column holding the material grade.
        diameter_key: Column holding the diameter in millimeters.
        wall_thickness_key: Column holding the wall thickness in millimeters.
        raw_id_key: Column holding the legacy identifier.
        unspecified_grade: Name used when the grade is missing.
        missing_token: Legacy token meaning "no value".
    """

    price_keys: tuple[str, ...] = LEGACY_PRICE_KEYS
    grade_key: str = LEGACY_GRADE_KEY
    diameter_key: str = LEGACY_DIAMETER_KEY
    wall_thickness_key: str = LEGACY_WALL_THICKNESS_KEY
    raw_id_key: str = LEGACY_RAW_ID_KEY
    unspecified_grade: str = UNSPECIFIED_GRADE
    missing_token: str = MISSING_VALUE_TOKEN


@dataclass(frozen=True)
class LegacyFields:
    """Fields extracted from one legacy record before validation."""

    grade: str
    diameter_mm: object | None
    wall_thickness_mm: object | None
    raw_id: str | None


@dataclass(frozen=True)
class MigrationOptions:
    """Migration run options.

    Attributes:
        current_db_path: Legacy dataset path or ``s3://`` URI.
        company_id: Tenant identifier, required when inserting.
        mongo_uri: MongoDB connection string.
        db_name: Target database name.
        insert: Write accepted documents into the store.
        preview_file: Optional path for the full transformed sequence.
        field_mapping: Recognized legacy field names.
    """

    current_db_path: str
    company_id: str
    mongo_uri: str
    db_name: str
    insert: bool = False
    preview_file: str | None = None
    field_mapping: FieldMapping = field(default_factory=FieldMapping)


@dataclass(frozen=True)
class DocumentWriteFailure:
    """One document the store refused during a bulk insert."""

    index: int
    code: int | None
    message: str


@dataclass(frozen=True)
class BulkLoadResult:
    """Outcome of one unordered bulk insert.

    Attributes:
        inserted_count: Number of documents written.
        inserted_ids: Batch index to store id for written documents.
        write_errors: Itemized per-document failures.
    """

    inserted_count: int
    inserted_ids: Mapping[int, object]
    write_errors: tuple[DocumentWriteFailure, ...] = ()


@dataclass(frozen=True)
class MigrationSummary:
    """Summary of one migration run."""

    source_record_count: int
    accepted_count: int
    preview_path: str | None = None
    load_result: BulkLoadResult | None = None

    @property
    def skipped_count(self) -> int:
        """Return the number of source records left out of the output."""
        return self.source_record_count - self.accepted_count
