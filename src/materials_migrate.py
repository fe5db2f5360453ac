"""Public SDK surface for materials migration.

This module provides a stable import path for scripted migrations.
It re-exports the pipeline entry points and typed option models.
"""

from __future__ import annotations

from core.config import MigrationConfig
from core.import_spec import ImportSpec, load_import_spec
from core.types import (
    BulkLoadResult,
    FieldMapping,
    MaterialDocument,
    MigrationOptions,
    MigrationSummary,
    NormalizedMeasurement,
)
from ingest.pipeline import MigrationPipelineRunner, run_migration
from ingest.transformation import transform_all
from store.bulk_loader import BulkLoader
from transforms.document_builder import build_material_document
from transforms.unit_conversion import to_meters

__all__ = [
    "BulkLoadResult",
    "BulkLoader",
    "FieldMapping",
    "ImportSpec",
    "MaterialDocument",
    "MigrationConfig",
    "MigrationOptions",
    "MigrationPipelineRunner",
    "MigrationSummary",
    "NormalizedMeasurement",
    "build_material_document",
    "load_import_spec",
    "run_migration",
    "to_meters",
    "transform_all",
]
