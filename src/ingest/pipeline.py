"""Migration orchestration.

This module coordinates option checks, source loading, transformation,
preview output, and optional bulk persistence for one migration run.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Sequence

from core.config import MigrationConfig
from core.constants import PREVIEW_DOCUMENT_LIMIT
from core.errors import ConfigurationError
from core.logging_config import get_logger
from core.types import BulkLoadResult, MaterialDocument, MigrationOptions, MigrationSummary
from ingest.source_reader import read_legacy_dataset
from ingest.transformation import count_source_records, transform_all
from store.bulk_loader import BulkLoader
from store.document_payload import render_preview_json, write_preview_file

_LOGGER = get_logger(__name__)

Emitter = Callable[[str], None]
LoaderFactory = Callable[[MigrationOptions], BulkLoader]


class MigrationPipelineRunner:
    """Runner for one legacy materials migration."""

    def __init__(
        self,
        options: MigrationOptions,
        config: MigrationConfig,
        emit: Emitter = print,
        loader_factory: LoaderFactory | None = None,
    ) -> None:
        self._options = options
        self._config = config
        self._emit = emit
        self._loader_factory = loader_factory or _build_bulk_loader

    def run(self) -> MigrationSummary:
        """Execute the migration and return its summary.

        Raises:
            ConfigurationError: If options are invalid, before any work.
            SourceReadError: If the legacy dataset cannot be loaded.
            PersistenceError: If insertion was requested and failed.
        """
        _validate_options(self._options)
        category_groups = read_legacy_dataset(self._options.current_db_path, self._config)
        documents = transform_all(
            category_groups,
            self._options.company_id,
            self._options.field_mapping,
        )
        self._emit_preview(documents)
        preview_path = self._write_preview_if_requested(documents)
        summary = MigrationSummary(
            source_record_count=count_source_records(category_groups),
            accepted_count=len(documents),
            preview_path=preview_path,
        )
        if not self._options.insert:
            self._emit("Preview mode only. Add --insert to write into MongoDB.")
            _log_migration_completion(self._options, summary)
            return summary
        load_result = self._loader_factory(self._options).load(documents)
        self._emit_load_result(load_result)
        summary = MigrationSummary(
            source_record_count=summary.source_record_count,
            accepted_count=summary.accepted_count,
            preview_path=preview_path,
            load_result=load_result,
        )
        _log_migration_completion(self._options, summary)
        return summary

    def _emit_preview(self, documents: Sequence[MaterialDocument]) -> None:
        self._emit(f"Preview (first {PREVIEW_DOCUMENT_LIMIT} docs):")
        self._emit(render_preview_json(documents[:PREVIEW_DOCUMENT_LIMIT]))
        self._emit(f"Total ready for insert (price present): {len(documents)}")

    def _write_preview_if_requested(self, documents: Sequence[MaterialDocument]) -> str | None:
        if not self._options.preview_file:
            return None
        preview_path = Path(self._options.preview_file).expanduser()
        write_preview_file(preview_path, documents)
        _LOGGER.info("preview_written", path=str(preview_path), document_count=len(documents))
        self._emit(f"Full preview written to: {preview_path}")
        return str(preview_path)

    def _emit_load_result(self, load_result: BulkLoadResult) -> None:
        self._emit(f"Insert complete: inserted_count={load_result.inserted_count}")
        for index, inserted_id in load_result.inserted_ids.items():
            self._emit(f"{index}\t{inserted_id}")
        for failure in load_result.write_errors:
            self._emit(f"failed\t{failure.index}\t{failure.code}\t{failure.message}")


def run_migration(
    options: MigrationOptions,
    config: MigrationConfig,
    emit: Emitter = print,
) -> MigrationSummary:
    """Run a legacy materials migration.

    Args:
        options: Migration run options.
        config: Runtime configuration.
        emit: Line writer for preview and summary output.

    Returns:
        Run summary.

    Raises:
        ConfigurationError: If options are invalid.
        SourceReadError: If the legacy dataset cannot be loaded.
        PersistenceError: If insertion was requested and failed.
    """
    runner = MigrationPipelineRunner(options, config, emit)
    return runner.run()


def _validate_options(options: MigrationOptions) -> None:
    """Reject unusable options before any transformation work."""
    if not options.current_db_path.strip():
        raise ConfigurationError(
            "Path to the legacy dataset is required. Pass --current-db or set MIGRATE_CURRENT_DB."
        )
    if options.insert and not options.company_id.strip():
        raise ConfigurationError(
            "companyId is required when --insert is specified. "
            "Pass --company-id or set COMPANY_ID."
        )
    if options.insert and not options.mongo_uri.startswith(("mongodb://", "mongodb+srv://")):
        raise ConfigurationError(
            f"Invalid MongoDB URI '{options.mongo_uri}': expected mongodb:// or "
            "mongodb+srv:// scheme. Pass --mongo-uri or set MONGO_URI."
        )


def _build_bulk_loader(options: MigrationOptions) -> BulkLoader:
    return BulkLoader(options.mongo_uri, options.db_name)


def _log_migration_completion(options: MigrationOptions, summary: MigrationSummary) -> None:
    """Log run completion with contextual metadata."""
    load_result = summary.load_result
    _LOGGER.info(
        "migration_completed",
        source_uri=options.current_db_path,
        insert=options.insert,
        source_record_count=summary.source_record_count,
        accepted_count=summary.accepted_count,
        skipped_count=summary.skipped_count,
        inserted_count=load_result.inserted_count if load_result else 0,
        failed_count=len(load_result.write_errors) if load_result else 0,
    )
