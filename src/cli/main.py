"""Materials migration CLI entry points.
This module exposes commands for running a migration and inspecting
the legacy field mapping. It maps argparse commands onto pipeline calls.
"""

from __future__ import annotations

import argparse
from typing import Any, Sequence

from core.config import MigrationConfig
from core.errors import MigrationError
from core.import_spec import ImportSpec, load_import_spec
from core.logging_config import get_logger
from core.types import MigrationOptions
from ingest.pipeline import run_migration
from transforms.field_mapping import legacy_field_destinations

_LOGGER = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="migrate-materials",
        description="Migrate legacy materials into the canonical document schema",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_run_command(subparsers)
    _add_fields_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the migration CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        if args.command == "run":
            return _run_migration_command(args)
        if args.command == "fields":
            return _run_fields_command(args)
    except MigrationError as error:
        _LOGGER.error("migration_failed", error_type=type(error).__name__, error=str(error))
        return 1
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _run_migration_command(args: argparse.Namespace) -> int:
    """Handle run command.

    Args:
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    config = MigrationConfig.from_env()
    spec = _load_spec(args.spec)
    options = build_migration_options(args, spec, config)
    run_migration(options, config)
    return 0


def _run_fields_command(args: argparse.Namespace) -> int:
    """Handle fields command."""
    spec = _load_spec(args.spec)
    for legacy_name, destination in legacy_field_destinations(spec.field_mapping).items():
        print(f"{legacy_name}\t{destination}")
    return 0


def build_migration_options(
    args: argparse.Namespace,
    spec: ImportSpec,
    config: MigrationConfig,
) -> MigrationOptions:
    """Resolve options with CLI flags over spec values over environment.

    Args:
        args: Parsed CLI args.
        spec: Loaded import spec, empty when none was given.
        config: Environment-derived configuration.

    Returns:
        Resolved migration options.
    """
    spec_options = spec.options
    insert = args.insert or bool(spec.insert)
    return MigrationOptions(
        current_db_path=_first_set(
            args.current_db, spec_options.get("current_db"), config.current_db_path
        ),
        company_id=_first_set(
            args.company_id, spec_options.get("company_id"), config.company_id
        ),
        mongo_uri=_first_set(args.mongo_uri, spec_options.get("mongo_uri"), config.mongo_uri),
        db_name=_first_set(args.db_name, spec_options.get("db_name"), config.db_name),
        insert=insert,
        preview_file=args.preview_file or spec_options.get("preview_file"),
        field_mapping=spec.field_mapping,
    )


def _load_spec(spec_path: str | None) -> ImportSpec:
    if not spec_path:
        return ImportSpec()
    return load_import_spec(spec_path)


def _first_set(*values: str | None) -> str:
    for value in values:
        if value is not None:
            return value
    return ""


def _add_run_command(subparsers: Any) -> None:
    """Register run subcommand."""
    parser = subparsers.add_parser(
        "run",
        help="Transform legacy records, preview them, and optionally insert",
    )
    parser.add_argument(
        "--current-db",
        help="Legacy dataset JSON path or s3://bucket/key (default: MIGRATE_CURRENT_DB)",
    )
    parser.add_argument("--company-id", help="Tenant identifier (default: COMPANY_ID)")
    parser.add_argument("--mongo-uri", help="MongoDB connection string (default: MONGO_URI)")
    parser.add_argument("--db-name", help="Target database name (default: MONGO_DB)")
    parser.add_argument(
        "--insert",
        action="store_true",
        help="Write transformed documents into the materials collection",
    )
    parser.add_argument("--preview-file", help="Write all transformed documents to this file")
    parser.add_argument("--spec", help="Optional YAML import spec file")


def _add_fields_command(subparsers: Any) -> None:
    """Register fields subcommand."""
    parser = subparsers.add_parser(
        "fields",
        help="Print the legacy field to canonical destination mapping",
    )
    parser.add_argument("--spec", help="Optional YAML import spec file")
