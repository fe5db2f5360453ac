"""Materials migration exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each stage of the migration raises a specific error type for debuggability.
"""

from __future__ import annotations


class MigrationError(Exception):
    """Base exception for all migration failures."""


class ConfigurationError(MigrationError):
    """Raised for missing or invalid run configuration."""


class ImportSpecError(ConfigurationError):
    """Raised for invalid or unreadable YAML import spec files."""


class SourceReadError(MigrationError):
    """Raised when the legacy dataset cannot be read or parsed."""


class PersistenceError(MigrationError):
    """Raised for document store connection and bulk-write failures."""


class DependencyMissingError(MigrationError):
    """Raised when an optional runtime dependency is missing."""
