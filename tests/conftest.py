"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

_MIGRATION_ENV_VARS = (
    "MIGRATE_CURRENT_DB",
    "COMPANY_ID",
    "MONGO_URI",
    "MONGO_DB",
    "MIGRATE_S3_REGION",
    "MIGRATE_S3_PROFILE",
)


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture(autouse=True)
def isolated_migration_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear migration environment variables so defaults are predictable."""
    for name in _MIGRATION_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
