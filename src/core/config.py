"""Runtime configuration model for materials migration.

This module owns all environment variable parsing.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os

from core.constants import DEFAULT_CURRENT_DB_PATH, DEFAULT_DB_NAME, DEFAULT_MONGO_URI


@dataclass(frozen=True)
class MigrationConfig:
    """Environment-derived runtime configuration.

    Attributes:
        current_db_path: Default legacy dataset path or ``s3://`` URI.
        company_id: Default tenant identifier, empty when unset.
        mongo_uri: MongoDB connection string, checked only for inserting runs.
        db_name: Target database name.
        s3_region: Optional default AWS region for S3 sources.
        s3_profile: Optional AWS profile for boto3 session initialization.
    """

    current_db_path: str
    company_id: str
    mongo_uri: str
    db_name: str
    s3_region: str | None
    s3_profile: str | None

    @classmethod
    def from_env(cls) -> "MigrationConfig":
        """Build config from process environment variables.

        Returns:
            A config object with defaults applied.
        """
        return cls(
            current_db_path=os.getenv("MIGRATE_CURRENT_DB", DEFAULT_CURRENT_DB_PATH),
            company_id=os.getenv("COMPANY_ID", "").strip(),
            mongo_uri=os.getenv("MONGO_URI", DEFAULT_MONGO_URI),
            db_name=os.getenv("MONGO_DB", DEFAULT_DB_NAME),
            s3_region=os.getenv("MIGRATE_S3_REGION"),
            s3_profile=os.getenv("MIGRATE_S3_PROFILE"),
        )
