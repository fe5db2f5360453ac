"""Legacy dataset reader.

This module loads the legacy JSON dataset from a local path or S3 object
and checks that it is a mapping of category names to record lists.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping

from core.config import MigrationConfig
from core.errors import DependencyMissingError, SourceReadError
from core.logging_config import get_logger
from core.s3_uri import S3Location, parse_s3_uri

_LOGGER = get_logger(__name__)


def read_legacy_dataset(source_uri: str, config: MigrationConfig) -> Mapping[str, object]:
    """Load the legacy category groups.

    Args:
        source_uri: Local file path or ``s3://bucket/key`` URI.
        config: Runtime configuration for S3 session defaults.

    Returns:
        Mapping of category name to raw category value, in file order.

    Raises:
        SourceReadError: If the source is unreadable or not a JSON object.
    """
    if source_uri.startswith("s3://"):
        body = _read_s3_body(parse_s3_uri(source_uri), config)
    else:
        body = _read_local_body(Path(source_uri).expanduser())
    payload = _parse_dataset(source_uri, body)
    _LOGGER.info("source_loaded", source_uri=source_uri, category_count=len(payload))
    return payload


def _read_local_body(source_path: Path) -> str:
    """Read the dataset file from the local file system.

    Raises:
        SourceReadError: If path is missing or unreadable.
    """
    if not source_path.is_file():
        raise SourceReadError(
            f"Failed to read legacy dataset at {source_path}: file does not exist. "
            "Provide an existing JSON file with --current-db."
        )
    try:
        return source_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as error:
        raise SourceReadError(
            f"Failed to read legacy dataset at {source_path}: {error}."
        ) from error


def _read_s3_body(location: S3Location, config: MigrationConfig) -> str:
    """Download the dataset object from S3.

    Raises:
        SourceReadError: If the object cannot be downloaded.
    """
    s3_client = _create_s3_client(config)
    try:
        response = s3_client.get_object(Bucket=location.bucket, Key=location.key)
        return response["Body"].read().decode("utf-8")
    except Exception as error:
        raise SourceReadError(
            f"Failed to download legacy dataset s3://{location.bucket}/{location.key}: {error}. "
            "Check the object key and AWS credentials."
        ) from error


def _create_s3_client(config: MigrationConfig) -> Any:
    """Create a boto3 S3 client.

    Args:
        config: Runtime config containing optional profile/region.

    Returns:
        Boto3 S3 client.

    Raises:
        DependencyMissingError: If boto3 is missing.
    """
    try:
        import boto3
    except ImportError as error:
        raise DependencyMissingError(
            "S3 support requires boto3, but it is not installed. "
            "Install boto3 to read legacy datasets from s3:// sources."
        ) from error
    session_kwargs: dict[str, str] = {}
    if config.s3_profile:
        session_kwargs["profile_name"] = config.s3_profile
    if config.s3_region:
        session_kwargs["region_name"] = config.s3_region
    session = boto3.session.Session(**session_kwargs)
    return session.client("s3")


def _parse_dataset(source_uri: str, body: str) -> Mapping[str, object]:
    """Parse dataset JSON and validate the top-level shape.

    Raises:
        SourceReadError: If JSON is invalid or not an object.
    """
    try:
        payload = json.loads(body)
    except json.JSONDecodeError as error:
        raise SourceReadError(
            f"Failed to parse legacy dataset at {source_uri}: {error.msg} "
            f"(line {error.lineno}). Fix the JSON syntax and retry."
        ) from error
    if not isinstance(payload, dict):
        raise SourceReadError(
            f"Invalid legacy dataset at {source_uri}: expected a JSON object of "
            f"category name to record list, got {type(payload).__name__}."
        )
    return payload
