"""Unordered bulk persistence of material documents.

This module writes one batch of documents to MongoDB in a single
unordered ``insert_many`` so one bad document does not stop the rest.
The client is opened right before the write and always closed after.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping, Sequence

from core.constants import MATERIALS_COLLECTION_NAME
from core.errors import DependencyMissingError, PersistenceError
from core.logging_config import get_logger
from core.types import BulkLoadResult, DocumentWriteFailure, MaterialDocument
from store.document_payload import material_document_to_payload

_LOGGER = get_logger(__name__)

ClientFactory = Callable[[str], Any]


class BulkLoader:
    """Single-shot bulk writer for the materials collection."""

    def __init__(
        self,
        mongo_uri: str,
        db_name: str,
        collection_name: str = MATERIALS_COLLECTION_NAME,
        client_factory: ClientFactory | None = None,
    ) -> None:
        """Create a bulk loader.

        Args:
            mongo_uri: MongoDB connection string.
            db_name: Target database name.
            collection_name: Target collection name.
            client_factory: Optional factory building a client from a URI.
        """
        self._mongo_uri = mongo_uri
        self._db_name = db_name
        self._collection_name = collection_name
        self._client_factory = client_factory or _create_mongo_client

    def load(self, documents: Sequence[MaterialDocument]) -> BulkLoadResult:
        """Insert all documents in one unordered bulk operation.

        Args:
            documents: Accepted documents to persist.

        Returns:
            Inserted count, inserted ids by batch index, and itemized
            per-document failures.

        Raises:
            PersistenceError: If the store is unreachable or the bulk
                operation fails as a whole.
        """
        if not documents:
            _LOGGER.info("bulk_load_skipped", reason="empty_batch")
            return BulkLoadResult(inserted_count=0, inserted_ids={})
        errors = _import_pymongo_errors()
        payloads = [material_document_to_payload(document) for document in documents]
        client = self._open_client(errors)
        try:
            result = self._insert_payloads(client, payloads, errors)
        finally:
            client.close()
        _LOGGER.info(
            "bulk_load_completed",
            db_name=self._db_name,
            collection=self._collection_name,
            inserted_count=result.inserted_count,
            failed_count=len(result.write_errors),
        )
        return result

    def _open_client(self, errors: Any) -> Any:
        try:
            client = self._client_factory(self._mongo_uri)
        except errors.PyMongoError as error:
            raise PersistenceError(
                f"Failed to create MongoDB client for {self._db_name}: {error}. "
                "Check MONGO_URI."
            ) from error
        try:
            client.admin.command("ping")
        except errors.PyMongoError as error:
            client.close()
            raise PersistenceError(
                f"Failed to connect to MongoDB database {self._db_name}: {error}. "
                "Check that the server is reachable and credentials are valid."
            ) from error
        return client

    def _insert_payloads(
        self,
        client: Any,
        payloads: list[dict[str, object]],
        errors: Any,
    ) -> BulkLoadResult:
        collection = client[self._db_name][self._collection_name]
        try:
            insert_result = collection.insert_many(payloads, ordered=False)
        except errors.BulkWriteError as error:
            return _partial_result(payloads, error.details)
        except errors.PyMongoError as error:
            raise PersistenceError(
                f"Bulk insert into {self._db_name}.{self._collection_name} failed: {error}."
            ) from error
        inserted_ids = dict(enumerate(insert_result.inserted_ids))
        return BulkLoadResult(inserted_count=len(inserted_ids), inserted_ids=inserted_ids)


def _partial_result(
    payloads: list[dict[str, object]],
    details: Mapping[str, Any],
) -> BulkLoadResult:
    """Build a result for a bulk write where some documents were refused.

    ``insert_many`` assigns ``_id`` to each payload before sending, so ids
    of the documents that were written are read back from the payloads.
    """
    write_errors = tuple(
        DocumentWriteFailure(
            index=int(raw_error.get("index", -1)),
            code=raw_error.get("code"),
            message=str(raw_error.get("errmsg", "")),
        )
        for raw_error in details.get("writeErrors", [])
    )
    failed_indexes = {failure.index for failure in write_errors}
    inserted_ids = {
        index: payload["_id"]
        for index, payload in enumerate(payloads)
        if index not in failed_indexes and "_id" in payload
    }
    inserted_count = int(details.get("nInserted", len(inserted_ids)))
    _LOGGER.warning(
        "bulk_load_partial_failure",
        inserted_count=inserted_count,
        failed_count=len(write_errors),
        failed_indexes=sorted(failed_indexes),
    )
    return BulkLoadResult(
        inserted_count=inserted_count,
        inserted_ids=inserted_ids,
        write_errors=write_errors,
    )


def _create_mongo_client(mongo_uri: str) -> Any:
    """Create a pymongo client.

    Raises:
        DependencyMissingError: If pymongo is missing.
    """
    try:
        from pymongo import MongoClient
    except ImportError as error:
        raise DependencyMissingError(
            "Inserting materials requires pymongo, but it is not installed. "
            "Install pymongo to use --insert."
        ) from error
    return MongoClient(mongo_uri)


def _import_pymongo_errors() -> Any:
    try:
        from pymongo import errors
    except ImportError as error:
        raise DependencyMissingError(
            "Inserting materials requires pymongo, but it is not installed. "
            "Install pymongo to use --insert."
        ) from error
    return errors
