"""Keyed record stores over one JSON document.

This module implements the load-mutate-write cycle shared by the
production and delivery stores, plus natural-key upserts with
id assignment and store-managed timestamps.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Iterable, Mapping

from core.errors import LedgerRecordError
from core.logging_config import get_logger
from core.types import (
    BatchUpsertResult,
    DeleteResult,
    Record,
    RecordFailure,
    RecordSchema,
    UpsertResult,
)
from store.document_io import read_document, utc_timestamp, write_document
from store.record_filtering import natural_key

_LOGGER = get_logger(__name__)

RecordValidator = Callable[[Mapping[str, Any]], None]


class DocumentStore:
    """Whole-document store of one record collection.

    Every public operation loads the document, mutates it in memory,
    and writes it back once. There is no file locking: two processes
    writing the same document can lose updates.
    """

    def __init__(
        self,
        document_path: Path,
        schema: RecordSchema,
        legacy_collections: tuple[str, ...] = (),
    ) -> None:
        """Initialize the store.

        Args:
            document_path: JSON document path.
            schema: Record schema of this store.
            legacy_collections: Older collection keys accepted on read.
        """
        self._path = document_path
        self._schema = schema
        self._legacy_collections = legacy_collections

    @property
    def path(self) -> Path:
        return self._path

    @property
    def schema(self) -> RecordSchema:
        return self._schema

    def load(self) -> dict[str, Any]:
        """Load the persisted document, creating it when absent."""
        return read_document(self._path, self._schema.collection, self._legacy_collections)

    def save(self, document: dict[str, Any]) -> None:
        """Write the full document back to disk."""
        write_document(self._path, document)

    def records(self) -> list[Record]:
        """Return the stored records in persisted order."""
        return list(self._collection(self.load()))

    def key_of(self, record: Mapping[str, Any]) -> tuple[str, ...]:
        """Return the natural key of a record under this store's schema."""
        return natural_key(record, self._schema.key_fields)

    def _collection(self, document: dict[str, Any]) -> list[Record]:
        return document[self._schema.collection]

    def _delete_where(
        self,
        should_delete: Callable[[Mapping[str, Any]], bool],
        reason: str,
    ) -> DeleteResult:
        """Drop matching records and write the document once.

        Args:
            should_delete: Predicate selecting records to remove.
            reason: Short label for the log event.

        Returns:
            Deleted and remaining counts.
        """
        document = self.load()
        collection = self._collection(document)
        kept = [record for record in collection if not should_delete(record)]
        document[self._schema.collection] = kept
        self.save(document)
        result = DeleteResult(deleted=len(collection) - len(kept), remaining=len(kept))
        _LOGGER.info(
            "records_deleted",
            store=self._schema.name,
            reason=reason,
            deleted=result.deleted,
            remaining=result.remaining,
        )
        return result


class RecordStore(DocumentStore):
    """Document store with natural-key upserts and integer ids."""

    def __init__(
        self,
        document_path: Path,
        schema: RecordSchema,
        validator: RecordValidator | None = None,
        legacy_collections: tuple[str, ...] = (),
    ) -> None:
        """Initialize the store.

        Args:
            document_path: JSON document path.
            schema: Record schema of this store.
            validator: Optional hook raising ``LedgerRecordError``.
            legacy_collections: Older collection keys accepted on read.
        """
        super().__init__(document_path, schema, legacy_collections)
        self._validator = validator

    def upsert(self, record: Mapping[str, Any]) -> UpsertResult:
        """Insert a record or replace the one sharing its natural key.

        Args:
            record: Incoming record.

        Returns:
            Resulting record id and a change count of 1.

        Raises:
            LedgerRecordError: If the validator rejects the record.
            LedgerStoreError: If the document cannot be written.
        """
        document = self.load()
        key_index = self._build_key_index(document)
        record_id, _ = self._apply_upsert(document, key_index, record)
        self.save(document)
        return UpsertResult(record_id=record_id)

    def upsert_batch(self, records: Iterable[Mapping[str, Any]]) -> BatchUpsertResult:
        """Upsert many records with a single document write.

        Records that fail are captured in ``errors`` and skipped;
        the remaining records are still applied.

        Args:
            records: Incoming records.

        Returns:
            Inserted and updated counts plus captured failures.

        Raises:
            LedgerStoreError: If the document cannot be written.
        """
        document = self.load()
        key_index = self._build_key_index(document)
        inserted = 0
        updated = 0
        failures: list[RecordFailure] = []
        for record in records:
            try:
                _, was_inserted = self._apply_upsert(document, key_index, record)
            except (LedgerRecordError, TypeError) as error:
                failures.append(RecordFailure(record=record, error=str(error)))
                continue
            if was_inserted:
                inserted += 1
            else:
                updated += 1
        self.save(document)
        _LOGGER.info(
            "batch_upserted",
            store=self._schema.name,
            inserted=inserted,
            updated=updated,
            errors=len(failures),
        )
        return BatchUpsertResult(inserted=inserted, updated=updated, errors=tuple(failures))

    def _build_key_index(self, document: dict[str, Any]) -> dict[tuple[str, ...], int]:
        """Map natural key to position in the collection."""
        index: dict[tuple[str, ...], int] = {}
        for position, record in enumerate(self._collection(document)):
            if isinstance(record, Mapping):
                index[self.key_of(record)] = position
        return index

    def _apply_upsert(
        self,
        document: dict[str, Any],
        key_index: dict[tuple[str, ...], int],
        record: Mapping[str, Any],
    ) -> tuple[int, bool]:
        """Apply one upsert to the in-memory document.

        Args:
            document: Loaded document, mutated in place.
            key_index: Natural key to collection position, kept current.
            record: Incoming record.

        Returns:
            Pair of record id and whether the record was inserted.

        Raises:
            LedgerRecordError: If validation or serialization fails.
            TypeError: If ``record`` is not a mapping.
        """
        key = self.key_of(record)
        if self._validator is not None:
            self._validator(record)
        _ensure_serializable(record)
        collection = self._collection(document)
        timestamp = utc_timestamp()
        position = key_index.get(key)
        if position is not None:
            existing = collection[position]
            record_id = existing.get("id")
            if not _is_record_id(record_id):
                record_id = _next_record_id(collection, document["metadata"])
            collection[position] = {
                **record,
                "id": record_id,
                "created_at": existing.get("created_at", timestamp),
                "updated_at": timestamp,
            }
            return record_id, False
        record_id = _next_record_id(collection, document["metadata"])
        collection.append(
            {**record, "id": record_id, "created_at": timestamp, "updated_at": timestamp}
        )
        key_index[key] = len(collection) - 1
        return record_id, True


def _is_record_id(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _next_record_id(collection: list[Record], metadata: dict[str, Any]) -> int:
    """Allocate the next id, never reusing one handed out before."""
    highest = 0
    for record in collection:
        record_id = record.get("id") if isinstance(record, Mapping) else None
        if _is_record_id(record_id):
            highest = max(highest, record_id)
    last_id = metadata.get("last_id")
    if _is_record_id(last_id):
        highest = max(highest, last_id)
    next_id = highest + 1
    metadata["last_id"] = next_id
    return next_id


def _ensure_serializable(record: Mapping[str, Any]) -> None:
    """Reject records whose values cannot be stored as JSON."""
    try:
        json.dumps(dict(record))
    except (TypeError, ValueError) as error:
        raise LedgerRecordError(
            f"Record cannot be stored: {error}. Convert field values to text or numbers."
        ) from error
