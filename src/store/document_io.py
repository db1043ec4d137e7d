"""Store document persistence helpers.

This module isolates whole-document JSON IO for the record stores.
Reads degrade to an empty document; writes replace the file atomically.
"""

from __future__ import annotations

from datetime import datetime, timezone
import json
import os
from pathlib import Path
from typing import Any

from core.constants import DOCUMENT_VERSION, TEMP_FILE_SUFFIX
from core.errors import LedgerStoreError
from core.logging_config import get_logger

_LOGGER = get_logger(__name__)


def utc_timestamp() -> str:
    """Return the current UTC time as an ISO string with a ``Z`` suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def new_document(collection: str) -> dict[str, Any]:
    """Build an empty store document.

    Args:
        collection: Key of the record list.

    Returns:
        Document with an empty collection and fresh metadata.
    """
    timestamp = utc_timestamp()
    return {
        collection: [],
        "metadata": {
            "created_at": timestamp,
            "updated_at": timestamp,
            "version": DOCUMENT_VERSION,
        },
    }


def read_document(
    document_path: Path,
    collection: str,
    legacy_collections: tuple[str, ...] = (),
) -> dict[str, Any]:
    """Load a store document, creating it when absent.

    Args:
        document_path: JSON document path.
        collection: Key of the record list.
        legacy_collections: Older keys read when ``collection`` is absent.

    Returns:
        Parsed document; an empty in-memory document when the file
        cannot be parsed.

    Raises:
        LedgerStoreError: If a missing document cannot be created.
    """
    if not document_path.exists():
        document = new_document(collection)
        write_document(document_path, document)
        _LOGGER.info("document_created", path=str(document_path), collection=collection)
        return document
    try:
        payload = json.loads(document_path.read_text(encoding="utf-8-sig"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as error:
        _LOGGER.error(
            "document_read_failed",
            path=str(document_path),
            error=str(error),
            hint="Serving an empty document; the file is left untouched until the next write.",
        )
        return new_document(collection)
    if not isinstance(payload, dict):
        _LOGGER.error(
            "document_read_failed",
            path=str(document_path),
            error="expected JSON object at top level",
        )
        return new_document(collection)
    return _normalize_document(payload, collection, legacy_collections)


def write_document(document_path: Path, document: dict[str, Any]) -> None:
    """Replace the store document with ``document``.

    The payload is written to a sibling temporary file which is then
    renamed over the target, so readers never see a partial document.

    Args:
        document_path: JSON document path.
        document: Full document to persist; ``metadata.updated_at`` is set.

    Raises:
        LedgerStoreError: If serialization or the filesystem write fails.
    """
    metadata = document.setdefault("metadata", {})
    metadata.setdefault("version", DOCUMENT_VERSION)
    metadata["updated_at"] = utc_timestamp()
    try:
        text = json.dumps(document, indent=2, ensure_ascii=False) + "\n"
    except (TypeError, ValueError) as error:
        raise LedgerStoreError(
            f"Failed to serialize store document for {document_path}: {error}. "
            "Only JSON-compatible field values can be stored."
        ) from error
    temp_path = document_path.with_name(document_path.name + TEMP_FILE_SUFFIX)
    try:
        document_path.parent.mkdir(parents=True, exist_ok=True)
        temp_path.write_text(text, encoding="utf-8")
        os.replace(temp_path, document_path)
    except OSError as error:
        _discard_temp_file(temp_path)
        raise LedgerStoreError(
            f"Failed to write store document at {document_path}: {error}. "
            "Check disk space and permissions, then retry."
        ) from error


def _normalize_document(
    payload: dict[str, Any],
    collection: str,
    legacy_collections: tuple[str, ...],
) -> dict[str, Any]:
    """Ensure the record list and metadata keys are present."""
    if collection not in payload:
        for legacy_key in legacy_collections:
            if legacy_key in payload:
                payload[collection] = payload.pop(legacy_key)
                break
    if not isinstance(payload.get(collection), list):
        if collection in payload:
            _LOGGER.error("document_collection_invalid", collection=collection)
        payload[collection] = []
    records = [record for record in payload[collection] if isinstance(record, dict)]
    if len(records) != len(payload[collection]):
        _LOGGER.error(
            "document_records_dropped",
            collection=collection,
            dropped=len(payload[collection]) - len(records),
        )
        payload[collection] = records
    if not isinstance(payload.get("metadata"), dict):
        payload["metadata"] = {}
    return payload


def _discard_temp_file(temp_path: Path) -> None:
    """Remove a leftover temporary file after a failed write."""
    try:
        temp_path.unlink()
    except FileNotFoundError:
        return
    except OSError as error:
        _LOGGER.warning("temp_file_cleanup_failed", path=str(temp_path), error=str(error))
