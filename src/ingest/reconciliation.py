"""Batch reconciliation against stored records.

This module detects added, updated, and unchanged records by natural
key and persists only material changes, so re-importing the same
sheet never touches ``updated_at``.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from core.errors import LedgerError
from core.logging_config import get_logger
from core.types import RecordChange, RecordFailure, ReconciliationResult
from store.record_store import RecordStore

_LOGGER = get_logger(__name__)
_MISSING = object()


def changed_fields(
    old_record: Mapping[str, Any],
    new_record: Mapping[str, Any],
    compare_fields: tuple[str, ...],
) -> tuple[str, ...]:
    """Return compared fields whose values differ.

    Comparison is strict: values of different types always differ,
    so ``"5"`` and ``5`` count as a change. Integers and floats are one
    numeric type, so ``5`` and ``5.0`` are equal.

    Args:
        old_record: Stored record.
        new_record: Incoming record.
        compare_fields: Field allow-list to compare.

    Returns:
        Names of differing fields in allow-list order.
    """
    differing: list[str] = []
    for field_name in compare_fields:
        old_value = old_record.get(field_name, _MISSING)
        new_value = new_record.get(field_name, _MISSING)
        if _value_kind(old_value) is not _value_kind(new_value) or old_value != new_value:
            differing.append(field_name)
    return tuple(differing)


def _value_kind(value: object) -> type:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float
    return type(value)


def reconcile_records(
    store: RecordStore,
    records: Iterable[Mapping[str, Any]],
    compare_fields: tuple[str, ...] | None = None,
) -> ReconciliationResult:
    """Classify incoming records and apply the real changes.

    Args:
        store: Target store.
        records: Freshly observed records.
        compare_fields: Allow-list overriding the store schema's.

    Returns:
        Added, updated, unchanged, and failed records.
    """
    fields = compare_fields if compare_fields is not None else store.schema.compare_fields
    existing_by_key = {
        store.key_of(record): record
        for record in store.records()
        if isinstance(record, Mapping)
    }
    added: list[Mapping[str, Any]] = []
    updated: list[RecordChange] = []
    unchanged: list[Mapping[str, Any]] = []
    failures: list[RecordFailure] = []
    for record in records:
        try:
            key = store.key_of(record)
        except TypeError as error:
            failures.append(RecordFailure(record=record, error=str(error)))
            continue
        existing_record = existing_by_key.get(key)
        if existing_record is not None and not changed_fields(existing_record, record, fields):
            unchanged.append(record)
            continue
        try:
            store.upsert(record)
        except LedgerError as error:
            failures.append(RecordFailure(record=record, error=str(error)))
            continue
        if existing_record is None:
            added.append(record)
        else:
            updated.append(RecordChange(old=existing_record, new=record))
        existing_by_key[key] = record
    result = ReconciliationResult(
        added=tuple(added),
        updated=tuple(updated),
        unchanged=tuple(unchanged),
        errors=tuple(failures),
    )
    _LOGGER.info(
        "reconciliation_completed",
        store=store.schema.name,
        added=len(result.added),
        updated=len(result.updated),
        unchanged=len(result.unchanged),
        errors=len(result.errors),
    )
    return result
