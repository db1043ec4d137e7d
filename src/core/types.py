"""Shared typed models.

This module defines the record schema configuration and the immutable
result models returned by store, reconciliation, and ingest layers.
Records themselves stay plain dictionaries so persisted field names
round-trip exactly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

Record = dict[str, Any]


@dataclass(frozen=True)
class RecordSchema:
    """Identity and change-detection layout of one record kind.

    Attributes:
        name: Short kind name used in logs.
        collection: Document key holding the record list.
        key_fields: Ordered fields forming the natural key.
        compare_fields: Fields whose inequality marks a material change.
    """

    name: str
    collection: str
    key_fields: tuple[str, ...]
    compare_fields: tuple[str, ...]


@dataclass(frozen=True)
class ParsedValue:
    """Outcome of a fallible field parse.

    Attributes:
        raw: Original input value.
        value: Parsed value, ``None`` when invalid.
        is_valid: Whether parsing succeeded.
    """

    raw: object
    value: Any = None
    is_valid: bool = False

    def or_default(self, default: Any) -> Any:
        """Return the parsed value, or ``default`` when invalid."""
        return self.value if self.is_valid else default


@dataclass(frozen=True)
class UpsertResult:
    """Single upsert outcome."""

    record_id: int
    changes: int = 1

    def to_dict(self) -> dict[str, object]:
        return {"id": self.record_id, "changes": self.changes}


@dataclass(frozen=True)
class RecordFailure:
    """One record that failed inside a batch.

    Attributes:
        record: Offending input record as received.
        error: Human-readable failure reason.
    """

    record: Any
    error: str

    def to_dict(self) -> dict[str, object]:
        return {"data": self.record, "error": self.error}


@dataclass(frozen=True)
class BatchUpsertResult:
    """Batch upsert counts and captured per-record failures."""

    inserted: int
    updated: int
    errors: tuple[RecordFailure, ...] = ()

    def to_dict(self) -> dict[str, object]:
        return {
            "inserted": self.inserted,
            "updated": self.updated,
            "errors": [failure.to_dict() for failure in self.errors],
        }


@dataclass(frozen=True)
class RecordChange:
    """Stored record and the incoming record that replaced it."""

    old: Mapping[str, Any]
    new: Mapping[str, Any]

    def to_dict(self) -> dict[str, object]:
        return {"old": dict(self.old), "new": dict(self.new)}


@dataclass(frozen=True)
class ReconciliationResult:
    """Audit trail of one reconciliation run.

    Attributes:
        added: Incoming records that had no stored counterpart.
        updated: Old/new pairs whose compared fields differed.
        unchanged: Incoming records identical on compared fields.
        errors: Records whose persistence failed.
    """

    added: tuple[Mapping[str, Any], ...] = ()
    updated: tuple[RecordChange, ...] = ()
    unchanged: tuple[Mapping[str, Any], ...] = ()
    errors: tuple[RecordFailure, ...] = ()

    @property
    def has_errors(self) -> bool:
        """Return whether any record failed."""
        return bool(self.errors)

    def to_dict(self) -> dict[str, object]:
        return {
            "added": [dict(record) for record in self.added],
            "updated": [change.to_dict() for change in self.updated],
            "unchanged": [dict(record) for record in self.unchanged],
            "errors": [failure.to_dict() for failure in self.errors],
        }


@dataclass(frozen=True)
class DeleteResult:
    """Deleted and remaining record counts."""

    deleted: int
    remaining: int

    def to_dict(self) -> dict[str, object]:
        return {"deleted": self.deleted, "remaining": self.remaining}


@dataclass(frozen=True)
class DateSummary:
    """Per-date aggregate of production records."""

    date: str
    count: int
    total_quantity: int

    def to_dict(self) -> dict[str, object]:
        return {"date": self.date, "count": self.count, "totalQuantity": self.total_quantity}


@dataclass(frozen=True)
class DeleteStats:
    """Post-delete reporting snapshot."""

    total_remaining: int
    date_stats: tuple[DateSummary, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, object]:
        return {
            "totalRemaining": self.total_remaining,
            "dateStats": [summary.to_dict() for summary in self.date_stats],
        }


@dataclass(frozen=True)
class ImportResult:
    """Number of rows imported from a delimited file."""

    imported: int

    def to_dict(self) -> dict[str, object]:
        return {"imported": self.imported}


@dataclass(frozen=True)
class ReplaceResult:
    """Number of records stored after a full replacement."""

    count: int

    def to_dict(self) -> dict[str, object]:
        return {"count": self.count}
