"""Production record store.

This module persists production plan/actual rows keyed by
``(date, machineNumber, moldNumber, productName, color, lotNumber)``
and exposes the query, aggregate, and delete views used by consumers.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, Mapping

from core.constants import LEGACY_PRODUCTION_COLLECTION
from core.schemas import PRODUCTION_SCHEMA
from core.types import (
    DateSummary,
    DeleteResult,
    DeleteStats,
    Record,
    RecordSchema,
    ReconciliationResult,
)
from ingest.reconciliation import reconcile_records
from store.record_filtering import (
    matches_conditions,
    quantity_value,
    record_id_value,
    sort_production_records,
    text_value,
)
from store.record_store import RecordStore, RecordValidator


class ProductionStore(RecordStore):
    """Production records with natural-key identity."""

    def __init__(
        self,
        document_path: Path,
        validator: RecordValidator | None = None,
        schema: RecordSchema = PRODUCTION_SCHEMA,
    ) -> None:
        """Initialize the production store.

        Args:
            document_path: JSON document path.
            validator: Optional hook raising ``LedgerRecordError``.
            schema: Key and compare layout; the natural key by default.
        """
        super().__init__(
            document_path,
            schema,
            validator=validator,
            legacy_collections=(LEGACY_PRODUCTION_COLLECTION,),
        )

    def get_all(self) -> list[Record]:
        """Return all records, newest date first, then machine and mold."""
        return sort_production_records(self.records())

    def get_by_date(self, date: str) -> list[Record]:
        """Return records of one date ordered by machine then mold."""
        matching = [record for record in self.records() if record.get("date") == date]
        return sort_production_records(matching, newest_first=False)

    def get_grouped_by_date(self) -> list[DateSummary]:
        """Summarize record count and summed ``total`` per date.

        Returns:
            One summary per distinct date, newest first.
        """
        counts: dict[str, int] = {}
        totals: dict[str, int | float] = {}
        for record in self.records():
            date = text_value(record, "date")
            counts[date] = counts.get(date, 0) + 1
            totals[date] = totals.get(date, 0) + quantity_value(record.get("total"))
        summaries = [
            DateSummary(date=date, count=counts[date], total_quantity=totals[date])
            for date in counts
        ]
        return sorted(summaries, key=lambda summary: summary.date, reverse=True)

    def compare_and_update(
        self,
        records: Iterable[Mapping[str, Any]],
        compare_fields: tuple[str, ...] | None = None,
    ) -> ReconciliationResult:
        """Reconcile a freshly imported batch against stored records.

        Args:
            records: Incoming records.
            compare_fields: Optional allow-list overriding the schema's.

        Returns:
            Audit trail of the reconciliation decision per record.
        """
        return reconcile_records(self, records, compare_fields)

    def delete_by_id(self, record_id: object) -> DeleteResult:
        target = record_id_value(record_id)
        return self._delete_where(lambda record: record.get("id") == target, "id")

    def delete_by_ids(self, record_ids: Iterable[object]) -> DeleteResult:
        targets = {record_id_value(record_id) for record_id in record_ids}
        targets.discard(None)
        return self._delete_where(lambda record: record.get("id") in targets, "ids")

    def delete_by_date(self, date: str) -> DeleteResult:
        return self._delete_where(lambda record: record.get("date") == date, "date")

    def delete_by_dates(self, dates: Iterable[str]) -> DeleteResult:
        targets = list(dates)
        return self._delete_where(lambda record: record.get("date") in targets, "dates")

    def delete_by_condition(self, conditions: Mapping[str, Any]) -> DeleteResult:
        """Delete records matching every field condition.

        Args:
            conditions: Field to value, or to a list of accepted values.

        Returns:
            Deleted and remaining counts.
        """
        return self._delete_where(
            lambda record: matches_conditions(record, conditions),
            "condition",
        )

    def delete_all(self) -> DeleteResult:
        return self._delete_where(lambda record: True, "all")

    def get_delete_stats(self) -> DeleteStats:
        """Return the remaining count and per-date summary."""
        return DeleteStats(
            total_remaining=len(self.records()),
            date_stats=tuple(self.get_grouped_by_date()),
        )
