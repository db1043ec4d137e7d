"""Hourly delivery store.

This module keeps one record per calendar day holding the cumulative
delivered quantity at each hour boundary. The day ``total`` is derived
from the hourly series on every edit and trusted as given on import.
"""

from __future__ import annotations

from datetime import date, timedelta
from pathlib import Path
from typing import Any, Iterable, Mapping

from core.constants import DEFAULT_RECENT_DAYS, HOUR_FIELD_NAMES, HOURS_PER_DAY
from core.errors import LedgerRecordError
from core.logging_config import get_logger
from core.schemas import DELIVERY_SCHEMA
from core.types import ImportResult, Record, ReplaceResult
from ingest.delivery_csv import read_delivery_csv
from ingest.text_parsing import coerce_int, normalize_date
from store.delivery_day import cumulative_total, empty_day
from store.record_store import DocumentStore

_LOGGER = get_logger(__name__)


class DeliveryStore(DocumentStore):
    """Per-day cumulative delivery records keyed by date."""

    def __init__(self, document_path: Path, recent_days: int = DEFAULT_RECENT_DAYS) -> None:
        """Initialize the delivery store.

        Args:
            document_path: JSON document path.
            recent_days: Default window for ``get_recent_days``.
        """
        super().__init__(document_path, DELIVERY_SCHEMA)
        self._recent_days = recent_days

    def get_all(self) -> list[Record]:
        """Return every day, oldest first."""
        return _sorted_by_date(self.records())

    def get_recent_days(self, days: int | None = None) -> list[Record]:
        """Return the latest ``days`` days, oldest first."""
        window = days if days is not None else self._recent_days
        if window <= 0:
            return []
        return self.get_all()[-window:]

    def get_by_date(self, iso_date: str) -> Record | None:
        for record in self.records():
            if record.get("date") == iso_date:
                return record
        return None

    def get_range(self, start: str, end: str) -> list[Record]:
        """Return days with ``start <= date <= end``, oldest first.

        Args:
            start: Inclusive first day, any accepted date spelling.
            end: Inclusive last day, any accepted date spelling.

        Returns:
            Matching days.

        Raises:
            LedgerRecordError: If a bound is unparseable or start is after end.
        """
        start_date = _require_date(start)
        end_date = _require_date(end)
        if start_date > end_date:
            raise LedgerRecordError(
                f"Invalid delivery range {start_date}..{end_date}: start must not be after end."
            )
        return [
            record
            for record in self.get_all()
            if start_date <= str(record.get("date", "")) <= end_date
        ]

    def get_previous_total(self, iso_date: str) -> int:
        """Return the stored total of the day before ``iso_date`` or 0."""
        iso_value = _require_date(iso_date)
        try:
            previous = date.fromisoformat(iso_value) - timedelta(days=1)
        except ValueError as error:
            raise LedgerRecordError(f"Invalid date '{iso_date}': {error}.") from error
        record = self.get_by_date(previous.isoformat())
        if record is None:
            return 0
        return coerce_int(record.get("total"))

    def upsert(self, iso_date: str, updates: Mapping[str, Any]) -> Record:
        """Merge field updates into a day and re-derive its total.

        Args:
            iso_date: Day in ``YYYY-MM-DD`` form.
            updates: Fields to overwrite; hour values are coerced to int and
                a ``date`` entry is ignored so the day keeps its key.

        Returns:
            The stored day record.
        """
        document = self.load()
        collection = self._collection(document)
        record = next((row for row in collection if row.get("date") == iso_date), None)
        if record is None:
            record = empty_day(iso_date)
            collection.append(record)
        for field_name, value in updates.items():
            if field_name == "date":
                continue
            if field_name in HOUR_FIELD_NAMES:
                record[field_name] = coerce_int(value)
            else:
                record[field_name] = value
        record["total"] = cumulative_total(record)
        self.save(document)
        _LOGGER.info("delivery_day_upserted", date=iso_date, total=record["total"])
        return record

    def upsert_hourly_cumulative(
        self,
        iso_date: str,
        entries: Iterable[Mapping[str, Any]],
    ) -> Record:
        """Record cumulative quantities observed at given hours.

        Entries whose hour is not an integer in 0..23 are ignored.

        Args:
            iso_date: Day in ``YYYY-MM-DD`` form.
            entries: Items with ``hour`` and ``quantity`` keys.

        Returns:
            The stored day record.
        """
        updates: dict[str, int] = {}
        for entry in entries:
            hour = _hour_value(entry.get("hour"))
            if hour is None:
                _LOGGER.debug("delivery_entry_skipped", date=iso_date, hour=entry.get("hour"))
                continue
            updates[HOUR_FIELD_NAMES[hour]] = coerce_int(entry.get("quantity"))
        return self.upsert(iso_date, updates)

    def import_from_csv_file(self, csv_path: str | Path | None) -> ImportResult:
        """Import day rows from a delimited file, overwriting same dates.

        Args:
            csv_path: Path of the delimited export.

        Returns:
            Number of rows imported; 0 when the file does not exist.
        """
        if not csv_path or not Path(csv_path).exists():
            _LOGGER.warning("delivery_csv_missing", path=str(csv_path))
            return ImportResult(imported=0)
        rows = read_delivery_csv(Path(csv_path))
        document = self.load()
        by_date = {record.get("date"): record for record in self._collection(document)}
        for row in rows:
            by_date[row["date"]] = row
        document[self._schema.collection] = _sorted_by_date(list(by_date.values()))
        self.save(document)
        _LOGGER.info("delivery_csv_imported", path=str(csv_path), imported=len(rows))
        return ImportResult(imported=len(rows))

    def replace_all(self, records: Iterable[Mapping[str, Any]]) -> ReplaceResult:
        """Replace every stored day with ``records``.

        Hours and totals are coerced and trusted as given. Rows whose
        date cannot be parsed are skipped; a later row for the same
        date wins.

        Args:
            records: Day records, e.g. a previous JSON export.

        Returns:
            Number of stored days.

        Raises:
            LedgerRecordError: If ``records`` is not a list of mappings.
        """
        if not isinstance(records, (list, tuple)):
            raise LedgerRecordError(
                "replace_all expects a list of day records. "
                "Pass the delivery_data array of an export."
            )
        by_date: dict[str, Record] = {}
        for row in records:
            if not isinstance(row, Mapping):
                raise LedgerRecordError(
                    f"replace_all expects day record mappings, got {type(row).__name__}."
                )
            iso_date = normalize_date(row.get("date"))
            if iso_date is None:
                _LOGGER.debug("delivery_row_skipped", date=row.get("date"))
                continue
            day = empty_day(iso_date, str(row.get("dayOfWeek") or ""))
            day["total"] = coerce_int(row.get("total"))
            for hour_field in HOUR_FIELD_NAMES:
                day[hour_field] = coerce_int(row.get(hour_field))
            by_date[iso_date] = day
        document = self.load()
        document[self._schema.collection] = _sorted_by_date(list(by_date.values()))
        self.save(document)
        _LOGGER.info("delivery_data_replaced", count=len(by_date))
        return ReplaceResult(count=len(by_date))


def _sorted_by_date(records: list[Record]) -> list[Record]:
    return sorted(records, key=lambda record: str(record.get("date") or ""))


def _hour_value(raw_hour: object) -> int | None:
    """Return an hour index in 0..23, or None for anything else."""
    if isinstance(raw_hour, bool):
        return None
    if isinstance(raw_hour, float) and raw_hour.is_integer():
        raw_hour = int(raw_hour)
    elif isinstance(raw_hour, str) and raw_hour.strip().isdigit():
        raw_hour = int(raw_hour.strip())
    if isinstance(raw_hour, int) and 0 <= raw_hour < HOURS_PER_DAY:
        return raw_hour
    return None


def _require_date(raw: str) -> str:
    iso_date = normalize_date(raw)
    if iso_date is None:
        raise LedgerRecordError(f"Invalid date '{raw}': expected YYYY-MM-DD.")
    return iso_date
