"""Python SDK for ledger operations.

This module exposes one client wiring the stores to the runtime
config, plus file-import helpers that route each export format to
its ingestion mode.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date
from pathlib import Path
from typing import Any, Iterable, Mapping

from core.config import LedgerConfig
from core.constants import SPREADSHEET_EXTENSIONS
from core.schemas import LEGACY_BATCH_SCHEMA
from core.types import (
    BatchUpsertResult,
    ImportResult,
    Record,
    ReconciliationResult,
    ReplaceResult,
)
from ingest.production_sheet import (
    read_delivery_sheet,
    read_legacy_batch_file,
    read_production_file,
)
from store.delivery_store import DeliveryStore
from store.production_store import ProductionStore
from store.record_store import RecordValidator


class LedgerClient:
    """Primary SDK entry point for production and delivery data."""

    def __init__(
        self,
        config: LedgerConfig | None = None,
        validator: RecordValidator | None = None,
    ) -> None:
        """Create SDK client.

        Args:
            config: Optional runtime configuration.
            validator: Optional production record validation hook.
        """
        self._config = config or LedgerConfig.from_env()
        self._validator = validator
        self._production = ProductionStore(self._config.production_path, validator=validator)
        self._delivery = DeliveryStore(
            self._config.delivery_path,
            recent_days=self._config.recent_days,
        )
        self._legacy_batches = ProductionStore(
            self._config.legacy_batch_path,
            validator=validator,
            schema=LEGACY_BATCH_SCHEMA,
        )

    @property
    def config(self) -> LedgerConfig:
        return self._config

    @property
    def production(self) -> ProductionStore:
        return self._production

    @property
    def delivery(self) -> DeliveryStore:
        return self._delivery

    @property
    def legacy_batches(self) -> ProductionStore:
        return self._legacy_batches

    def import_production_file(self, source_path: str | Path) -> ReconciliationResult:
        """Reconcile a production sheet against stored records.

        Args:
            source_path: xlsx, csv, txt, or tsv export.

        Returns:
            Reconciliation audit trail.

        Raises:
            LedgerIngestError: If the file cannot be read.
        """
        records = read_production_file(Path(source_path).expanduser())
        return self._production.compare_and_update(records)

    def migrate_legacy_file(
        self,
        source_path: str | Path,
        reconcile: bool = False,
    ) -> BatchUpsertResult | ReconciliationResult:
        """Load a sheet in the older line/sequence layout.

        Rows are keyed by date, line, sequence, product, and colors and
        stored in the legacy batch document. By default every row is
        upserted in one batch write; with ``reconcile`` only rows whose
        unit, quantities, reserved, or total changed are written.

        Args:
            source_path: xlsx, csv, txt, or tsv export.
            reconcile: Compare against stored batches before writing.

        Returns:
            Batch counts, or the reconciliation audit trail.

        Raises:
            LedgerIngestError: If the file cannot be read.
        """
        records = read_legacy_batch_file(Path(source_path).expanduser())
        if reconcile:
            return self._legacy_batches.compare_and_update(records)
        return self._legacy_batches.upsert_batch(records)

    def import_delivery_file(self, source_path: str | Path) -> ImportResult | ReplaceResult:
        """Load a delivery export.

        Delimited text overwrites the days it contains; a spreadsheet
        replaces the whole delivery history.

        Args:
            source_path: Delimited text or xlsx export.

        Returns:
            Imported row count for text, stored day count for spreadsheets.
        """
        path = Path(source_path).expanduser()
        if path.suffix.lower() in SPREADSHEET_EXTENSIONS:
            return self._delivery.replace_all(read_delivery_sheet(path))
        return self._delivery.import_from_csv_file(path)

    def record_delivery_hours(
        self,
        entries: Iterable[Mapping[str, Any]],
        iso_date: str | None = None,
    ) -> Record:
        """Store cumulative hourly quantities, for today by default.

        Args:
            entries: Items with ``hour`` and ``quantity`` keys.
            iso_date: Optional day in ``YYYY-MM-DD`` form.

        Returns:
            The stored day record.
        """
        target_date = iso_date or date.today().isoformat()
        return self._delivery.upsert_hourly_cumulative(target_date, entries)

    def with_data_root(self, data_root: str) -> "LedgerClient":
        """Clone the client with a different local data root.

        Args:
            data_root: New data root path.

        Returns:
            New SDK client instance.
        """
        resolved_root = Path(data_root).expanduser().resolve()
        updated_config = replace(self._config, data_root=resolved_root)
        return LedgerClient(updated_config, validator=self._validator)
