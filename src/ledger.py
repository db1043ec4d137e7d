"""Public SDK surface for the ledger.

This module provides a stable import path for consumers such as
the HTTP layer. It re-exports the client, stores, and result models.
"""

from __future__ import annotations

from core.config import LedgerConfig
from core.errors import (
    LedgerConfigError,
    LedgerError,
    LedgerIngestError,
    LedgerRecordError,
    LedgerStoreError,
)
from core.schemas import DELIVERY_SCHEMA, LEGACY_BATCH_SCHEMA, PRODUCTION_SCHEMA
from core.types import (
    BatchUpsertResult,
    DateSummary,
    DeleteResult,
    DeleteStats,
    ImportResult,
    ReconciliationResult,
    RecordChange,
    RecordFailure,
    RecordSchema,
    ReplaceResult,
    UpsertResult,
)
from ingest.reconciliation import changed_fields, reconcile_records
from ingest.text_parsing import (
    coerce_int,
    normalize_date,
    parse_date,
    parse_int,
    sniff_delimiter,
    split_delimited_line,
)
from store.delivery_store import DeliveryStore
from store.ledger_sdk import LedgerClient
from store.production_store import ProductionStore

__all__ = [
    "BatchUpsertResult",
    "DELIVERY_SCHEMA",
    "DateSummary",
    "DeleteResult",
    "DeleteStats",
    "DeliveryStore",
    "ImportResult",
    "LEGACY_BATCH_SCHEMA",
    "LedgerClient",
    "LedgerConfig",
    "LedgerConfigError",
    "LedgerError",
    "LedgerIngestError",
    "LedgerRecordError",
    "LedgerStoreError",
    "PRODUCTION_SCHEMA",
    "ProductionStore",
    "ReconciliationResult",
    "RecordChange",
    "RecordFailure",
    "RecordSchema",
    "ReplaceResult",
    "UpsertResult",
    "changed_fields",
    "coerce_int",
    "normalize_date",
    "parse_date",
    "parse_int",
    "reconcile_records",
    "sniff_delimiter",
    "split_delimited_line",
]
