"""Core constants used across ledger modules.

This module centralizes file names, field layouts, and defaults.
Keeping values here avoids magic literals in store and ingest logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_DATA_ROOT = Path(".ledger")
DEFAULT_PRODUCTION_FILE_NAME = "production-data.json"
DEFAULT_DELIVERY_FILE_NAME = "delivery-data.json"
DEFAULT_LEGACY_BATCH_FILE_NAME = "legacy-batch-data.json"
DEFAULT_RECENT_DAYS = 14
DOCUMENT_VERSION = "1.0.0"
TEMP_FILE_SUFFIX = ".tmp"

PRODUCTION_COLLECTION = "records"
LEGACY_PRODUCTION_COLLECTION = "production_data"
DELIVERY_COLLECTION = "delivery_data"

PRODUCTION_KEY_FIELDS = (
    "date",
    "machineNumber",
    "moldNumber",
    "productName",
    "color",
    "lotNumber",
)
PRODUCTION_COMPARE_FIELDS = ("unit", "quantity", "unitQuantity", "remarks", "total")
LEGACY_BATCH_KEY_FIELDS = ("date", "line", "sequence", "productName", "color1", "color2")
LEGACY_BATCH_COMPARE_FIELDS = ("unit", "quantity", "unitQuantity", "reserved", "total")

PRODUCTION_SHEET_COLUMNS = (
    "date",
    "machineNumber",
    "moldNumber",
    "productName",
    "productNameEng",
    "color",
    "lotNumber",
    "unit",
    "quantity",
    "unitQuantity",
    "remarks",
    "total",
)
PRODUCTION_NUMERIC_FIELDS = ("quantity", "unitQuantity", "total")
LEGACY_BATCH_SHEET_COLUMNS = (
    "date",
    "line",
    "sequence",
    "productName",
    "productNameEng",
    "color1",
    "color2",
    "unit",
    "quantity",
    "unitQuantity",
    "reserved",
    "total",
)

HOURS_PER_DAY = 24
HOUR_FIELD_NAMES = tuple(f"hour_{hour:02d}" for hour in range(HOURS_PER_DAY))
DELIVERY_FIRST_HOUR_COLUMN = 3
DELIVERY_MIN_ROW_FIELDS = 3
KOREAN_WEEKDAY_LABELS = ("월", "화", "수", "목", "금", "토", "일")

CANDIDATE_DELIMITERS = (",", ";", "\t")
DEFAULT_DELIMITER = ","
TEXT_EXTENSIONS = (".csv", ".txt", ".tsv")
SPREADSHEET_EXTENSIONS = (".xlsx", ".xlsm")
