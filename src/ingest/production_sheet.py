"""Fixed-column sheet readers.

This module maps spreadsheet (xlsx) or delimited production logs onto
production records, legacy batch sheets onto batch records, and
delivery sheets onto day rows. Column positions are fixed; only the
text delimiter is taken from the header line.
"""

from __future__ import annotations

from datetime import date, datetime
from pathlib import Path
from typing import Any, Iterable, Sequence
import zipfile

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from core.constants import (
    DELIVERY_FIRST_HOUR_COLUMN,
    HOUR_FIELD_NAMES,
    LEGACY_BATCH_SHEET_COLUMNS,
    PRODUCTION_NUMERIC_FIELDS,
    PRODUCTION_SHEET_COLUMNS,
    SPREADSHEET_EXTENSIONS,
    TEXT_EXTENSIONS,
)
from core.errors import LedgerIngestError
from core.logging_config import get_logger
from core.types import Record
from ingest.text_parsing import (
    coerce_int,
    parse_date,
    sniff_delimiter,
    split_delimited_line,
    split_text_lines,
)

_LOGGER = get_logger(__name__)


def read_production_file(source_path: Path) -> list[Record]:
    """Read production records from an xlsx or delimited text file.

    Text files are split on the delimiter found in their header line,
    so tab separated exports named ``.csv`` read correctly.

    Args:
        source_path: Spreadsheet or text export.

    Returns:
        Production records in sheet order.

    Raises:
        LedgerIngestError: If the file is missing, unsupported, or unreadable.
    """
    rows = read_sheet_rows(source_path)
    records = production_records_from_rows(rows)
    _LOGGER.info("production_sheet_read", path=str(source_path), records=len(records))
    return records


def read_legacy_batch_file(source_path: Path) -> list[Record]:
    """Read batch records from a sheet in the older line/sequence layout.

    Args:
        source_path: Spreadsheet or text export.

    Returns:
        Batch records keyed by date, line, sequence, product, and colors.

    Raises:
        LedgerIngestError: If the file is missing, unsupported, or unreadable.
    """
    rows = read_sheet_rows(source_path)
    records = production_records_from_rows(rows, LEGACY_BATCH_SHEET_COLUMNS)
    _LOGGER.info("legacy_batch_sheet_read", path=str(source_path), records=len(records))
    return records


def read_delivery_sheet(source_path: Path) -> list[Record]:
    """Read raw delivery day rows from a spreadsheet.

    Values are left as read; ``DeliveryStore.replace_all`` coerces them.

    Args:
        source_path: Spreadsheet export.

    Returns:
        Day rows with ``date``, ``dayOfWeek``, ``total``, and hour keys.
    """
    rows = read_sheet_rows(source_path)
    day_rows: list[Record] = []
    for row in rows[1:]:
        if not row or _is_blank(row[0]):
            continue
        day: Record = {
            "date": row[0],
            "dayOfWeek": _cell_text(_cell(row, 1)),
            "total": _cell(row, 2),
        }
        for hour, hour_field in enumerate(HOUR_FIELD_NAMES):
            day[hour_field] = _cell(row, DELIVERY_FIRST_HOUR_COLUMN + hour)
        day_rows.append(day)
    return day_rows


def read_sheet_rows(source_path: Path) -> list[Sequence[Any]]:
    """Read all rows of the first worksheet or of a delimited text file.

    Args:
        source_path: Spreadsheet or text export.

    Returns:
        Rows as sequences of cell values, header included.

    Raises:
        LedgerIngestError: If the file is missing, unsupported, or unreadable.
    """
    if not source_path.exists():
        raise LedgerIngestError(
            f"Failed to read sheet at {source_path}: path does not exist. "
            "Provide an existing export file."
        )
    suffix = source_path.suffix.lower()
    if suffix in SPREADSHEET_EXTENSIONS:
        return _read_workbook_rows(source_path)
    if suffix in TEXT_EXTENSIONS:
        return _read_text_rows(source_path)
    raise LedgerIngestError(
        f"Unsupported sheet format '{suffix}' for {source_path}. "
        f"Supported extensions: {SPREADSHEET_EXTENSIONS + TEXT_EXTENSIONS}."
    )


def production_records_from_rows(
    rows: Iterable[Sequence[Any]],
    columns: tuple[str, ...] = PRODUCTION_SHEET_COLUMNS,
) -> list[Record]:
    """Map fixed-column rows onto production records.

    The first row is the header; rows with a blank first cell are skipped.

    Args:
        rows: Sheet rows including the header.
        columns: Field name of each column position.

    Returns:
        Production records.
    """
    records: list[Record] = []
    for index, row in enumerate(rows):
        if index == 0 or not row or _is_blank(row[0]):
            continue
        record: Record = {}
        for column, field_name in enumerate(columns):
            value = _cell(row, column)
            if field_name in PRODUCTION_NUMERIC_FIELDS:
                record[field_name] = coerce_int(value)
            elif field_name == "date":
                record[field_name] = _date_text(value)
            else:
                record[field_name] = _cell_text(value)
        records.append(record)
    return records


def _read_workbook_rows(source_path: Path) -> list[Sequence[Any]]:
    """Read rows of the first worksheet with openpyxl."""
    try:
        workbook = load_workbook(filename=str(source_path), read_only=True, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError) as error:
        raise LedgerIngestError(
            f"Failed to open workbook at {source_path}: {error}. "
            "Re-save the file as .xlsx and retry the import."
        ) from error
    try:
        sheet = workbook.worksheets[0]
        return [tuple(row) for row in sheet.iter_rows(values_only=True)]
    finally:
        workbook.close()


def _read_text_rows(source_path: Path) -> list[Sequence[Any]]:
    """Read delimited text rows, sniffing the delimiter from the header."""
    try:
        text = source_path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as error:
        raise LedgerIngestError(
            f"Failed to read sheet at {source_path}: {error}. "
            "Save the file as UTF-8 text and retry the import."
        ) from error
    lines = split_text_lines(text)
    delimiter = sniff_delimiter(lines[0])
    return [split_delimited_line(line, delimiter) for line in lines]


def _cell(row: Sequence[Any], column: int) -> Any:
    return row[column] if column < len(row) else None


def _is_blank(value: object) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _cell_text(value: object) -> str:
    """Render a descriptive cell as text; integral floats lose ``.0``."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def _date_text(value: object) -> str:
    """Render a date cell; real dates become ``YYYY-MM-DD``, text is kept."""
    if isinstance(value, (datetime, date)):
        return parse_date(value).value
    return _cell_text(value)
