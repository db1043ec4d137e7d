"""Delivery day import from delimited text.

This module turns a loosely formatted export (comma, semicolon, or
tab separated; quoted fields; mixed date spellings) into day records.
Rows with an unparseable date are skipped rather than failing the file.
"""

from __future__ import annotations

from pathlib import Path

from core.constants import DELIVERY_FIRST_HOUR_COLUMN, DELIVERY_MIN_ROW_FIELDS, HOUR_FIELD_NAMES
from core.errors import LedgerIngestError
from core.logging_config import get_logger
from core.types import Record
from ingest.text_parsing import (
    coerce_int,
    normalize_date,
    sniff_delimiter,
    split_delimited_line,
    split_text_lines,
)
from store.delivery_day import empty_day

_LOGGER = get_logger(__name__)


def read_delivery_csv(csv_path: Path) -> list[Record]:
    """Read day records from a delimited file.

    Args:
        csv_path: Path of the export.

    Returns:
        Parsed day records in file order.

    Raises:
        LedgerIngestError: If the file cannot be read as UTF-8 text.
    """
    try:
        text = csv_path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as error:
        raise LedgerIngestError(
            f"Failed to read delivery export at {csv_path}: {error}. "
            "Save the file as UTF-8 text and retry the import."
        ) from error
    return parse_delivery_text(text)


def parse_delivery_text(text: str) -> list[Record]:
    """Parse delimited delivery text into day records.

    The header line picks the delimiter. Each data row maps column 0 to
    the date, 1 to the weekday label, 2 to the total, and 3..26 to
    ``hour_00`` .. ``hour_23``.

    Args:
        text: Full file contents.

    Returns:
        Parsed day records; empty when there is no data row.
    """
    lines = split_text_lines(text.lstrip("\ufeff").strip())
    if len(lines) < 2:
        return []
    delimiter = sniff_delimiter(lines[0])
    records: list[Record] = []
    for line_number, line in enumerate(lines[1:], 2):
        fields = split_delimited_line(line, delimiter)
        if len(fields) < DELIVERY_MIN_ROW_FIELDS:
            continue
        iso_date = normalize_date(fields[0])
        if iso_date is None:
            _LOGGER.debug("delivery_row_skipped", line_number=line_number, date=fields[0])
            continue
        records.append(_day_from_fields(iso_date, fields))
    return records


def _day_from_fields(iso_date: str, fields: list[str]) -> Record:
    """Build one day record from split row fields."""
    day = empty_day(iso_date, fields[1])
    day["total"] = coerce_int(fields[2])
    for hour, hour_field in enumerate(HOUR_FIELD_NAMES):
        column = DELIVERY_FIRST_HOUR_COLUMN + hour
        if column < len(fields):
            day[hour_field] = coerce_int(fields[column])
    return day
