"""Delivery day record helpers.

A day record holds ``hour_00`` .. ``hour_23`` cumulative quantities
and a ``total`` equal to the latest non-zero hour.
"""

from __future__ import annotations

from typing import Any, Mapping

from core.constants import HOUR_FIELD_NAMES
from core.types import Record
from ingest.text_parsing import coerce_int, weekday_label


def empty_day(iso_date: str, day_of_week: str = "") -> Record:
    """Build a day record with all hours and the total at zero.

    Args:
        iso_date: Day in ``YYYY-MM-DD`` form.
        day_of_week: Label to keep; derived from the date when blank.

    Returns:
        New day record.
    """
    record: Record = {
        "date": iso_date,
        "dayOfWeek": day_of_week or weekday_label(iso_date),
        "total": 0,
    }
    for hour_field in HOUR_FIELD_NAMES:
        record[hour_field] = 0
    return record


def cumulative_total(record: Mapping[str, Any]) -> int:
    """Return the last non-zero hourly value, scanning from hour 23 back."""
    for hour_field in reversed(HOUR_FIELD_NAMES):
        value = coerce_int(record.get(hour_field))
        if value != 0:
            return value
    return 0
