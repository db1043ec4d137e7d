"""Record matching and ordering helpers.

This module holds the key, condition, and sort rules shared by the
store flavors so that absent fields never raise during comparison.
"""

from __future__ import annotations

from typing import Any, Mapping

from core.types import Record


def text_value(record: Mapping[str, Any], field_name: str) -> str:
    """Return a field as text, with missing or null values as ``""``."""
    value = record.get(field_name)
    if value is None:
        return ""
    return str(value)


def natural_key(record: Mapping[str, Any], key_fields: tuple[str, ...]) -> tuple[str, ...]:
    """Build the natural key tuple of a record.

    Args:
        record: Record mapping.
        key_fields: Ordered key field names.

    Returns:
        Key tuple; missing components become empty strings.

    Raises:
        TypeError: If ``record`` is not a mapping.
    """
    if not isinstance(record, Mapping):
        raise TypeError(f"expected a record mapping, got {type(record).__name__}")
    return tuple(text_value(record, field_name) for field_name in key_fields)


def quantity_value(value: object) -> int | float:
    """Return a numeric quantity, treating anything non-numeric as 0."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return value


def record_id_value(raw_id: object) -> int | None:
    """Parse a record id given as an int or numeric string."""
    if isinstance(raw_id, bool):
        return None
    if isinstance(raw_id, int):
        return raw_id
    try:
        return int(str(raw_id).strip())
    except ValueError:
        return None


def matches_conditions(record: Mapping[str, Any], conditions: Mapping[str, Any]) -> bool:
    """Return whether a record satisfies every field condition.

    A list, tuple, or set condition matches when the record value equals
    any element. An empty condition map matches nothing.

    Args:
        record: Record mapping.
        conditions: Field name to expected value or collection of values.

    Returns:
        True when all conditions hold.
    """
    if not conditions:
        return False
    for field_name, expected in conditions.items():
        value = record.get(field_name)
        if isinstance(expected, (list, tuple, set, frozenset)):
            if value not in list(expected):
                return False
        elif value != expected:
            return False
    return True


def sort_production_records(records: list[Record], newest_first: bool = True) -> list[Record]:
    """Order production records by date, then machine, then mold.

    Args:
        records: Records to sort.
        newest_first: Sort dates descending when true.

    Returns:
        New sorted list.
    """
    ordered = sorted(
        records,
        key=lambda record: (text_value(record, "machineNumber"), text_value(record, "moldNumber")),
    )
    return sorted(ordered, key=lambda record: text_value(record, "date"), reverse=newest_first)
