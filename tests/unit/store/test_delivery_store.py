"""Unit tests for the hourly delivery store."""

from __future__ import annotations

from pathlib import Path

import pytest

from core.errors import LedgerRecordError
from store.delivery_day import cumulative_total, empty_day
from store.delivery_store import DeliveryStore
from tests.fixture_paths import fixture_path


def test_empty_day_zero_fills_hours_and_derives_weekday() -> None:
    """A fresh day has 24 zero hours and a weekday label."""
    day = empty_day("2025-08-03")

    assert day["dayOfWeek"] == "일"
    assert [day[f"hour_{hour:02d}"] for hour in range(24)] == [0] * 24


def test_cumulative_total_uses_last_non_zero_hour() -> None:
    """Trailing zero hours do not reset the day total."""
    day = {**empty_day("2025-08-01"), "hour_10": 15, "hour_22": 40, "hour_23": 0}

    assert cumulative_total(day) == 40


def test_cumulative_total_is_zero_for_empty_day() -> None:
    """A day without observations totals zero."""
    assert cumulative_total(empty_day("2025-08-01")) == 0


def test_upsert_creates_day_and_derives_total(delivery_store: DeliveryStore) -> None:
    """Hour updates recompute the total from the hourly series."""
    day = delivery_store.upsert("2025-08-01", {"hour_09": "120", "hour_10": 200})

    assert (day["hour_09"], day["total"], day["dayOfWeek"]) == (120, 200, "금")
    assert delivery_store.get_by_date("2025-08-01")["total"] == 200


def test_upsert_ignores_supplied_total(delivery_store: DeliveryStore) -> None:
    """The total always follows the hours on edit."""
    day = delivery_store.upsert("2025-08-01", {"hour_08": 30, "total": 999})

    assert day["total"] == 30


def test_upsert_hourly_cumulative_skips_invalid_hours(delivery_store: DeliveryStore) -> None:
    """Out-of-range or non-integer hours are ignored."""
    day = delivery_store.upsert_hourly_cumulative(
        "2025-08-01",
        [
            {"hour": 8, "quantity": 50},
            {"hour": "9", "quantity": "1,100"},
            {"hour": 24, "quantity": 7},
            {"hour": 8.5, "quantity": 7},
            {"hour": None, "quantity": 7},
        ],
    )

    assert (day["hour_08"], day["hour_09"], day["total"]) == (50, 1100, 1100)


def test_upsert_hourly_cumulative_keeps_earlier_hours(delivery_store: DeliveryStore) -> None:
    """Later calls only touch the hours they mention."""
    delivery_store.upsert_hourly_cumulative("2025-08-01", [{"hour": 8, "quantity": 50}])

    day = delivery_store.upsert_hourly_cumulative("2025-08-01", [{"hour": 23, "quantity": 0}])

    assert (day["hour_08"], day["total"]) == (50, 50)


def test_get_recent_days_returns_latest_window_oldest_first(
    delivery_store: DeliveryStore,
) -> None:
    """Recent days are the newest N, listed ascending."""
    for day_number in (3, 1, 4, 2):
        delivery_store.upsert(f"2025-08-0{day_number}", {"hour_08": day_number})

    recent = [record["date"] for record in delivery_store.get_recent_days(2)]

    assert recent == ["2025-08-03", "2025-08-04"]
    assert delivery_store.get_recent_days(0) == []


def test_get_recent_days_defaults_to_configured_window(tmp_path: Path) -> None:
    """Without an argument the store's window applies."""
    store = DeliveryStore(tmp_path / "delivery.json", recent_days=1)
    store.upsert("2025-08-01", {})
    store.upsert("2025-08-02", {})

    assert [record["date"] for record in store.get_recent_days()] == ["2025-08-02"]


def test_get_by_date_returns_none_for_unknown_day(delivery_store: DeliveryStore) -> None:
    """Missing days are reported as None."""
    assert delivery_store.get_by_date("2025-08-01") is None


def test_get_range_is_inclusive_and_normalizes_bounds(delivery_store: DeliveryStore) -> None:
    """Range bounds accept loose spellings and include both ends."""
    for day_number in range(1, 6):
        delivery_store.upsert(f"2025-08-0{day_number}", {})

    days = delivery_store.get_range("2025.8.2", "8/4/25")

    assert [record["date"] for record in days] == ["2025-08-02", "2025-08-03", "2025-08-04"]


def test_get_range_rejects_inverted_bounds(delivery_store: DeliveryStore) -> None:
    """A start after the end is a caller error."""
    with pytest.raises(LedgerRecordError):
        delivery_store.get_range("2025-08-05", "2025-08-01")


def test_get_previous_total_reads_day_before(delivery_store: DeliveryStore) -> None:
    """The previous day's stored total is returned, or zero."""
    delivery_store.upsert("2025-07-31", {"hour_20": 640})

    assert delivery_store.get_previous_total("2025-08-01") == 640
    assert delivery_store.get_previous_total("2025-07-31") == 0


def test_import_from_csv_file_counts_imported_rows(delivery_store: DeliveryStore) -> None:
    """Only parseable rows are counted and stored."""
    result = delivery_store.import_from_csv_file(fixture_path("delivery/hourly_export.csv"))

    assert result.to_dict() == {"imported": 2}
    assert [record["date"] for record in delivery_store.get_all()] == ["2025-08-01", "2025-08-02"]


def test_import_from_csv_file_overwrites_same_dates_only(delivery_store: DeliveryStore) -> None:
    """Imported days replace stored days with the same date."""
    delivery_store.upsert("2025-08-01", {"hour_05": 5})
    delivery_store.upsert("2025-07-30", {"hour_05": 7})

    delivery_store.import_from_csv_file(fixture_path("delivery/hourly_export.csv"))

    assert delivery_store.get_by_date("2025-08-01")["hour_05"] == 0
    assert delivery_store.get_by_date("2025-07-30")["total"] == 7
    assert len(delivery_store.get_all()) == 3


def test_import_from_csv_file_returns_zero_for_missing_file(
    delivery_store: DeliveryStore,
    tmp_path: Path,
) -> None:
    """A missing export is not an error."""
    result = delivery_store.import_from_csv_file(tmp_path / "missing.csv")

    assert result.imported == 0


def test_replace_all_discards_previous_days(delivery_store: DeliveryStore) -> None:
    """Replacement keeps only the supplied days, coerced and deduplicated."""
    delivery_store.upsert("2025-07-01", {"hour_01": 1})

    result = delivery_store.replace_all(
        [
            {"date": "2025-08-02", "total": "90", "hour_08": "90"},
            {"date": "bad", "total": 1},
            {"date": "2025.8.1", "dayOfWeek": "금", "total": 10},
            {"date": "2025-08-02", "total": 95},
        ]
    )

    days = delivery_store.get_all()
    assert result.to_dict() == {"count": 2}
    assert [(day["date"], day["total"]) for day in days] == [("2025-08-01", 10), ("2025-08-02", 95)]
    assert days[1]["hour_08"] == 0


def test_replace_all_rejects_non_list_payload(delivery_store: DeliveryStore) -> None:
    """A single mapping is not a valid replacement set."""
    with pytest.raises(LedgerRecordError):
        delivery_store.replace_all({"date": "2025-08-01"})


def test_upsert_ignores_date_in_updates(delivery_store: DeliveryStore) -> None:
    """An update cannot move a day onto another date."""
    delivery_store.upsert("2025-08-02", {"hour_08": 20})

    delivery_store.upsert("2025-08-01", {"date": "2025-08-02", "hour_08": 10})

    days = delivery_store.get_all()
    assert [(day["date"], day["total"]) for day in days] == [("2025-08-01", 10), ("2025-08-02", 20)]
