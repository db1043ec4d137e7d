"""Unit tests for delimiter sniffing and field parsing."""

from __future__ import annotations

from datetime import date, datetime

import pytest

from ingest.text_parsing import (
    coerce_int,
    normalize_date,
    parse_date,
    parse_int,
    sniff_delimiter,
    split_delimited_line,
    split_text_lines,
    weekday_label,
)


def test_sniff_delimiter_prefers_most_frequent_candidate() -> None:
    """Three commas should beat one semicolon."""
    assert sniff_delimiter("a,b;c,d,e") == ","


def test_sniff_delimiter_detects_tab() -> None:
    """Tab separated headers should select tab."""
    assert sniff_delimiter("a\tb\tc") == "\t"


def test_sniff_delimiter_detects_semicolon() -> None:
    """Semicolon separated headers should select semicolon."""
    assert sniff_delimiter("date;total;00") == ";"


def test_sniff_delimiter_defaults_to_comma() -> None:
    """A header without candidates should fall back to comma."""
    assert sniff_delimiter("single-column") == ","


def test_split_delimited_line_keeps_quoted_delimiters() -> None:
    """Delimiters inside quotes belong to the field."""
    fields = split_delimited_line('2025-08-01,"1,250", x ', ",")

    assert fields == ["2025-08-01", "1,250", "x"]


def test_split_delimited_line_unescapes_doubled_quotes() -> None:
    """A doubled quote inside a quoted field is one literal quote."""
    fields = split_delimited_line('"say ""hi""";b', ";")

    assert fields == ['say "hi"', "b"]


def test_split_delimited_line_keeps_trailing_empty_field() -> None:
    """A trailing delimiter produces a final empty field."""
    assert split_delimited_line("a\tb\t", "\t") == ["a", "b", ""]


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("2025.8.1", "2025-08-01"),
        ("2025. 8. 1.", "2025-08-01"),
        ("2025/12/31", "2025-12-31"),
        ("8/1/25", "2025-08-01"),
        ("08-01-2025", "2025-08-01"),
    ],
)
def test_normalize_date_accepts_known_spellings(raw: str, expected: str) -> None:
    """Both year-first and year-last spellings should normalize."""
    assert normalize_date(raw) == expected


@pytest.mark.parametrize("raw", ["not-a-date", "", None, "2025-08", "8/1/125"])
def test_normalize_date_rejects_other_shapes(raw: object) -> None:
    """Unknown shapes should be reported as unparseable."""
    assert normalize_date(raw) is None


def test_parse_date_passes_real_dates_through() -> None:
    """Spreadsheet date cells should become ISO dates."""
    parsed = parse_date(datetime(2025, 8, 1, 0, 0))

    assert parsed.value == "2025-08-01" and parsed.is_valid


def test_parse_date_marks_invalid_input() -> None:
    """Invalid input should carry the raw value and no parsed value."""
    parsed = parse_date("soon")

    assert (parsed.is_valid, parsed.value, parsed.raw) == (False, None, "soon")


def test_parse_int_strips_separators_and_units() -> None:
    """Thousands separators and unit text should be ignored."""
    assert parse_int("1,200 ea").value == 1200


def test_parse_int_keeps_leading_minus() -> None:
    """A leading minus sign should survive cleaning."""
    assert parse_int(" -45 ").value == -45


def test_parse_int_truncates_float_cells() -> None:
    """Numeric spreadsheet cells should convert without text cleaning."""
    assert parse_int(12.0).value == 12


def test_parse_int_reports_invalid_without_digits() -> None:
    """Text without digits should be invalid rather than zero."""
    assert parse_int("n/a").is_valid is False


def test_coerce_int_defaults_to_zero() -> None:
    """The default policy should map invalid input to zero."""
    assert (coerce_int("n/a"), coerce_int(None), coerce_int("")) == (0, 0, 0)


def test_coerce_int_uses_supplied_default() -> None:
    """Callers may choose another default for invalid input."""
    assert coerce_int("-", default=-1) == -1


def test_weekday_label_uses_korean_labels() -> None:
    """2025-08-01 was a Friday."""
    assert weekday_label(date(2025, 8, 1).isoformat()) == "금"


def test_weekday_label_is_blank_for_impossible_dates() -> None:
    """Shape-valid but impossible dates should not raise."""
    assert weekday_label("2025-02-30") == ""


def test_split_text_lines_breaks_on_lf_and_crlf_only() -> None:
    """Other unicode line boundaries are field content."""
    assert split_text_lines("a\r\nb\x0bc\nd e") == ["a", "b\x0bc", "d e"]
