"""Delimited text and field value parsing.

This module sniffs delimiters, splits quoted fields, and parses the
loosely formatted dates and counts found in exported spreadsheets.
Parsers return ``ParsedValue`` so callers choose how to treat bad input.
"""

from __future__ import annotations

from datetime import date, datetime
import math
import re

from core.constants import CANDIDATE_DELIMITERS, DEFAULT_DELIMITER, KOREAN_WEEKDAY_LABELS
from core.types import ParsedValue

_YEAR_FIRST_DATE = re.compile(r"^(\d{4})[./-](\d{1,2})[./-](\d{1,2})\.?$")
_YEAR_LAST_DATE = re.compile(r"^(\d{1,2})[./-](\d{1,2})[./-](\d{2}|\d{4})$")
_WHITESPACE = re.compile(r"\s+")
_NON_DIGIT = re.compile(r"\D")
_NOT_DIGIT_OR_MINUS = re.compile(r"[^\d-]")
_LINE_BREAK = re.compile(r"\r?\n")


def sniff_delimiter(header_line: str) -> str:
    """Pick the field delimiter from a header line.

    Args:
        header_line: First line of the delimited file.

    Returns:
        The most frequent of comma, semicolon, and tab; comma when
        none occur. Ties go to the earlier candidate.
    """
    counts = [(header_line.count(candidate), candidate) for candidate in CANDIDATE_DELIMITERS]
    best_count, best_delimiter = max(counts, key=lambda item: item[0])
    if best_count == 0:
        return DEFAULT_DELIMITER
    return best_delimiter


def split_text_lines(text: str) -> list[str]:
    """Split file text on LF or CRLF line breaks only."""
    return _LINE_BREAK.split(text)


def split_delimited_line(line: str, delimiter: str) -> list[str]:
    """Split one line into trimmed fields honoring double quotes.

    Args:
        line: Raw text line without its line terminator.
        delimiter: Single-character field separator.

    Returns:
        Field values with surrounding whitespace removed.
    """
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False
    index = 0
    while index < len(line):
        char = line[index]
        if char == '"':
            if in_quotes and index + 1 < len(line) and line[index + 1] == '"':
                current.append('"')
                index += 1
            else:
                in_quotes = not in_quotes
        elif char == delimiter and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(char)
        index += 1
    fields.append("".join(current).strip())
    return fields


def parse_date(raw: object) -> ParsedValue:
    """Parse a date spelling into ``YYYY-MM-DD``.

    Accepts ``YYYY.M.D`` style (``.``, ``/`` or ``-`` separators and an
    optional trailing dot) and ``M/D/YY`` or ``M/D/YYYY`` style, where a
    two-digit year is read as 20YY. Real date objects pass through.

    Args:
        raw: Cell or field value.

    Returns:
        Parsed value; invalid for any other shape.
    """
    if isinstance(raw, datetime):
        return ParsedValue(raw=raw, value=raw.date().isoformat(), is_valid=True)
    if isinstance(raw, date):
        return ParsedValue(raw=raw, value=raw.isoformat(), is_valid=True)
    if raw is None:
        return ParsedValue(raw=raw)
    text = _WHITESPACE.sub("", str(raw))
    match = _YEAR_FIRST_DATE.match(text)
    if match:
        year, month, day = match.groups()
        return ParsedValue(raw=raw, value=_format_date(year, month, day), is_valid=True)
    match = _YEAR_LAST_DATE.match(text)
    if match:
        month, day, year = match.groups()
        if len(year) == 2:
            year = "20" + year
        return ParsedValue(raw=raw, value=_format_date(year, month, day), is_valid=True)
    return ParsedValue(raw=raw)


def parse_int(raw: object) -> ParsedValue:
    """Parse a count that may carry separators, units, or spaces.

    Every character other than digits and a leading minus sign is
    dropped before conversion, so ``"1,200 ea"`` parses as 1200.

    Args:
        raw: Cell or field value.

    Returns:
        Parsed integer value; invalid when no digits remain.
    """
    if isinstance(raw, bool) or raw is None:
        return ParsedValue(raw=raw)
    if isinstance(raw, int):
        return ParsedValue(raw=raw, value=raw, is_valid=True)
    if isinstance(raw, float):
        if not math.isfinite(raw):
            return ParsedValue(raw=raw)
        return ParsedValue(raw=raw, value=int(raw), is_valid=True)
    cleaned = _NOT_DIGIT_OR_MINUS.sub("", str(raw).strip())
    digits = _NON_DIGIT.sub("", cleaned)
    if not digits:
        return ParsedValue(raw=raw)
    value = int(digits)
    if cleaned.startswith("-"):
        value = -value
    return ParsedValue(raw=raw, value=value, is_valid=True)


def normalize_date(raw: object) -> str | None:
    """Return ``YYYY-MM-DD`` or ``None`` for unparseable input."""
    return parse_date(raw).or_default(None)


def coerce_int(raw: object, default: int = 0) -> int:
    """Return the parsed integer, or ``default`` for unparseable input."""
    return parse_int(raw).or_default(default)


def weekday_label(iso_date: str) -> str:
    """Return the one-letter Korean weekday label for an ISO date.

    Args:
        iso_date: Date in ``YYYY-MM-DD`` form.

    Returns:
        Weekday label, or an empty string when the date is not real.
    """
    try:
        parsed = date.fromisoformat(iso_date)
    except (TypeError, ValueError):
        return ""
    return KOREAN_WEEKDAY_LABELS[parsed.weekday()]


def _format_date(year: str, month: str, day: str) -> str:
    return f"{year}-{month.zfill(2)}-{day.zfill(2)}"
