"""Conversion of raw dataset records into typed calendars."""

import re
from collections.abc import Iterable, Mapping
from typing import Any

from prodcal.errors import DecodeError
from prodcal.models import MONTH_FIELDS, RecordField, YearCalendar

# "*" marks a shortened pre-holiday day, "+" is accepted the same way
SHORT_DAY_MARKERS = ("*", "+")
MAX_DAY_OF_MONTH = 31

# ASCII only: int() and float() would also take "2_018", " 2018 " or "２０１８"
_INTEGER_RE = re.compile(r"[+-]?[0-9]+", re.ASCII)
_NUMBER_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?", re.ASCII)


def parse_day_list(days: str) -> tuple[frozenset[int], frozenset[int]]:
    """
    Parse a month's day list like '1,2,3*,31'.

    Returns:
        (weekend_days, short_days) where short days are the tokens ending
        with a shortened-day marker, with the marker stripped.
    """
    weekend: set[int] = set()
    short: set[int] = set()
    for raw_token in days.split(","):
        token = raw_token.strip()
        if not token:
            continue
        if token.endswith(SHORT_DAY_MARKERS):
            short.add(_parse_day(token[:-1]))
        else:
            weekend.add(_parse_day(token))
    return frozenset(weekend), frozenset(short)


def _parse_day(token: str) -> int:
    """Parse a single day-of-month token."""
    if not token.isascii() or not token.isdigit():
        msg = f"Invalid day {token!r}"
        raise DecodeError(msg)
    day = int(token)
    if not 1 <= day <= MAX_DAY_OF_MONTH:
        msg = f"Day {day} is out of range"
        raise DecodeError(msg)
    return day


def _get_field(raw: Mapping[str, Any], column: RecordField) -> str:
    """Get a string field from a raw record."""
    try:
        value = raw[column.value]
    except KeyError as exc:
        msg = f"Missing field {column.value!r}"
        raise DecodeError(msg) from exc
    if not isinstance(value, str):
        msg = f"Field {column.value!r} should be a string, got {type(value).__name__}"
        raise DecodeError(msg)
    return value


def _get_int(raw: Mapping[str, Any], column: RecordField) -> int:
    value = _get_field(raw, column)
    if not _INTEGER_RE.fullmatch(value):
        msg = f"Field {column.value!r} is not an integer: {value!r}"
        raise DecodeError(msg)
    return int(value)


def _get_float(raw: Mapping[str, Any], column: RecordField) -> float:
    value = _get_field(raw, column)
    if not _NUMBER_RE.fullmatch(value):
        msg = f"Field {column.value!r} is not a number: {value!r}"
        raise DecodeError(msg)
    return float(value)


def parse_record(raw: Mapping[str, Any]) -> YearCalendar:
    """Convert one raw yearly record into a YearCalendar."""
    if not isinstance(raw, Mapping):
        msg = f"Record should be an object, got {type(raw).__name__}"
        raise DecodeError(msg)

    weekend_days: dict[int, frozenset[int]] = {}
    short_days: dict[int, frozenset[int]] = {}
    for month, column in MONTH_FIELDS.items():
        weekend_days[month], short_days[month] = parse_day_list(_get_field(raw, column))

    return YearCalendar(
        year=_get_int(raw, RecordField.YEAR),
        working_days=_get_int(raw, RecordField.WORKING_DAYS),
        holidays=_get_int(raw, RecordField.HOLIDAYS),
        working_hours_40h_week=_get_float(raw, RecordField.WORKING_HOURS_40H),
        working_hours_36h_week=_get_float(raw, RecordField.WORKING_HOURS_36H),
        working_hours_24h_week=_get_float(raw, RecordField.WORKING_HOURS_24H),
        weekend_days=weekend_days,
        short_days=short_days,
    )


def parse_records(raws: Iterable[Mapping[str, Any]]) -> dict[int, YearCalendar]:
    """
    Convert raw records into calendars keyed by year.

    A single malformed record fails the whole batch. When a year appears
    more than once, the last record wins.
    """
    calendars: dict[int, YearCalendar] = {}
    for raw in raws:
        calendar = parse_record(raw)
        calendars[calendar.year] = calendar
    return calendars
