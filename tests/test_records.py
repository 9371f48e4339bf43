"""Tests for raw record parsing."""

import pytest

from prodcal.errors import DecodeError
from prodcal.models import RecordField
from prodcal.records import parse_day_list, parse_record, parse_records


def test_parse_day_list():
    """Unmarked days are weekends, marked days are short days."""
    weekend, short = parse_day_list("1,2,3*,31")
    assert weekend == {1, 2, 31}
    assert short == {3}


def test_parse_day_list_plus_marker():
    """'+' marks a short day as well."""
    weekend, short = parse_day_list("4,5+,6")
    assert weekend == {4, 6}
    assert short == {5}


def test_parse_day_list_empty():
    """An empty month has no special days."""
    assert parse_day_list("") == (frozenset(), frozenset())


def test_parse_day_list_whitespace():
    """Spaces around tokens are ignored."""
    weekend, short = parse_day_list(" 1, 2 ,7* ")
    assert weekend == {1, 2}
    assert short == {7}


@pytest.mark.parametrize("days", ["1,x,3", "1,*", "1,2**", "0", "32", "1;2"])
def test_parse_day_list_invalid(days):
    """Any bad token fails the whole list."""
    with pytest.raises(DecodeError):
        parse_day_list(days)


def test_parse_record(raw_2018):
    """A raw record becomes a typed YearCalendar."""
    calendar = parse_record(raw_2018)

    assert calendar.year == 2018
    assert calendar.working_days == 247
    assert calendar.holidays == 118
    assert calendar.working_hours_40h_week == pytest.approx(1970.0)
    assert calendar.working_hours_36h_week == pytest.approx(1776.4)
    assert calendar.working_hours_24h_week == pytest.approx(1179.8)
    assert calendar.weekend_days[1] == {1, 2, 3, 4, 5, 6, 7}
    assert calendar.short_days[1] == {8}
    assert calendar.short_days[2] == {22}
    assert calendar.weekend_days[12] == frozenset()


def test_parse_record_missing_field(raw_2018):
    """A record without one of the month fields is rejected."""
    del raw_2018[RecordField.MARCH.value]
    with pytest.raises(DecodeError, match="Март"):
        parse_record(raw_2018)


@pytest.mark.parametrize(
    ("column", "value"),
    [
        (RecordField.YEAR, "two thousand"),
        (RecordField.WORKING_DAYS, "247.5"),
        (RecordField.HOLIDAYS, ""),
        (RecordField.WORKING_HOURS_40H, "n/a"),
    ],
)
def test_parse_record_invalid_number(raw_2018, column, value):
    """Non-numeric aggregates are rejected."""
    raw_2018[column.value] = value
    with pytest.raises(DecodeError):
        parse_record(raw_2018)


def test_parse_record_non_string_field(raw_2018):
    """Fields must be strings like in the source dataset."""
    raw_2018[RecordField.WORKING_DAYS.value] = 247
    with pytest.raises(DecodeError):
        parse_record(raw_2018)


def test_parse_record_not_an_object():
    """A record must be a JSON object."""
    with pytest.raises(DecodeError):
        parse_record(["2018"])


def test_parse_records_keyed_by_year(raw_2018, raw_record):
    """Records are keyed by year."""
    calendars = parse_records([raw_2018, raw_record("2019", may="1,2,3")])
    assert sorted(calendars) == [2018, 2019]
    assert calendars[2019].weekend_days[5] == {1, 2, 3}


def test_parse_records_last_duplicate_wins(raw_record):
    """A later record for the same year replaces the earlier one."""
    calendars = parse_records(
        [raw_record("2018", june="12"), raw_record("2018", june="11,12")]
    )
    assert calendars[2018].weekend_days[6] == {11, 12}


def test_parse_records_one_bad_record_fails_all(raw_2018, raw_record):
    """A malformed record aborts the whole batch."""
    bad = raw_record("2019", april="1,x")
    with pytest.raises(DecodeError):
        parse_records([raw_2018, bad])


@pytest.mark.parametrize("days", ["1_0", "٣", "３", "1,²"])
def test_parse_day_list_ascii_digits_only(days):
    """Days are plain ASCII numbers."""
    with pytest.raises(DecodeError):
        parse_day_list(days)


@pytest.mark.parametrize(
    ("column", "value"),
    [
        (RecordField.YEAR, "2_018"),
        (RecordField.YEAR, " 2018 "),
        (RecordField.YEAR, "２０１８"),
        (RecordField.WORKING_DAYS, "٢٤٧"),
        (RecordField.WORKING_HOURS_36H, "1_776.4"),
        (RecordField.WORKING_HOURS_24H, " 1179.8"),
        (RecordField.WORKING_HOURS_40H, "inf"),
    ],
)
def test_parse_record_strict_numbers(raw_2018, column, value):
    """Numbers that Python would accept but the dataset never contains are rejected."""
    raw_2018[column.value] = value
    with pytest.raises(DecodeError):
        parse_record(raw_2018)


@pytest.mark.parametrize(("value", "expected"), [("1970", 1970.0), ("1970.", 1970.0), ("1.9e3", 1900.0)])
def test_parse_record_hours_formats(raw_2018, value, expected):
    """Hour totals accept plain decimal notation."""
    raw_2018[RecordField.WORKING_HOURS_40H.value] = value
    assert parse_record(raw_2018).working_hours_40h_week == pytest.approx(expected)
