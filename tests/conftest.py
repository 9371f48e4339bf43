"""Shared fixtures."""

import pytest

from prodcal.models import MONTH_FIELDS, RecordField


def make_raw_record(year: str = "2018", **months: str) -> dict[str, str]:
    """Build a raw dataset record; months are given by lowercase English name."""
    record = {column.value: months.get(column.name.lower(), "") for column in MONTH_FIELDS.values()}
    record.update(
        {
            RecordField.YEAR.value: year,
            RecordField.WORKING_DAYS.value: "247",
            RecordField.HOLIDAYS.value: "118",
            RecordField.WORKING_HOURS_40H.value: "1970.0",
            RecordField.WORKING_HOURS_36H.value: "1776.4",
            RecordField.WORKING_HOURS_24H.value: "1179.8",
        }
    )
    return record


@pytest.fixture
def raw_2018() -> dict[str, str]:
    """Record for 2018 with January holidays and a shortened 8th."""
    return make_raw_record("2018", january="1,2,3,4,5,6,7,8*", february="3,4,10,11,17,18,22*,23,24,25")


@pytest.fixture
def raw_record():
    """Factory for raw dataset records."""
    return make_raw_record
