"""Data models for the production calendar."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType


class RecordField(str, Enum):
    """Field names of a yearly record in the remote dataset."""

    YEAR = "Год/Месяц"
    JANUARY = "Январь"
    FEBRUARY = "Февраль"
    MARCH = "Март"
    APRIL = "Апрель"
    MAY = "Май"
    JUNE = "Июнь"
    JULY = "Июль"
    AUGUST = "Август"
    SEPTEMBER = "Сентябрь"
    OCTOBER = "Октябрь"
    NOVEMBER = "Ноябрь"
    DECEMBER = "Декабрь"
    WORKING_DAYS = "Всего рабочих дней"
    HOLIDAYS = "Всего праздничных и выходных дней"
    WORKING_HOURS_40H = "Количество рабочих часов при 40-часовой рабочей неделе"
    WORKING_HOURS_36H = "Количество рабочих часов при 36-часовой рабочей неделе"
    WORKING_HOURS_24H = "Количество рабочих часов при 24-часовой рабочей неделе"


# Month number (1-12) -> field holding that month's day list
MONTH_FIELDS: dict[int, RecordField] = {
    month: column
    for month, column in enumerate(
        (
            RecordField.JANUARY,
            RecordField.FEBRUARY,
            RecordField.MARCH,
            RecordField.APRIL,
            RecordField.MAY,
            RecordField.JUNE,
            RecordField.JULY,
            RecordField.AUGUST,
            RecordField.SEPTEMBER,
            RecordField.OCTOBER,
            RecordField.NOVEMBER,
            RecordField.DECEMBER,
        ),
        start=1,
    )
}


def _freeze_days(days: Mapping[int, frozenset[int]]) -> Mapping[int, frozenset[int]]:
    return MappingProxyType({month: frozenset(values) for month, values in days.items()})


@dataclass(frozen=True)
class YearCalendar:
    """Production calendar of a single year."""

    year: int
    working_days: int
    holidays: int
    working_hours_40h_week: float
    working_hours_36h_week: float
    working_hours_24h_week: float
    weekend_days: Mapping[int, frozenset[int]] = field(default_factory=dict, hash=False)
    short_days: Mapping[int, frozenset[int]] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        # Read-only: cached calendars are shared between threads
        object.__setattr__(self, "weekend_days", _freeze_days(self.weekend_days))
        object.__setattr__(self, "short_days", _freeze_days(self.short_days))

    def is_weekend(self, month: int, day: int) -> bool:
        """Check if a day is a weekend or public holiday."""
        return day in self.weekend_days.get(month, frozenset())

    def is_short_day(self, month: int, day: int) -> bool:
        """Check if a day is a shortened pre-holiday working day."""
        return day in self.short_days.get(month, frozenset())
