"""Russian production calendar client with an in-memory cache."""

from prodcal.cache import ProductionCalendar
from prodcal.errors import (
    DecodeError,
    NeverInitializedError,
    NoDataForYearError,
    ProdCalError,
    RemoteStatusError,
    TransportError,
)
from prodcal.fetcher import CalendarFetcher
from prodcal.models import YearCalendar

__all__ = [
    "CalendarFetcher",
    "DecodeError",
    "NeverInitializedError",
    "NoDataForYearError",
    "ProdCalError",
    "ProductionCalendar",
    "RemoteStatusError",
    "TransportError",
    "YearCalendar",
]
