"""In-memory production calendar with time-based refresh."""

import logging
import threading
from collections.abc import Callable
from datetime import UTC, date, datetime, timedelta
from typing import Self

from prodcal.config import Config
from prodcal.errors import NeverInitializedError, NoDataForYearError, RemoteStatusError
from prodcal.fetcher import CalendarFetcher
from prodcal.models import YearCalendar

logger = logging.getLogger(__name__)

DEFAULT_CACHE_TTL = timedelta(hours=24)


def _utc_now() -> datetime:
    return datetime.now(UTC)


class ProductionCalendar:
    """
    Production calendar answering queries from a cached copy of the dataset.

    Every query first checks whether the cache is older than ``cache_ttl`` and,
    if so, refreshes it synchronously. The cached years are always replaced
    as a whole, so a query never mixes data from two downloads.
    """

    def __init__(
        self,
        access_token: str,
        cache_ttl: timedelta = DEFAULT_CACHE_TTL,
        *,
        fetcher: CalendarFetcher | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._fetcher: CalendarFetcher = fetcher or CalendarFetcher(access_token)
        self._clock = clock
        self._cache_ttl: timedelta = cache_ttl
        self._data: dict[int, YearCalendar] = {}
        self._last_update: datetime | None = None
        # Guards the three fields above; held only for reads and swaps
        self._lock = threading.Lock()
        # Serializes downloads and guards the outcome of the last attempt
        self._update_lock = threading.Lock()
        self._attempts: int = 0
        self._attempt_error: Exception | None = None

    @classmethod
    def from_config(cls, config: Config) -> Self:
        """Create a calendar from configuration."""
        fetcher = CalendarFetcher(
            config.access_token, base_url=config.base_url, timeout=config.timeout
        )
        return cls(config.access_token, config.cache_ttl, fetcher=fetcher)

    def __enter__(self) -> Self:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """Release the HTTP session."""
        self._fetcher.close()

    @property
    def cache_ttl(self) -> timedelta:
        """Age after which the cached data is refreshed."""
        with self._lock:
            return self._cache_ttl

    @cache_ttl.setter
    def cache_ttl(self, duration: timedelta) -> None:
        self.set_cache_ttl(duration)

    def set_cache_ttl(self, duration: timedelta) -> None:
        """Change the cache lifetime. Applies from the next query on."""
        with self._lock:
            self._cache_ttl = duration

    @property
    def last_update(self) -> datetime | None:
        """Time of the last successful refresh, None if there was none."""
        with self._lock:
            return self._last_update

    def years(self) -> list[int]:
        """Years currently held in the cache."""
        with self._lock:
            return sorted(self._data)

    def update(self) -> None:
        """
        Download the calendar and replace the cached data.

        Raises:
            TransportError: the source could not be reached.
            DecodeError: the payload could not be decoded.
            NeverInitializedError: the source answered with an error status
                and no data was ever loaded.

        An error status once data has been loaded keeps the old data and
        does not raise.
        """
        with self._update_lock:
            self._update()

    def _update(self) -> None:
        """Run one refresh attempt and remember its outcome for waiting callers."""
        try:
            self._fetch_and_swap()
        except Exception as exc:
            self._attempt_error = exc
            raise
        else:
            self._attempt_error = None
        finally:
            self._attempts += 1

    def _fetch_and_swap(self) -> None:
        try:
            data = self._fetcher.fetch()
        except RemoteStatusError as exc:
            if self.last_update is None:
                raise NeverInitializedError(exc.status_code) from exc
            logger.warning("%s, keeping cached calendar", exc)
            return

        now = self._clock()
        with self._lock:
            self._data = data
            self._last_update = now
        logger.debug("Production calendar updated with years %s", sorted(data))

    def _is_stale(self) -> bool:
        with self._lock:
            if self._last_update is None:
                return True
            return self._clock() > self._last_update + self._cache_ttl

    def _refresh_if_stale(self) -> None:
        """
        Refresh the cache when it is older than its lifetime.

        Callers that find the cache stale while a refresh is running wait for
        it and share its outcome instead of downloading again, whether that
        refresh succeeded, kept the old data or raised.
        """
        attempts = self._attempts
        if not self._is_stale():
            return
        with self._update_lock:
            if self._attempts != attempts:
                if self._attempt_error is not None:
                    raise self._attempt_error
                return
            if self._is_stale():
                self._update()

    def year_calendar(self, target_date: date) -> YearCalendar:
        """Get the calendar of the year of a date."""
        self._refresh_if_stale()
        with self._lock:
            data = self._data
        try:
            return data[target_date.year]
        except KeyError:
            raise NoDataForYearError(target_date.year) from None

    def is_weekend(self, target_date: date) -> bool:
        """Check if a date is a weekend or a public holiday."""
        return self.year_calendar(target_date).is_weekend(target_date.month, target_date.day)

    def is_short_day(self, target_date: date) -> bool:
        """Check if a date is a shortened pre-holiday day."""
        return self.year_calendar(target_date).is_short_day(target_date.month, target_date.day)

    def working_days(self, target_date: date) -> int:
        """Number of working days in the year of a date."""
        return self.year_calendar(target_date).working_days

    def holidays(self, target_date: date) -> int:
        """Number of weekends and holidays in the year of a date."""
        return self.year_calendar(target_date).holidays

    def working_hours_40h_week(self, target_date: date) -> float:
        """Working hours in the year of a date for a 40-hour week."""
        return self.year_calendar(target_date).working_hours_40h_week

    def working_hours_36h_week(self, target_date: date) -> float:
        """Working hours in the year of a date for a 36-hour week."""
        return self.year_calendar(target_date).working_hours_36h_week

    def working_hours_24h_week(self, target_date: date) -> float:
        """Working hours in the year of a date for a 24-hour week."""
        return self.year_calendar(target_date).working_hours_24h_week
