"""Production calendar download from the open data portal."""

import logging
from typing import Any, Self

import requests

from prodcal.errors import DecodeError, RemoteStatusError, TransportError
from prodcal.models import YearCalendar
from prodcal.records import parse_records

logger = logging.getLogger(__name__)

API_URL = (
    "http://data.gov.ru/api/json/dataset/7708660670-proizvcalendar"
    "/version/20151123T183036/content"
)
DEFAULT_TIMEOUT = 1.0  # seconds


class CalendarFetcher:
    """Client for the production calendar dataset."""

    def __init__(
        self,
        access_token: str,
        base_url: str = API_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._access_token: str = access_token
        self._base_url: str = base_url
        self._timeout: float = timeout
        self._session: requests.Session | None = None

    def __enter__(self) -> Self:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    @property
    def session(self) -> requests.Session:
        """Get the HTTP session, opening it on first use."""
        if self._session is None:
            self._session = requests.Session()
        return self._session

    def close(self) -> None:
        """Close the HTTP session."""
        if self._session:
            self._session.close()
        self._session = None

    def fetch(self) -> dict[int, YearCalendar]:
        """Download and parse the calendar of every available year."""
        return parse_records(self.fetch_records())

    def fetch_records(self) -> list[dict[str, Any]]:
        """
        Download the raw yearly records.

        Redirects are not followed: a redirect is reported like any other
        non-success status.
        """
        logger.debug("Downloading production calendar from %s", self._base_url)
        try:
            response = self.session.get(
                self._base_url,
                params={"access_token": self._access_token},
                timeout=self._timeout,
                allow_redirects=False,
            )
        except requests.RequestException as exc:
            msg = f"Could not reach calendar source: {exc}"
            raise TransportError(msg) from exc

        if response.status_code != requests.codes.ok:
            raise RemoteStatusError(response.status_code)

        return self._decode(response)

    @staticmethod
    def _decode(response: requests.Response) -> list[dict[str, Any]]:
        """Decode the response body into a list of records."""
        try:
            payload = response.json()
        except ValueError as exc:
            msg = f"Calendar payload is not valid JSON: {exc}"
            raise DecodeError(msg) from exc

        if not isinstance(payload, list):
            msg = f"Calendar payload should be a list, got {type(payload).__name__}"
            raise DecodeError(msg)
        if not all(isinstance(record, dict) for record in payload):
            msg = "Calendar payload should only contain objects"
            raise DecodeError(msg)
        logger.debug("Downloaded %d yearly records", len(payload))
        return payload
