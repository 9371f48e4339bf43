"""Custom exceptions."""


class ProdCalError(Exception):
    """Base exception for prodcal."""


class TransportError(ProdCalError):
    """Raised when the calendar source cannot be reached."""


class DecodeError(ProdCalError):
    """Raised when the calendar payload cannot be decoded."""


class RemoteStatusError(ProdCalError):
    """Raised when the calendar source answers with a non-success status."""

    def __init__(self, status_code: int, message: str | None = None) -> None:
        super().__init__(message or f"Calendar source responded with status {status_code}")
        self.status_code = status_code


class NeverInitializedError(RemoteStatusError):
    """Raised when the source is unavailable and no data was ever loaded."""

    def __init__(self, status_code: int) -> None:
        super().__init__(
            status_code,
            f"Calendar source responded with status {status_code} "
            "and no calendar data has been loaded yet",
        )


class NoDataForYearError(ProdCalError):
    """Raised when the cache holds no calendar for the requested year."""

    def __init__(self, year: int) -> None:
        super().__init__(f"There is no data for year {year}")
        self.year = year


class ConfigNotFoundError(ProdCalError):
    """Raised when configuration is not found."""


class InvalidConfigError(ProdCalError):
    """Raised when configuration is present but malformed."""
