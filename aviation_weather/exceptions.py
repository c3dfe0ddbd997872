"""Exceptions raised by aviation_weather."""

from typing import Optional


class AviationWeatherError(Exception):
    """Base class for errors raised by this package."""


class EmptyReportError(AviationWeatherError, ValueError):
    """Raised when a report is empty or whitespace only.

    Distinguishes "no data yet" from a report with no recognisable groups,
    which decodes to a report with every field absent.
    """

    def __init__(self, message: str = "No data received"):
        super().__init__(message)


class FetchError(AviationWeatherError):
    """Exception raised when a report cannot be retrieved."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        """
        Initialize fetch error.

        Args:
            message: Error message
            status_code: HTTP status code, if the server answered
        """
        super().__init__(message)
        self.status_code = status_code


class SettingsError(AviationWeatherError):
    """Exception raised when settings cannot be loaded or are invalid."""
