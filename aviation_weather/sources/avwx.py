"""Aviation Weather (aviationweather.gov) API source for live METAR data."""

import logging
from typing import Optional

import requests

from aviation_weather.exceptions import FetchError
from aviation_weather.weather.models import WeatherReport
from aviation_weather.weather.parser import WeatherParser

logger = logging.getLogger(__name__)


class AvWxSource:
    """
    Fetch the latest METAR for an airport from the aviationweather.gov API.

    Returns raw text, decoded via WeatherParser into a WeatherReport.
    No retry or caching is done here; callers decide how often to poll.

    Example:
        source = AvWxSource()
        report = source.fetch_metar("EDMA")
        print(report.temperature, report.condition)
    """

    BASE_URL = "https://aviationweather.gov/api/data"
    DEFAULT_TIMEOUT = 15
    USER_AGENT = "aviation-weather/0.1 (metar decoder)"

    def __init__(self, session: Optional[requests.Session] = None, timeout: int = DEFAULT_TIMEOUT):
        """
        Args:
            session: Optional requests.Session for dependency injection (testing).
            timeout: HTTP request timeout in seconds.
        """
        self._session = session or requests.Session()
        self._timeout = timeout

    def fetch_raw_metar(self, icao: str) -> str:
        """
        Fetch the raw METAR text for one airport.

        Args:
            icao: ICAO airport code.

        Returns:
            Trimmed raw text, empty if the API has no report (HTTP 204).

        Raises:
            FetchError: on transport failures or non-success status codes.
        """
        return self._fetch_raw("metar", {
            "ids": icao.strip().upper(),
            "format": "raw",
        }).strip()

    def fetch_metar(self, icao: str) -> WeatherReport:
        """
        Fetch and decode the METAR for one airport.

        Raises:
            FetchError: if the request fails.
            EmptyReportError: if the API returned no report text.
        """
        return WeatherParser.parse_metar(self.fetch_raw_metar(icao))

    def _fetch_raw(self, endpoint: str, params: dict) -> str:
        """
        Make HTTP GET request and return raw text.

        Handles 204 (no data) by returning empty string.
        """
        url = f"{self.BASE_URL}/{endpoint}"
        try:
            response = self._session.get(
                url,
                params=params,
                headers={"User-Agent": self.USER_AGENT},
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            logger.warning("AvWx fetch failed for %s: %s", endpoint, e)
            raise FetchError(str(e)) from e

        if response.status_code == 204:
            return ""
        if response.status_code != 200:
            logger.warning("AvWx fetch for %s returned HTTP %s", endpoint, response.status_code)
            raise FetchError(f"HTTP {response.status_code}", status_code=response.status_code)
        return response.text
