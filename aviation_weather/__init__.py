"""
METAR decoding and flight category classification.

This package turns raw METAR reports into structured weather fields and a
VFR/MVFR/IFR/LIFR flight category computed from configurable thresholds.

The main public API includes:
- WeatherReport / WeatherParser: decoded report and decoder
- WeatherAnalyzer: flight category classification
- FlightRulesThresholds: category limits
- AvWxSource: raw report fetcher for aviationweather.gov
- Settings: airport, update interval and thresholds
"""

from aviation_weather.exceptions import (
    AviationWeatherError,
    EmptyReportError,
    FetchError,
    SettingsError,
)
from aviation_weather.weather import (
    WeatherReport,
    WeatherParser,
    WeatherAnalyzer,
    FlightCategory,
    FlightRulesThresholds,
    ConditionTag,
)
from aviation_weather.sources import AvWxSource
from aviation_weather.utils.settings import Settings

__version__ = '0.1.0'
__all__ = [
    'AviationWeatherError',
    'EmptyReportError',
    'FetchError',
    'SettingsError',
    'WeatherReport',
    'WeatherParser',
    'WeatherAnalyzer',
    'FlightCategory',
    'FlightRulesThresholds',
    'ConditionTag',
    'AvWxSource',
    'Settings',
]
