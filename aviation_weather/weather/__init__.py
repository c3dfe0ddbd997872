"""
Weather module for decoding and classifying METAR reports.

Provides:
- WeatherReport: Decoded METAR data
- FlightCategory: VFR/MVFR/IFR/LIFR enum with ordering
- FlightRulesThresholds: Visibility/ceiling limits per category
- ConditionTag: Coarse condition (thunderstorm, snow, rain, ...)
- WeatherParser: Decode raw METAR text
- WeatherAnalyzer: Flight category classification

Example:
    from aviation_weather.weather import WeatherReport, WeatherAnalyzer

    raw = "KJFK 291851Z 27015G25KT 3SM RA BKN008 OVC015 12/08 Q1013"
    report = WeatherReport.from_metar(raw)
    print(report.ceiling_ft)  # 800
    category, detail = WeatherAnalyzer.flight_category(raw)
    print(detail)  # IFR (Vis: 3.0 SM, Ceil: 800 ft)
"""

from aviation_weather.weather.models import (
    WeatherReport,
    FlightCategory,
    FlightCategoryResult,
    FlightRulesThresholds,
    ConditionTag,
    WeatherType,
    Wind,
    Visibility,
    Pressure,
    UNLIMITED_CEILING_FT,
)
from aviation_weather.weather.parser import WeatherParser
from aviation_weather.weather.analysis import WeatherAnalyzer
from aviation_weather.weather.conditions import condition_for, phenomena_in

__all__ = [
    'WeatherReport',
    'FlightCategory',
    'FlightCategoryResult',
    'FlightRulesThresholds',
    'ConditionTag',
    'WeatherType',
    'Wind',
    'Visibility',
    'Pressure',
    'UNLIMITED_CEILING_FT',
    'WeatherParser',
    'WeatherAnalyzer',
    'condition_for',
    'phenomena_in',
]
