"""Human readable descriptions of decoded reports."""

from typing import List, Optional, Tuple

from aviation_weather.weather.models import (
    WeatherReport,
    Wind,
    Visibility,
    Pressure,
    FlightCategoryResult,
)

PLACEHOLDER = "--"


def describe_temperature(temperature: Optional[int], dewpoint: Optional[int]) -> Optional[str]:
    if temperature is None or dewpoint is None:
        return None
    return f"{temperature}°C / Dewpoint: {dewpoint}°C"


def describe_wind(wind: Optional[Wind]) -> Optional[str]:
    """e.g. ``270° at 15 gusting 25 kt``, ``Variable at 3 kt`` or ``Calm``."""
    if wind is None:
        return None
    if wind.calm:
        return "Calm"
    direction = "Variable" if wind.variable else f"{wind.direction:03d}°"
    gust = f" gusting {wind.gust}" if wind.gust is not None else ""
    return f"{direction} at {wind.speed}{gust} kt"


def describe_visibility(visibility: Optional[Visibility]) -> Optional[str]:
    if visibility is None:
        return None
    if visibility.cavok:
        return "CAVOK (>10 km)"
    if visibility.meters is not None:
        if visibility.greater_than:
            return ">10 km"
        return f"{visibility.meters} m"
    if visibility.statute_miles is None:
        return None
    prefix = ">" if visibility.greater_than else ""
    return f"{prefix}{visibility.statute_miles:.1f} SM"


def describe_pressure(pressure: Optional[Pressure]) -> Optional[str]:
    if pressure is None:
        return None
    if pressure.inhg is not None:
        return f"{pressure.hpa} hPa ({pressure.inhg:.2f} inHg)"
    return f"{pressure.hpa} hPa"


def describe_ceiling(report: WeatherReport) -> Optional[str]:
    if report.ceiling_unlimited:
        return "Unlimited"
    if report.ceiling_ft is None:
        return None
    return f"{report.ceiling_ft} ft"


def report_lines(
    report: WeatherReport,
    result: Optional[FlightCategoryResult] = None,
) -> List[Tuple[str, str]]:
    """
    Ordered (label, value) pairs for display, ``--`` for missing fields.

    Args:
        report: Decoded report
        result: Flight category result to append as "Flight Rules"
    """
    lines = [
        ("Temperature", describe_temperature(report.temperature, report.dewpoint)),
        ("Wind", describe_wind(report.wind)),
        ("Visibility", describe_visibility(report.visibility)),
        ("Pressure", describe_pressure(report.pressure)),
        ("Ceiling", describe_ceiling(report)),
    ]
    if result is not None:
        lines.append(("Flight Rules", result.detail))
    return [(label, value or PLACEHOLDER) for label, value in lines]
