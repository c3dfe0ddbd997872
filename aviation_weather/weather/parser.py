"""METAR decoder built on regular expressions over the raw report text."""

import re
import logging
from datetime import datetime, timezone
from math import floor
from typing import Optional, Tuple

from dateutil.relativedelta import relativedelta

from aviation_weather.exceptions import EmptyReportError
from aviation_weather.weather.conditions import condition_for, phenomena_in
from aviation_weather.weather.models import (
    WeatherReport,
    WeatherType,
    Wind,
    Visibility,
    Pressure,
    UNLIMITED_CEILING_FT,
)

logger = logging.getLogger(__name__)

# Meters per statute mile
METERS_PER_SM = 1609.34
# Hectopascals per inch of mercury
HPA_PER_INHG = 33.8639
# Visibility reported for CAVOK and P-prefixed statute mile groups
OPEN_ENDED_VISIBILITY_SM = 10.0

_TEMPERATURE_RE = re.compile(r"\s(M?\d{2})/(M?\d{2})(?=\s|$)")
_WIND_RE = re.compile(r"\s(\d{3}|VRB)(\d{2,3})(?:G(\d{2,3}))?KT(?=\s|$)")
_VISIBILITY_METERS_RE = re.compile(r"\s(\d{4})(?:\s|[A-Z])")
_VISIBILITY_SM_RE = re.compile(r"\s(P)?(\d+)?(?:/(\d+))?SM(?=\s|$)")
_QNH_RE = re.compile(r"Q(\d{4})")
_ALTIMETER_RE = re.compile(r"A(\d{4})")
_CEILING_RE = re.compile(r"(BKN|OVC)(\d{3})")
_OBSERVATION_TIME_RE = re.compile(r"\s(\d{2})(\d{2})(\d{2})Z(?=\s|$)")
_STATION_RE = re.compile(r"^[A-Z][A-Z0-9]{3}$")

_CALM_GROUP = "00000KT"
_UNLIMITED_CEILING_TOKENS = ("CLR", "SKC", "CAVOK")


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    if value < 0:
        return -floor(-value + 0.5)
    return floor(value + 0.5)


class WeatherParser:
    """
    Decode METAR reports into WeatherReport objects.

    Each field comes from its own pattern over the raw text; a pattern that
    does not match leaves only that field empty. The per-group visibility
    helpers and the ceiling helper are shared with WeatherAnalyzer.

    Example:
        report = WeatherParser.parse_metar(
            "KJFK 291851Z 27015G25KT 3SM RA BKN008 OVC015 12/08 Q1013"
        )
    """

    @classmethod
    def parse_metar(
        cls,
        raw_text: str,
        reference_time: Optional[datetime] = None,
    ) -> WeatherReport:
        """
        Parse a METAR string.

        Args:
            raw_text: Raw METAR text (may include "METAR" or "SPECI" prefix)
            reference_time: Time used to resolve the day-of-month of the
                observation group; defaults to now (UTC)

        Returns:
            WeatherReport with independently optional fields

        Raises:
            EmptyReportError: if the text is empty or whitespace only
        """
        text = cls.normalize(raw_text)
        report_type, icao = cls._extract_header(text)
        temperature, dewpoint = cls.extract_temperature(text)
        ceiling, unlimited = cls.extract_ceiling(text)

        report = WeatherReport(
            raw_text=text,
            icao=icao,
            report_type=report_type,
            observation_time=cls.extract_observation_time(text, reference_time),
            temperature=temperature,
            dewpoint=dewpoint,
            wind=cls.extract_wind(text),
            visibility=cls.extract_visibility(text),
            pressure=cls.extract_pressure(text),
            ceiling_ft=ceiling,
            ceiling_unlimited=unlimited,
            phenomena=phenomena_in(text),
            condition=condition_for(text),
        )
        logger.debug("Decoded %s: %s", report.icao or "report", report.to_dict())
        return report

    @staticmethod
    def normalize(raw_text: Optional[str]) -> str:
        """
        Trim a raw report.

        Raises:
            EmptyReportError: if nothing is left
        """
        text = (raw_text or "").strip()
        if not text:
            raise EmptyReportError()
        return text

    # --- Field extraction helpers ---

    @classmethod
    def _extract_header(cls, text: str) -> Tuple[WeatherType, str]:
        """Report type and station from the leading tokens."""
        tokens = text.split()
        report_type = WeatherType.METAR
        if tokens and tokens[0] in ("METAR", "SPECI"):
            report_type = WeatherType(tokens[0])
            tokens = tokens[1:]
        if tokens and tokens[0] == "COR":
            tokens = tokens[1:]

        icao = ""
        if tokens and _STATION_RE.match(tokens[0]):
            icao = tokens[0]
        return report_type, icao

    @classmethod
    def extract_observation_time(
        cls,
        text: str,
        reference_time: Optional[datetime] = None,
    ) -> Optional[datetime]:
        """
        Resolve the ``ddhhmmZ`` group to a UTC datetime.

        The report is assumed to be from the reference month, or the month
        before when its day is later than the reference day.
        """
        match = _OBSERVATION_TIME_RE.search(text)
        if not match:
            return None

        day, hour, minute = (int(g) for g in match.groups())
        ref = reference_time or datetime.now(timezone.utc)
        if day > ref.day:
            ref = ref - relativedelta(months=1)

        try:
            return datetime(ref.year, ref.month, day, hour, minute, tzinfo=timezone.utc)
        except ValueError:
            logger.debug("Invalid observation time group %s", match.group(0).strip())
            return None

    @classmethod
    def extract_temperature(cls, text: str) -> Tuple[Optional[int], Optional[int]]:
        """Temperature and dewpoint in Celsius from a ``[M]dd/[M]dd`` group."""
        match = _TEMPERATURE_RE.search(text)
        if not match:
            return None, None
        return _signed(match.group(1)), _signed(match.group(2))

    @classmethod
    def extract_wind(cls, text: str) -> Optional[Wind]:
        """Wind from a ``(ddd|VRB)ss[Ggg]KT`` group, calm for ``00000KT``."""
        match = _WIND_RE.search(text)
        if not match:
            if _CALM_GROUP in text:
                return Wind.calm_wind()
            return None

        direction, speed, gust = match.groups()
        if direction == "000" and int(speed) == 0 and gust is None:
            return Wind.calm_wind()

        variable = direction == "VRB"
        return Wind(
            direction=None if variable else int(direction),
            speed=int(speed),
            gust=int(gust) if gust else None,
            variable=variable,
        )

    @classmethod
    def extract_visibility(cls, text: str) -> Optional[Visibility]:
        """
        Prevailing visibility; CAVOK, then a metric group, then statute miles.

        A metric ``9999`` means more than 10 km. Its statute mile value is
        still the plain conversion of the reported meters.
        """
        if cls.is_cavok(text):
            return Visibility(
                statute_miles=OPEN_ENDED_VISIBILITY_SM,
                cavok=True,
                greater_than=True,
            )
        return cls.metric_visibility(text) or cls.statute_visibility(text)

    @staticmethod
    def is_cavok(text: str) -> bool:
        return "CAVOK" in text

    @staticmethod
    def metric_visibility(text: str) -> Optional[Visibility]:
        """First four-digit meters group, if any."""
        match = _VISIBILITY_METERS_RE.search(text)
        if not match:
            return None
        meters = int(match.group(1))
        return Visibility(
            meters=meters,
            statute_miles=meters / METERS_PER_SM,
            greater_than=meters >= 9999,
        )

    @staticmethod
    def statute_visibility(text: str) -> Optional[Visibility]:
        """First statute mile group (``3SM``, ``1/2SM``, ``P6SM``), if any."""
        match = _VISIBILITY_SM_RE.search(text)
        if not match:
            return None
        greater, whole, denominator = match.groups()
        if greater:
            return Visibility(statute_miles=OPEN_ENDED_VISIBILITY_SM, greater_than=True)
        if whole and denominator:
            if int(denominator) == 0:
                logger.debug("Ignoring visibility with zero denominator: %s", match.group(0).strip())
                return None
            return Visibility(statute_miles=int(whole) / int(denominator))
        if whole:
            return Visibility(statute_miles=float(whole))
        return None

    @classmethod
    def extract_pressure(cls, text: str) -> Optional[Pressure]:
        """Altimeter setting, ``Q`` groups preferred over ``A`` groups."""
        match = _QNH_RE.search(text)
        if match:
            return Pressure(hpa=int(match.group(1)), source_unit="Q")

        match = _ALTIMETER_RE.search(text)
        if match:
            inhg = int(match.group(1)) / 100
            return Pressure(
                hpa=round_half_up(inhg * HPA_PER_INHG),
                source_unit="A",
                inhg=inhg,
            )
        return None

    @classmethod
    def extract_ceiling(cls, text: str) -> Tuple[Optional[int], bool]:
        """
        Ceiling from cloud layers.

        Ceiling is the lowest BKN (broken) or OVC (overcast) layer. CLR, SKC
        or CAVOK anywhere in the text makes it unlimited, whatever layers are
        reported.

        Returns:
            (ceiling_ft, unlimited), ceiling_ft None if no ceiling reported
        """
        if any(token in text for token in _UNLIMITED_CEILING_TOKENS):
            return UNLIMITED_CEILING_FT, True

        ceiling = None
        for _, height in _CEILING_RE.findall(text):
            feet = int(height) * 100
            if ceiling is None or feet < ceiling:
                ceiling = feet
        return ceiling, False


def _signed(value: str) -> int:
    """Convert ``M05`` style values to -5."""
    if value.startswith("M"):
        return -int(value[1:])
    return int(value)
