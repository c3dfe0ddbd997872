"""Weather report data models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, FrozenSet, Iterator, Any


# Ceiling reported for CLR/SKC/CAVOK, above any real cloud base
UNLIMITED_CEILING_FT = 99999


class FlightCategory(Enum):
    """
    FAA flight category based on ceiling and visibility.

    Ordered from best to worst: VFR < MVFR < IFR < LIFR, so ``max()``
    of several categories is the most restrictive one.

    Default thresholds (ceiling OR visibility, whichever is worse):
        LIFR:  visibility < 1 SM  or  ceiling < 500 ft
        IFR:   1 <= vis < 3 SM    or  500 <= ceiling < 1000 ft
        MVFR:  3 <= vis < 5 SM    or  1000 <= ceiling < 3000 ft
        VFR:   otherwise
    """

    VFR = "VFR"
    MVFR = "MVFR"
    IFR = "IFR"
    LIFR = "LIFR"

    @property
    def order(self) -> int:
        """Numeric ordering from least (0) to most (3) restrictive."""
        return _CATEGORY_ORDER[self]

    @property
    def color(self) -> str:
        """Display color used for the category indicator."""
        return _CATEGORY_COLORS[self]

    def __lt__(self, other: 'FlightCategory') -> bool:
        if not isinstance(other, FlightCategory):
            return NotImplemented
        return self.order < other.order

    def __le__(self, other: 'FlightCategory') -> bool:
        if not isinstance(other, FlightCategory):
            return NotImplemented
        return self.order <= other.order

    def __gt__(self, other: 'FlightCategory') -> bool:
        if not isinstance(other, FlightCategory):
            return NotImplemented
        return self.order > other.order

    def __ge__(self, other: 'FlightCategory') -> bool:
        if not isinstance(other, FlightCategory):
            return NotImplemented
        return self.order >= other.order


_CATEGORY_ORDER = {
    FlightCategory.VFR: 0,
    FlightCategory.MVFR: 1,
    FlightCategory.IFR: 2,
    FlightCategory.LIFR: 3,
}

_CATEGORY_COLORS = {
    FlightCategory.VFR: "#00ff00",
    FlightCategory.MVFR: "#0080ff",
    FlightCategory.IFR: "#ff0000",
    FlightCategory.LIFR: "#ff00ff",
}


class ConditionTag(Enum):
    """Coarse weather condition shown next to the station."""

    THUNDERSTORM = "thunderstorm"
    SNOW = "snow"
    RAIN = "rain"
    FOG = "fog"
    OVERCAST = "overcast"
    FEW_CLOUDS = "few-clouds"
    CLEAR = "clear"

    @property
    def icon_name(self) -> str:
        return _CONDITION_ICONS[self]


_CONDITION_ICONS = {
    ConditionTag.THUNDERSTORM: "weather-storm-symbolic",
    ConditionTag.SNOW: "weather-snow-symbolic",
    ConditionTag.RAIN: "weather-showers-symbolic",
    ConditionTag.FOG: "weather-fog-symbolic",
    ConditionTag.OVERCAST: "weather-overcast-symbolic",
    ConditionTag.FEW_CLOUDS: "weather-few-clouds-symbolic",
    ConditionTag.CLEAR: "weather-clear-symbolic",
}


class WeatherType(Enum):
    """Type of weather report."""

    METAR = "METAR"
    SPECI = "SPECI"


@dataclass(frozen=True)
class Wind:
    """
    Surface wind from a ``dddssGggKT`` group.

    Attributes:
        direction: Direction in degrees, None when variable or calm
        speed: Speed in knots
        gust: Gust speed in knots
        variable: True for a ``VRB`` direction
        calm: True for a ``00000KT`` group
    """

    direction: Optional[int] = None
    speed: int = 0
    gust: Optional[int] = None
    variable: bool = False
    calm: bool = False

    @classmethod
    def calm_wind(cls) -> 'Wind':
        return cls(direction=None, speed=0, calm=True)

    def to_dict(self) -> dict:
        return {
            'direction': self.direction,
            'speed': self.speed,
            'gust': self.gust,
            'variable': self.variable,
            'calm': self.calm,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Wind':
        return cls(
            direction=data.get('direction'),
            speed=data.get('speed', 0),
            gust=data.get('gust'),
            variable=data.get('variable', False),
            calm=data.get('calm', False),
        )


@dataclass(frozen=True)
class Visibility:
    """
    Prevailing visibility.

    Metric groups keep the reported meters and carry the converted statute
    miles; US groups only carry statute miles. ``greater_than`` marks the
    open-ended encodings (``9999``, ``P6SM``, CAVOK).
    """

    meters: Optional[int] = None
    statute_miles: Optional[float] = None
    cavok: bool = False
    greater_than: bool = False

    def to_dict(self) -> dict:
        return {
            'meters': self.meters,
            'statute_miles': self.statute_miles,
            'cavok': self.cavok,
            'greater_than': self.greater_than,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Visibility':
        return cls(
            meters=data.get('meters'),
            statute_miles=data.get('statute_miles'),
            cavok=data.get('cavok', False),
            greater_than=data.get('greater_than', False),
        )


@dataclass(frozen=True)
class Pressure:
    """Altimeter setting normalised to hectopascals."""

    hpa: int
    source_unit: str = "Q"  # "Q" (hPa) or "A" (hundredths of inHg)
    inhg: Optional[float] = None

    def to_dict(self) -> dict:
        return {
            'hpa': self.hpa,
            'source_unit': self.source_unit,
            'inhg': self.inhg,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Pressure':
        return cls(
            hpa=data['hpa'],
            source_unit=data.get('source_unit', 'Q'),
            inhg=data.get('inhg'),
        )


@dataclass(frozen=True)
class FlightRulesThresholds:
    """
    Visibility (statute miles) and ceiling (feet) limits for each category.

    Values are taken as given: nothing checks that the VFR limits are above
    the MVFR ones, so odd settings still classify deterministically.
    """

    vfr_visibility: float = 5.0
    vfr_ceiling: int = 3000
    mvfr_visibility: float = 3.0
    mvfr_ceiling: int = 1000
    ifr_visibility: float = 1.0
    ifr_ceiling: int = 500

    def to_dict(self) -> dict:
        return {
            'vfr-visibility': self.vfr_visibility,
            'vfr-ceiling': self.vfr_ceiling,
            'mvfr-visibility': self.mvfr_visibility,
            'mvfr-ceiling': self.mvfr_ceiling,
            'ifr-visibility': self.ifr_visibility,
            'ifr-ceiling': self.ifr_ceiling,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'FlightRulesThresholds':
        defaults = cls()
        return cls(
            vfr_visibility=float(data.get('vfr-visibility', defaults.vfr_visibility)),
            vfr_ceiling=int(data.get('vfr-ceiling', defaults.vfr_ceiling)),
            mvfr_visibility=float(data.get('mvfr-visibility', defaults.mvfr_visibility)),
            mvfr_ceiling=int(data.get('mvfr-ceiling', defaults.mvfr_ceiling)),
            ifr_visibility=float(data.get('ifr-visibility', defaults.ifr_visibility)),
            ifr_ceiling=int(data.get('ifr-ceiling', defaults.ifr_ceiling)),
        )


@dataclass(frozen=True)
class FlightCategoryResult:
    """
    Outcome of a flight category classification.

    Unpacks as ``category, detail``.

    Attributes:
        category: Most restrictive of the visibility and ceiling categories
        detail: Label such as ``"IFR (Vis: 3.0 SM, Ceil: 800 ft)"``
        visibility_sm: Visibility used, None if not reported
        ceiling_ft: Ceiling used, None if not reported
    """

    category: FlightCategory
    detail: str
    visibility_sm: Optional[float] = None
    ceiling_ft: Optional[int] = None

    def __iter__(self) -> Iterator[Any]:
        return iter((self.category, self.detail))

    def to_dict(self) -> dict:
        return {
            'flight_category': self.category.value,
            'detail': self.detail,
            'visibility_sm': self.visibility_sm,
            'ceiling_ft': self.ceiling_ft,
        }


@dataclass
class WeatherReport:
    """
    Decoded METAR.

    Every field is extracted independently from the raw text; a field the
    text does not carry is left as None without affecting the others.

    Attributes:
        raw_text: Trimmed report text
        icao: Station identifier (first token after METAR/SPECI/COR)
        report_type: METAR or SPECI
        observation_time: UTC time of the ``ddhhmmZ`` group
        temperature: Temperature in Celsius
        dewpoint: Dewpoint in Celsius (set together with temperature)
        wind: Surface wind, calm for ``00000KT``
        visibility: Prevailing visibility
        pressure: Altimeter setting
        ceiling_ft: Lowest BKN/OVC base, UNLIMITED_CEILING_FT for CLR/SKC/CAVOK
        ceiling_unlimited: True when the ceiling is the unlimited sentinel
        phenomena: Every condition tag whose keywords appear in the text
        condition: Highest priority condition tag
    """

    raw_text: str = ""
    icao: str = ""
    report_type: WeatherType = WeatherType.METAR
    observation_time: Optional[datetime] = None

    temperature: Optional[int] = None
    dewpoint: Optional[int] = None

    wind: Optional[Wind] = None
    visibility: Optional[Visibility] = None
    pressure: Optional[Pressure] = None

    ceiling_ft: Optional[int] = None
    ceiling_unlimited: bool = False

    phenomena: FrozenSet[ConditionTag] = field(default_factory=frozenset)
    condition: ConditionTag = ConditionTag.CLEAR

    @classmethod
    def from_metar(cls, raw_text: str) -> 'WeatherReport':
        """
        Decode a METAR string.

        Raises:
            EmptyReportError: if the text is empty after trimming
        """
        from aviation_weather.weather.parser import WeatherParser
        return WeatherParser.parse_metar(raw_text)

    def to_dict(self) -> dict:
        """Serialize to dictionary for JSON export."""
        return {
            'raw_text': self.raw_text,
            'icao': self.icao,
            'report_type': self.report_type.value if self.report_type else None,
            'observation_time': self.observation_time.isoformat() if self.observation_time else None,
            'temperature': self.temperature,
            'dewpoint': self.dewpoint,
            'wind': self.wind.to_dict() if self.wind else None,
            'visibility': self.visibility.to_dict() if self.visibility else None,
            'pressure': self.pressure.to_dict() if self.pressure else None,
            'ceiling_ft': self.ceiling_ft,
            'ceiling_unlimited': self.ceiling_unlimited,
            'phenomena': sorted(tag.value for tag in self.phenomena),
            'condition': self.condition.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'WeatherReport':
        """Create WeatherReport from dictionary."""
        observation_time = None
        if data.get('observation_time'):
            observation_time = datetime.fromisoformat(data['observation_time'])

        report_type = WeatherType.METAR
        if data.get('report_type'):
            try:
                report_type = WeatherType(data['report_type'])
            except ValueError:
                pass

        wind = Wind.from_dict(data['wind']) if data.get('wind') else None
        visibility = Visibility.from_dict(data['visibility']) if data.get('visibility') else None
        pressure = Pressure.from_dict(data['pressure']) if data.get('pressure') else None

        return cls(
            raw_text=data.get('raw_text', ''),
            icao=data.get('icao', ''),
            report_type=report_type,
            observation_time=observation_time,
            temperature=data.get('temperature'),
            dewpoint=data.get('dewpoint'),
            wind=wind,
            visibility=visibility,
            pressure=pressure,
            ceiling_ft=data.get('ceiling_ft'),
            ceiling_unlimited=data.get('ceiling_unlimited', False),
            phenomena=frozenset(ConditionTag(v) for v in data.get('phenomena', [])),
            condition=ConditionTag(data.get('condition', ConditionTag.CLEAR.value)),
        )

    def __repr__(self) -> str:
        return f"WeatherReport({self.report_type.value} {self.icao})"
