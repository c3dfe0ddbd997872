import os
import re
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Dict, Any, Union

from aviation_weather.exceptions import SettingsError
from aviation_weather.weather.models import FlightRulesThresholds

logger = logging.getLogger(__name__)

DEFAULT_AIRPORT = "EDMA"
DEFAULT_UPDATE_INTERVAL = 300
UPDATE_INTERVALS = (60, 120, 300, 600, 900)

SETTINGS_ENV = "AVIATION_WEATHER_SETTINGS"
AIRPORT_ENV = "AVIATION_WEATHER_AIRPORT"
UPDATE_INTERVAL_ENV = "AVIATION_WEATHER_UPDATE_INTERVAL"

_ICAO_RE = re.compile(r"^[A-Z]{4}$")


def default_settings_path() -> Path:
    """Settings file location, ``$AVIATION_WEATHER_SETTINGS`` if set."""
    env_path = os.getenv(SETTINGS_ENV)
    if env_path:
        return Path(env_path)
    return Path.home() / ".config" / "aviation_weather" / "settings.json"


def normalize_airport(airport: str) -> str:
    """
    Upper-case and validate an ICAO airport identifier.

    Raises:
        SettingsError: if the identifier is not four letters
    """
    code = (airport or "").strip().upper()
    if not _ICAO_RE.match(code):
        raise SettingsError(f"Invalid airport ICAO code: {airport!r}")
    return code


@dataclass
class Settings:
    """
    User settings: airport, update interval and flight rule thresholds.

    Stored as a flat JSON object using the keys ``airport``,
    ``update-interval``, ``vfr-visibility``, ``vfr-ceiling``,
    ``mvfr-visibility``, ``mvfr-ceiling``, ``ifr-visibility`` and
    ``ifr-ceiling``. Thresholds are not checked against each other.
    """

    airport: str = DEFAULT_AIRPORT
    update_interval: int = DEFAULT_UPDATE_INTERVAL
    thresholds: FlightRulesThresholds = field(default_factory=FlightRulesThresholds)

    @classmethod
    def load(cls, path: Optional[Union[str, Path]] = None) -> 'Settings':
        """
        Load settings from a JSON file, then apply environment overrides.

        A missing file gives the defaults.

        Args:
            path: Settings file, default_settings_path() if omitted

        Raises:
            SettingsError: if the file cannot be read, cannot be parsed or
                holds invalid values
        """
        settings_file = Path(path) if path else default_settings_path()
        data: Dict[str, Any] = {}
        if settings_file.exists():
            try:
                with open(settings_file) as f:
                    data = json.load(f)
            except json.JSONDecodeError as e:
                logger.error(f"Error parsing settings file {settings_file}")
                raise SettingsError(f"Invalid settings file {settings_file}: {e}") from e
            except (OSError, UnicodeDecodeError) as e:
                logger.error(f"Error reading settings file {settings_file}")
                raise SettingsError(f"Cannot read settings file {settings_file}: {e}") from e
            if not isinstance(data, dict):
                raise SettingsError(f"Settings file {settings_file} must contain a JSON object")
        else:
            logger.debug(f"No settings file at {settings_file}, using defaults")

        if os.getenv(AIRPORT_ENV):
            data['airport'] = os.getenv(AIRPORT_ENV)
        if os.getenv(UPDATE_INTERVAL_ENV):
            data['update-interval'] = os.getenv(UPDATE_INTERVAL_ENV)

        return cls.from_dict(data)

    def save(self, path: Optional[Union[str, Path]] = None) -> Path:
        """Write settings as JSON, creating parent directories."""
        settings_file = Path(path) if path else default_settings_path()
        settings_file.parent.mkdir(parents=True, exist_ok=True)
        with open(settings_file, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.info(f"Saved settings to {settings_file}")
        return settings_file

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            'airport': self.airport,
            'update-interval': self.update_interval,
        }
        data.update(self.thresholds.to_dict())
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Settings':
        """
        Build settings from the flat JSON keys.

        Raises:
            SettingsError: on an invalid airport, update interval or threshold
        """
        airport = normalize_airport(data.get('airport', DEFAULT_AIRPORT))

        try:
            update_interval = int(data.get('update-interval', DEFAULT_UPDATE_INTERVAL))
        except (TypeError, ValueError) as e:
            raise SettingsError(f"Invalid update interval: {data.get('update-interval')!r}") from e
        if update_interval not in UPDATE_INTERVALS:
            raise SettingsError(
                f"Update interval must be one of {UPDATE_INTERVALS}, got {update_interval}"
            )

        try:
            thresholds = FlightRulesThresholds.from_dict(data)
        except (TypeError, ValueError) as e:
            raise SettingsError(f"Invalid flight rules threshold: {e}") from e

        return cls(airport=airport, update_interval=update_interval, thresholds=thresholds)
