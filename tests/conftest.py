import pytest

from aviation_weather.utils import settings as settings_module

# Reference report: 3 SM in rain, broken at 800 ft
JFK_METAR = "KJFK 291851Z 27015G25KT 3SM RA BKN008 OVC015 12/08 Q1013"


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep the developer's settings environment out of the tests."""
    for name in (
        settings_module.SETTINGS_ENV,
        settings_module.AIRPORT_ENV,
        settings_module.UPDATE_INTERVAL_ENV,
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def jfk_metar() -> str:
    return JFK_METAR


@pytest.fixture
def settings_file(tmp_path):
    """Path to a not yet existing settings file."""
    return tmp_path / 'settings.json'
