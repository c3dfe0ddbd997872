"""Tests for weather analysis: flight categories."""

import pytest

from aviation_weather.exceptions import EmptyReportError
from aviation_weather.weather.models import (
    FlightCategory,
    FlightRulesThresholds,
    UNLIMITED_CEILING_FT,
)
from aviation_weather.weather.analysis import WeatherAnalyzer
from aviation_weather.weather.parser import WeatherParser


FAA = FlightRulesThresholds()


def _metar(visibility: str = "10SM", sky: str = "CLR") -> str:
    return f"KXYZ 291851Z 27005KT {visibility} {sky} 12/08 A3001"


class TestFlightCategory:
    """Test flight category determination from raw reports."""

    def test_reference_report_is_ceiling_driven_ifr(self, jfk_metar):
        result = WeatherAnalyzer.flight_category(jfk_metar, FAA)

        assert result.category == FlightCategory.IFR
        assert result.detail == "IFR (Vis: 3.0 SM, Ceil: 800 ft)"
        assert result.visibility_sm == 3.0
        assert result.ceiling_ft == 800

    def test_result_unpacks_to_pair(self, jfk_metar):
        category, detail = WeatherAnalyzer.flight_category(jfk_metar, FAA)
        assert category == FlightCategory.IFR
        assert detail.startswith("IFR")

    def test_default_thresholds(self, jfk_metar):
        assert WeatherAnalyzer.flight_category(jfk_metar).category == FlightCategory.IFR

    def test_vfr_clear(self):
        result = WeatherAnalyzer.flight_category(_metar("10SM", "CLR"), FAA)
        assert result.category == FlightCategory.VFR
        assert result.detail == "VFR (Vis: 10.0 SM)"

    def test_cavok_is_vfr_despite_low_cloud(self):
        raw = "LFPG 211230Z 24005KT CAVOK BKN002 20/10 Q1015"
        result = WeatherAnalyzer.flight_category(raw, FAA)
        assert result.category == FlightCategory.VFR
        assert result.visibility_sm == 10.0
        assert result.ceiling_ft == UNLIMITED_CEILING_FT
        assert result.detail == "VFR (Vis: 10.0 SM)"

    def test_9999_converted_from_meters(self):
        raw = "EGLL 211250Z 27010KT 9999 FEW030 15/08 Q1020"
        result = WeatherAnalyzer.flight_category(raw, FAA)
        assert result.category == FlightCategory.VFR
        assert result.detail == "VFR (Vis: 6.2 SM)"

    def test_metric_visibility(self):
        raw = "EGLL 211250Z 27010KT 3000 BR BKN040 10/09 Q1012"
        result = WeatherAnalyzer.flight_category(raw, FAA)
        # 3000 m = 1.86 SM
        assert result.category == FlightCategory.IFR
        assert result.detail == "IFR (Vis: 1.9 SM, Ceil: 4000 ft)"

    def test_ceiling_only(self):
        raw = "KXYZ 291851Z 27005KT OVC015 12/08"
        result = WeatherAnalyzer.flight_category(raw, FAA)
        assert result.category == FlightCategory.MVFR
        assert result.visibility_sm is None
        assert result.detail == "MVFR (Ceil: 1500 ft)"

    def test_no_signals_is_vfr(self):
        result = WeatherAnalyzer.flight_category("ZZZZ 123", FAA)
        assert result.category == FlightCategory.VFR
        assert result.detail == "VFR"

    def test_lifr_visibility(self):
        raw = "KSFO 291856Z 00000KT 1/4SM FG VV001 10/10 A2990"
        result = WeatherAnalyzer.flight_category(raw, FAA)
        assert result.category == FlightCategory.LIFR
        assert result.ceiling_ft is None
        assert result.detail.startswith("LIFR (Vis: ")

    def test_lifr_ceiling(self):
        result = WeatherAnalyzer.flight_category(_metar("10SM", "OVC002"), FAA)
        assert result.category == FlightCategory.LIFR

    def test_mvfr_visibility_ifr_ceiling_gives_ifr(self):
        result = WeatherAnalyzer.flight_category(_metar("4SM", "BKN007"), FAA)
        assert result.category == FlightCategory.IFR

    def test_ifr_visibility_mvfr_ceiling_gives_ifr(self):
        result = WeatherAnalyzer.flight_category(_metar("2SM", "BKN020"), FAA)
        assert result.category == FlightCategory.IFR

    def test_empty_raises(self):
        with pytest.raises(EmptyReportError):
            WeatherAnalyzer.flight_category("  ", FAA)

    def test_thresholds_not_mutated(self, jfk_metar):
        thresholds = FlightRulesThresholds(vfr_visibility=6.0)
        WeatherAnalyzer.flight_category(jfk_metar, thresholds)
        assert thresholds == FlightRulesThresholds(vfr_visibility=6.0)

    def test_repeated_calls_identical(self, jfk_metar):
        first = WeatherAnalyzer.flight_category(jfk_metar, FAA)
        second = WeatherAnalyzer.flight_category(jfk_metar, FAA)
        assert first == second


class TestThresholdBoundaries:
    """Limits are exclusive: a value equal to a limit is in the better category."""

    @pytest.mark.parametrize("visibility,expected", [
        ("10SM", FlightCategory.VFR),
        ("5SM", FlightCategory.VFR),
        ("4SM", FlightCategory.MVFR),
        ("3SM", FlightCategory.MVFR),
        ("2SM", FlightCategory.IFR),
        ("1SM", FlightCategory.IFR),
        ("3/4SM", FlightCategory.LIFR),
    ])
    def test_visibility(self, visibility, expected):
        assert WeatherAnalyzer.flight_category(_metar(visibility), FAA).category == expected

    @pytest.mark.parametrize("sky,expected", [
        ("BKN030", FlightCategory.VFR),
        ("BKN029", FlightCategory.MVFR),
        ("OVC010", FlightCategory.MVFR),
        ("OVC009", FlightCategory.IFR),
        ("BKN005", FlightCategory.IFR),
        ("BKN004", FlightCategory.LIFR),
    ])
    def test_ceiling(self, sky, expected):
        assert WeatherAnalyzer.flight_category(_metar("10SM", sky), FAA).category == expected


class TestAxisCategories:
    """Test the per-axis computations."""

    def test_missing_visibility_is_vfr(self):
        assert WeatherAnalyzer.category_for_visibility(None, FAA) == FlightCategory.VFR

    def test_missing_ceiling_is_vfr(self):
        assert WeatherAnalyzer.category_for_ceiling(None, FAA) == FlightCategory.VFR

    def test_unlimited_ceiling_is_vfr(self):
        assert WeatherAnalyzer.category_for_ceiling(UNLIMITED_CEILING_FT, FAA) == FlightCategory.VFR

    @pytest.mark.parametrize("ceiling", [100, 3000, 20000])
    def test_low_visibility_always_lifr(self, ceiling):
        for vis in (0.99, 0.5, 0.25, 0.0):
            assert WeatherAnalyzer.category_for_visibility(vis, FAA) == FlightCategory.LIFR
            combined = max(
                WeatherAnalyzer.category_for_visibility(vis, FAA),
                WeatherAnalyzer.category_for_ceiling(ceiling, FAA),
            )
            assert combined == FlightCategory.LIFR

    def test_non_monotonic_thresholds_are_deterministic(self):
        odd = FlightRulesThresholds(
            vfr_visibility=1.0, vfr_ceiling=500,
            mvfr_visibility=3.0, mvfr_ceiling=1000,
            ifr_visibility=5.0, ifr_ceiling=3000,
        )
        # 4 SM is below the IFR limit of 5 SM
        assert WeatherAnalyzer.category_for_visibility(4.0, odd) == FlightCategory.LIFR
        assert WeatherAnalyzer.category_for_visibility(6.0, odd) == FlightCategory.VFR
        first = WeatherAnalyzer.flight_category(_metar("4SM", "BKN020"), odd)
        second = WeatherAnalyzer.flight_category(_metar("4SM", "BKN020"), odd)
        assert first == second
        assert first.category == FlightCategory.LIFR


class TestDecoderAgreement:
    """With a single visibility group, classification reads what the decoder reads."""

    @pytest.mark.parametrize("raw", [
        "KJFK 291851Z 27015G25KT 3SM RA BKN008 OVC015 12/08 Q1013",
        "EGLL 211250Z 27010KT 9999 SCT030 BKN045 15/08 Q1020",
        "LFPG 211230Z 24005KT CAVOK 20/10 Q1015",
        "KSFO 291856Z 00000KT 1/2SM FG OVC002 10/10 A2990",
        "KLAX 291853Z 25010KT P6SM FEW250 22/12 A2995",
        "EDDM 211250Z 27010KT 0800 FG VV002 M01/M01 Q1025",
        "ZZZZ 123",
    ])
    def test_visibility_and_ceiling_match(self, raw):
        report = WeatherParser.parse_metar(raw)
        result = WeatherAnalyzer.flight_category(raw, FAA)

        expected_vis = report.visibility.statute_miles if report.visibility else None
        assert result.visibility_sm == expected_vis
        assert result.ceiling_ft == report.ceiling_ft


class TestVisibilityOverride:
    """Later visibility signals replace earlier ones when classifying."""

    def test_statute_miles_replace_meters(self):
        raw = "KXYZ 291853Z 25010KT 1600 1SM OVC040 12/08 A3001"
        result = WeatherAnalyzer.flight_category(raw, FAA)

        assert result.category == FlightCategory.IFR
        assert result.visibility_sm == 1.0
        assert result.detail == "IFR (Vis: 1.0 SM, Ceil: 4000 ft)"

    def test_decoder_keeps_first_group(self):
        raw = "KXYZ 291853Z 25010KT 1600 1SM OVC040 12/08 A3001"
        report = WeatherParser.parse_metar(raw)

        assert report.visibility.meters == 1600
        assert WeatherAnalyzer.visibility_sm(raw) == 1.0

    def test_cavok_replaces_both(self):
        assert WeatherAnalyzer.visibility_sm("EDDM 211250Z 27010KT 0800 1/2SM CAVOK") == 10.0

    def test_meters_only(self):
        assert WeatherAnalyzer.visibility_sm("EDDM 211250Z 27010KT 0800 FG") == 800 / 1609.34

    def test_zero_denominator_keeps_meters(self):
        assert WeatherAnalyzer.visibility_sm("KXYZ 291853Z 1600 1/0SM OVC040") == 1600 / 1609.34

    def test_no_visibility(self):
        assert WeatherAnalyzer.visibility_sm("KXYZ 291853Z OVC040") is None
