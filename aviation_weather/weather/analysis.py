"""Weather analysis: flight categories from visibility and ceiling."""

import logging
from typing import Optional

from aviation_weather.weather.models import (
    FlightCategory,
    FlightCategoryResult,
    FlightRulesThresholds,
    UNLIMITED_CEILING_FT,
)
from aviation_weather.weather.parser import WeatherParser, OPEN_ENDED_VISIBILITY_SM

logger = logging.getLogger(__name__)


class WeatherAnalyzer:
    """
    Aviation weather analysis functions.

    All methods are static and hold no state.
    """

    @staticmethod
    def flight_category(
        raw_text: str,
        thresholds: Optional[FlightRulesThresholds] = None,
    ) -> FlightCategoryResult:
        """
        Determine flight category from ceiling and visibility.

        Visibility and ceiling are read from the raw text. Each gives a
        category on its own; the more restrictive of the two is the result.
        A signal missing from the report counts as VFR for its axis.

        Args:
            raw_text: Raw METAR text
            thresholds: Category limits, FAA defaults if omitted

        Returns:
            FlightCategoryResult, unpackable as (category, detail)

        Raises:
            EmptyReportError: if the text is empty or whitespace only
        """
        thresholds = thresholds or FlightRulesThresholds()
        text = WeatherParser.normalize(raw_text)

        vis_sm = WeatherAnalyzer.visibility_sm(text)
        ceiling, _ = WeatherParser.extract_ceiling(text)

        vis_cat = WeatherAnalyzer.category_for_visibility(vis_sm, thresholds)
        ceil_cat = WeatherAnalyzer.category_for_ceiling(ceiling, thresholds)
        category = max(vis_cat, ceil_cat)

        logger.debug(
            "Category %s (visibility %s -> %s, ceiling %s -> %s)",
            category.value, vis_sm, vis_cat.value, ceiling, ceil_cat.value,
        )
        return FlightCategoryResult(
            category=category,
            detail=_detail(category, vis_sm, ceiling),
            visibility_sm=vis_sm,
            ceiling_ft=ceiling,
        )

    @staticmethod
    def visibility_sm(text: str) -> Optional[float]:
        """
        Visibility in statute miles as used for the flight category.

        Unlike the decoder, later signals override earlier ones: a statute
        mile group replaces a metric group, and CAVOK replaces both.
        """
        vis_sm = None
        metric = WeatherParser.metric_visibility(text)
        if metric:
            vis_sm = metric.statute_miles
        statute = WeatherParser.statute_visibility(text)
        if statute:
            vis_sm = statute.statute_miles
        if WeatherParser.is_cavok(text):
            vis_sm = OPEN_ENDED_VISIBILITY_SM
        return vis_sm

    @staticmethod
    def category_for_visibility(
        visibility_sm: Optional[float],
        thresholds: FlightRulesThresholds,
    ) -> FlightCategory:
        """Category from visibility alone, VFR when not reported."""
        if visibility_sm is None:
            return FlightCategory.VFR
        if visibility_sm < thresholds.ifr_visibility:
            return FlightCategory.LIFR
        if visibility_sm < thresholds.mvfr_visibility:
            return FlightCategory.IFR
        if visibility_sm < thresholds.vfr_visibility:
            return FlightCategory.MVFR
        return FlightCategory.VFR

    @staticmethod
    def category_for_ceiling(
        ceiling_ft: Optional[int],
        thresholds: FlightRulesThresholds,
    ) -> FlightCategory:
        """Category from ceiling alone, VFR when not reported."""
        if ceiling_ft is None:
            return FlightCategory.VFR
        if ceiling_ft < thresholds.ifr_ceiling:
            return FlightCategory.LIFR
        if ceiling_ft < thresholds.mvfr_ceiling:
            return FlightCategory.IFR
        if ceiling_ft < thresholds.vfr_ceiling:
            return FlightCategory.MVFR
        return FlightCategory.VFR


def _detail(
    category: FlightCategory,
    vis_sm: Optional[float],
    ceiling: Optional[int],
) -> str:
    """Category label with the visibility and ceiling that were available."""
    parts = []
    if vis_sm is not None:
        parts.append(f"Vis: {vis_sm:.1f} SM")
    if ceiling is not None and ceiling < UNLIMITED_CEILING_FT:
        parts.append(f"Ceil: {ceiling} ft")
    if not parts:
        return category.value
    return f"{category.value} ({', '.join(parts)})"
