"""Map raw METAR text to a coarse weather condition."""

from typing import FrozenSet, Tuple

from aviation_weather.weather.models import ConditionTag


# Highest priority first; the first tag with a keyword in the text wins.
CONDITION_KEYWORDS: Tuple[Tuple[ConditionTag, Tuple[str, ...]], ...] = (
    (ConditionTag.THUNDERSTORM, ("TS",)),
    (ConditionTag.SNOW, ("SN", "SG")),
    (ConditionTag.RAIN, ("RA", "DZ", "SH")),
    (ConditionTag.FOG, ("FG", "BR", "HZ")),
    (ConditionTag.OVERCAST, ("OVC", "BKN")),
    (ConditionTag.FEW_CLOUDS, ("SCT", "FEW")),
    (ConditionTag.CLEAR, ("CLR", "SKC", "CAVOK")),
)


def phenomena_in(raw_text: str) -> FrozenSet[ConditionTag]:
    """
    All condition tags with at least one keyword present in the text.

    Keywords are plain substring checks over the whole report, so a
    station identifier or remark containing e.g. ``RA`` also counts.
    """
    return frozenset(
        tag for tag, keywords in CONDITION_KEYWORDS
        if any(keyword in raw_text for keyword in keywords)
    )


def condition_for(raw_text: str) -> ConditionTag:
    """Return the highest priority condition tag, CLEAR if none match."""
    for tag, keywords in CONDITION_KEYWORDS:
        if any(keyword in raw_text for keyword in keywords):
            return tag
    return ConditionTag.CLEAR
