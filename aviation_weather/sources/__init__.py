"""
Data sources for the aviation_weather library.

Sources retrieve raw report text; decoding is left to WeatherParser.
"""

from .avwx import AvWxSource

__all__ = ['AvWxSource']
