#!/usr/bin/env python3

import sys
import json
import argparse
import logging
from typing import List, Optional

from aviation_weather.exceptions import AviationWeatherError
from aviation_weather.sources.avwx import AvWxSource
from aviation_weather.utils.settings import Settings, normalize_airport
from aviation_weather.weather.analysis import WeatherAnalyzer
from aviation_weather.weather.parser import WeatherParser
from aviation_weather.weather.summary import report_lines

logger = logging.getLogger(__name__)


class Command:
    """Fetch or read a METAR, decode and classify it, print the result."""

    def __init__(self, args, source: Optional[AvWxSource] = None):
        self.args = args
        self.settings = Settings.load(args.settings)
        self.airport = normalize_airport(args.airport) if args.airport else self.settings.airport
        self._source = source

    def raw_metar(self) -> str:
        if self.args.raw is not None:
            return self.args.raw
        source = self._source or AvWxSource()
        logger.info(f"Fetching METAR for {self.airport}")
        return source.fetch_raw_metar(self.airport)

    def run(self) -> None:
        raw = self.raw_metar()
        report = WeatherParser.parse_metar(raw)
        result = WeatherAnalyzer.flight_category(raw, self.settings.thresholds)

        if self.args.json:
            print(json.dumps({
                'report': report.to_dict(),
                'flight_category': result.category.value,
                'detail': result.detail,
                'color': result.category.color,
                'icon': report.condition.icon_name,
            }, indent=2))
            return

        print(f"METAR {report.icao or self.airport}")
        print(report.raw_text)
        for label, value in report_lines(report, result):
            print(f"{label}: {value}")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description='Decode a METAR and compute its flight category')
    parser.add_argument('airport', nargs='?', help='ICAO airport code (default from settings)')
    parser.add_argument('-r', '--raw', help='Decode this METAR text instead of fetching one')
    parser.add_argument('-s', '--settings', help='Settings JSON file')
    parser.add_argument('-j', '--json', help='Print JSON instead of text', action='store_true')
    parser.add_argument('-v', '--verbose', help='Verbose output', action='store_true')

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        cmd = Command(args)
        cmd.run()
    except AviationWeatherError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
