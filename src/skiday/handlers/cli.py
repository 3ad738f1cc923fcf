"""Command line ski day check.

Usage:
    skiday --city Munich --date 2026-01-17
    skiday --city Innsbruck --require-fresh-snow --min-fresh-snow 10 --json
"""

import argparse
import asyncio
import json
import math
import sys

from pydantic import ValidationError

from skiday.models.criteria import Criteria
from skiday.models.result import BatchResult, ReasonCode
from skiday.services.errors import NotFoundError, ProviderError, RateLimitedError
from skiday.services.ski_day_service import SORT_KEYS, check_ski_day, sort_results
from skiday.utils.config import Settings, configure_logging
from skiday.utils.dates import resolve_target_date

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_RATE_LIMITED = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Is the chosen day a good day to go skiing?"
    )
    parser.add_argument("--city", help="Starting city (default: configured city)")
    parser.add_argument("--date", help="Ski day as YYYY-MM-DD (default: tomorrow)")
    parser.add_argument("--max-distance", type=float, dest="max_distance_km")
    parser.add_argument("--min-temp", type=float, dest="min_temp")
    parser.add_argument("--max-temp", type=float, dest="max_temp")
    parser.add_argument("--max-wind", type=float, dest="max_wind_kmh")
    parser.add_argument("--min-snow-top", type=float, dest="min_snow_top_cm")
    parser.add_argument("--min-snow-bottom", type=float, dest="min_snow_bottom_cm")
    parser.add_argument("--require-fresh-snow", action="store_true")
    parser.add_argument("--min-fresh-snow", type=float, dest="min_fresh_snow_cm")
    parser.add_argument(
        "--sort", choices=SORT_KEYS, default="outcome", help="Result table sort column"
    )
    parser.add_argument("--ascending", action="store_true", help="Reverse sort order")
    parser.add_argument("--json", action="store_true", help="Print JSON instead of a table")
    return parser


def format_table(result: BatchResult, sort_key: str = "outcome", descending: bool = True) -> str:
    """Render the overall answer and the ranked resort table."""
    lines = [
        f"{result.target_date.isoformat()}: {result.overall_outcome.value}",
        result.reason.message(),
    ]
    if not result.lifts_open:
        lines.append("Note: the date is outside the ski season.")
    if not result.results:
        return "\n".join(lines)

    lines.append("")
    lines.append(
        f"{'Outcome':<9} {'Resort':<36} {'km':>5} {'Tmin':>5} {'Tmax':>5} "
        f"{'Wind':>5} {'Top':>5} {'Bot':>5} {'Fresh':>6}"
    )
    lines.append("-" * 92)
    for r in sort_results(result.results, sort_key, descending):
        w = r.weather
        lines.append(
            f"{r.outcome.value:<9} {r.resort.name[:36]:<36} {_num(r.distance_km):>5} "
            f"{_num(w.temp_min if w else None):>5} {_num(w.temp_max if w else None):>5} "
            f"{_num(w.wind_max if w else None):>5} {_num(w.snow_top_cm if w else None):>5} "
            f"{_num(w.snow_bottom_cm if w else None):>5} "
            f"{_num(w.fresh_snow_cm if w else None, 1):>6}"
        )
        if r.error:
            lines.append(f"{'':<9} {r.reason.message()}")
    return "\n".join(lines)


def _num(value: float | None, decimals: int = 0) -> str:
    if value is None or not math.isfinite(value):
        return "–"
    return f"{value:.{decimals}f}"


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings.from_env()
    configure_logging(settings.log_level)

    try:
        target_date = resolve_target_date(args.date)
        criteria = Criteria.from_form(
            max_distance_km=args.max_distance_km,
            min_temp=args.min_temp,
            max_temp=args.max_temp,
            max_wind_kmh=args.max_wind_kmh,
            min_snow_top_cm=args.min_snow_top_cm,
            min_snow_bottom_cm=args.min_snow_bottom_cm,
            require_fresh_snow=args.require_fresh_snow,
            min_fresh_snow_cm=args.min_fresh_snow_cm,
        )
    except (ValidationError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    city = args.city or settings.default_city
    try:
        result = asyncio.run(check_ski_day(city, target_date, criteria, settings))
    except RateLimitedError:
        print("Too many requests, please retry shortly.", file=sys.stderr)
        return EXIT_RATE_LIMITED
    except (NotFoundError, ProviderError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    if args.json:
        print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    else:
        print(format_table(result, args.sort, not args.ascending))

    if result.reason.code == ReasonCode.RATE_LIMITED:
        return EXIT_RATE_LIMITED
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
