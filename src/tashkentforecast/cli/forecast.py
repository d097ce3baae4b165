#!/usr/bin/env python
"""
CLI for class price forecasts.

Usage:
    python -m tashkentforecast.cli.forecast
    python -m tashkentforecast.cli.forecast --activity 0.7
    python -m tashkentforecast.cli.forecast --sheet-file response.txt --json
"""

import argparse
import json
import sys

from tashkentforecast.config import get_config
from tashkentforecast.core.models import MarketAnalysis
from tashkentforecast.exceptions import TashkentForecastError
from tashkentforecast.logging_config import setup_logging, get_logger
from tashkentforecast.utils.price_parser import format_change, format_price


def print_report(analysis: MarketAnalysis, market_activity: float) -> None:
    """Print class statistics and forecast tables."""
    print("\n" + "=" * 60)
    print("Tashkent Housing Price Forecast")
    print("=" * 60)
    print(f"\nComplexes: {len(analysis.all_entities)}")
    print(f"Periods: {', '.join(c.period for c in analysis.price_columns)}")
    print(f"Market activity: {market_activity:.2f}")

    print("\nBy class:")
    for category, stats in analysis.class_stats.items():
        print(
            f"  {category:<10} {stats.count:>3} ЖК  avg {format_price(stats.avg):>10}"
            f"  min {format_price(stats.min):>10}  max {format_price(stats.max):>10}"
            f"  trend {format_change(stats.avg_trend * 100)}"
        )

    if analysis.district_stats:
        print("\nBy district:")
        for region, stats in analysis.district_stats.items():
            print(f"  {str(region):<20} {stats.count:>3} ЖК  avg {format_price(stats.avg):>10}")

    for category, table in analysis.forecasts.items():
        print(f"\nForecast: {category} (current {format_price(table.current)})")
        for point in table.forecast:
            print(f"  +{point.months:>2} mo  {format_price(point.price):>10}  {format_change(point.change)}")
    print()


def main(argv=None):
    """Main entry point for the forecast CLI."""
    parser = argparse.ArgumentParser(
        description="Forecast Tashkent residential prices by housing class",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python -m tashkentforecast.cli.forecast
    python -m tashkentforecast.cli.forecast --activity 0.7
    python -m tashkentforecast.cli.forecast --sheet-file response.txt --json
        """,
    )
    parser.add_argument(
        "--sheet-file",
        type=str,
        default=None,
        help="Read a saved sheet response instead of fetching",
    )
    parser.add_argument(
        "--activity",
        type=float,
        default=None,
        help="Market activity 0-1 (default: from config or 0.5)",
    )
    parser.add_argument("--json", action="store_true", help="Output as JSON")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Set log level (default: WARNING)",
    )

    args = parser.parse_args(argv)

    setup_logging(level=args.log_level, force=True)
    logger = get_logger(__name__)

    market_activity = args.activity
    if market_activity is None:
        market_activity = get_config().forecast.market_activity

    try:
        from tashkentforecast.pipeline.analysis import analyze
        from tashkentforecast.source.sheets import load_sheet, load_sheet_file

        table = load_sheet_file(args.sheet_file) if args.sheet_file else load_sheet()
        analysis = analyze(table.headers, table.rows, market_activity=market_activity)

        if args.json:
            print(json.dumps(analysis.to_dict(), indent=2, ensure_ascii=False))
        else:
            print_report(analysis, market_activity)

    except TashkentForecastError as e:
        logger.error("Forecast failed: %s", e)
        if args.json:
            print(json.dumps({"error": e.message}, ensure_ascii=False))
        else:
            print(f"Error: {e.message}")
        sys.exit(1)


if __name__ == "__main__":
    main()
