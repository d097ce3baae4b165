#!/usr/bin/env python
"""
CLI for running the Price Forecast API Server.

The sheet is loaded once before serving unless --no-refresh is given;
clients can reload it at any time with POST /api/refresh.

Usage:
    python -m tashkentforecast.cli.api_server
    python -m tashkentforecast.cli.api_server --port 8080 --activity 0.7
    python -m tashkentforecast.cli.api_server --host 0.0.0.0 --no-refresh
"""

import argparse
import sys

from tashkentforecast.exceptions import ConfigurationError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Serve Tashkent class statistics and price forecasts over HTTP",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment:
    TASHKENTFORECAST_API_HOST, TASHKENTFORECAST_API_PORT, TASHKENTFORECAST_DEBUG
    TASHKENTFORECAST_SHEET_ID, TASHKENTFORECAST_SHEET_NAME
        """,
    )
    parser.add_argument("--host", help="Bind address (default: config, 127.0.0.1)")
    parser.add_argument("--port", type=int, help="Bind port (default: config, 5000)")
    parser.add_argument("--debug", action="store_true", help="Run Flask in debug mode")
    parser.add_argument(
        "--activity",
        type=float,
        default=None,
        help="Market activity 0-1 used for forecasts (default: config or 0.5)",
    )
    parser.add_argument(
        "--no-refresh",
        action="store_true",
        help="Skip the initial sheet load",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
    )
    return parser


def main(argv=None):
    """Main entry point for the API server CLI."""
    args = build_parser().parse_args(argv)

    try:
        from tashkentforecast.api.server import run_server
        from tashkentforecast.config import get_config
        from tashkentforecast.logging_config import setup_logging, get_logger

        config = get_config()
        setup_logging(level=args.log_level)
        if args.activity is not None:
            config.forecast.market_activity = args.activity
    except ConfigurationError as e:
        print(f"Configuration error: {e.message}", file=sys.stderr)
        sys.exit(2)

    logger = get_logger(__name__)
    try:
        run_server(host=args.host, port=args.port, debug=args.debug or None, refresh=not args.no_refresh)
    except KeyboardInterrupt:
        logger.info("Server stopped by user")


if __name__ == "__main__":
    main()
