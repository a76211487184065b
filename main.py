"""Main entry point for Dry Spell Pricer."""

import argparse
import sys

from loguru import logger

import dryspell.utils.logger  # noqa: F401
from dryspell.utils.config import settings


def build_config(args):
    from dryspell.core import input_parser
    from dryspell.core.models import ThresholdConfig

    return ThresholdConfig(
        dry_day_threshold_mm=args.dry_limit,
        consecutive_day_thresholds=tuple(input_parser.parse_thresholds(args.thresholds)),
        sum_insured=args.sum_insured,
        season_months=frozenset(input_parser.parse_months(args.months.split(","))),
    )


def parse_analysis_args(argv):
    defaults = settings.analysis
    parser = argparse.ArgumentParser(prog="main.py analyze")
    parser.add_argument("csv", nargs="?", help="daily series CSV (date, precipitation_mm)")
    parser.add_argument("--lat", type=float, default=defaults.latitude)
    parser.add_argument("--lon", type=float, default=defaults.longitude)
    parser.add_argument("--dry-limit", type=float, default=defaults.dry_day_threshold_mm)
    parser.add_argument("--thresholds", default=",".join(map(str, defaults.consecutive_day_thresholds)))
    parser.add_argument("--sum-insured", type=float, default=defaults.sum_insured)
    parser.add_argument("--months", default=",".join(map(str, defaults.season_months)))
    parser.add_argument("--style", choices=["text", "json"], default="text")
    return parser.parse_args(argv)


def analyze(argv, demo: bool = False) -> int:
    from dryspell.core import ConfigurationError, DataSourceError, DroughtPricer, format_output, input_parser
    from dryspell.data_sources import generate_daily_series, load_daily_csv, open_meteo_client

    args = parse_analysis_args(argv)
    try:
        config = build_config(args)
        pricer = DroughtPricer(data_source=open_meteo_client)
        if demo:
            result = pricer.price(generate_daily_series(), config, metadata={"source": "synthetic"})
        elif args.csv:
            result = pricer.price(load_daily_csv(args.csv), config, metadata={"source": args.csv})
        else:
            input_parser.validate_coordinates(args.lat, args.lon)
            result = pricer.price_location(args.lat, args.lon, config)
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        return 2
    except DataSourceError as e:
        logger.error(f"Data source failed: {e}")
        return 1

    print(format_output(result, args.style))
    return 0


def main():
    """Run the application."""
    if len(sys.argv) < 2:
        print("Usage: python main.py [api|ui|analyze|demo] [options]")
        sys.exit(1)

    cmd = sys.argv[1]

    if cmd == "api":
        import uvicorn
        logger.info("Starting API server...")
        uvicorn.run("dryspell.api.main:app", host=settings.api.host, port=settings.api.port, reload=settings.api.reload)

    elif cmd == "ui":
        import subprocess
        logger.info("Starting Streamlit UI...")
        subprocess.run(["streamlit", "run", "dryspell/ui/app.py", "--server.port", str(settings.ui.port)])

    elif cmd == "analyze":
        sys.exit(analyze(sys.argv[2:]))

    elif cmd == "demo":
        sys.exit(analyze(sys.argv[2:], demo=True))

    else:
        print(f"Unknown command: {cmd}")
        sys.exit(1)


if __name__ == "__main__":
    main()
