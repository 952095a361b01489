"""
Command-line interface for the Road Trip backup parser.

This module handles CLI argument parsing, logging configuration,
and printing a short fuel summary for a vehicle.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, Optional, Sequence, TextIO

from pydantic import ValidationError

from roadtrip_parser.config_models import LoaderConfig
from roadtrip_parser.exceptions import RoadTripError
from roadtrip_parser.loader import load_vehicle
from roadtrip_parser.models import ParseResult
from roadtrip_parser.observability import LoggingHook, ObservabilityManager

logger = logging.getLogger(__name__)


def fuel_summary(result: ParseResult) -> Dict[str, float]:
    """Aggregate fuel statistics for a loaded vehicle.

    Returns:
        Dict with ``fillups``, ``total_cost`` and ``average_mpg`` (the mean of
        fill-ups that recorded a non-zero MPG, 0.0 when none did).
    """
    mpgs = [f.mpg for f in result.fuel_records if f.mpg]
    return {
        "fillups": len(result.fuel_records),
        "total_cost": sum(f.total_price for f in result.fuel_records),
        "average_mpg": sum(mpgs) / len(mpgs) if mpgs else 0.0,
    }


def setup_logging(level: str, verbose: bool = False) -> None:
    """Configure root logging for the command."""
    logging.basicConfig(
        level="DEBUG" if verbose else level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def main(argv: Optional[Sequence[str]] = None, stdout: Optional[TextIO] = None) -> int:
    """CLI entry point.

    Returns:
        Exit code: 0 = success, 1 = failure
    """
    stdout = stdout or sys.stdout
    parser = argparse.ArgumentParser(
        description="Summarize a Road Trip MPG backup file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  roadtrip-stats --file "Ranger.csv"
  roadtrip-stats --file "Ranger.csv" --config loader.json -v
        """
    )
    parser.add_argument("--file", required=True, type=Path, help="Road Trip vehicle CSV file")
    parser.add_argument("--config", type=Path, help="Loader config JSON file")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging level")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")

    args = parser.parse_args(argv)
    setup_logging(args.log_level, args.verbose)

    try:
        config = LoaderConfig.from_json_file(str(args.config)) if args.config else LoaderConfig()
        observability = ObservabilityManager([LoggingHook()])
        result = load_vehicle(args.file, config=config, observability=observability)
    except FileNotFoundError as e:
        print(f"File not found: {e}", file=sys.stderr)
        return 1
    except ValidationError as e:
        print(f"Invalid config: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Invalid config: {e}", file=sys.stderr)
        return 1
    except RoadTripError as e:
        print(str(e), file=sys.stderr)
        return 1

    if result.vehicle is None:
        print(f"No vehicle record in {args.file}", file=sys.stderr)
        return 1

    summary = fuel_summary(result)
    logger.debug(f"Fuel summary: {summary}")

    print("-- \n", file=stdout)
    print(result.vehicle.name, file=stdout)
    print(f"Spent {summary['total_cost']:0.02f} on fuel in {summary['fillups']} fillups", file=stdout)
    if summary["average_mpg"]:
        print(f"Average {summary['average_mpg']:0.02f} MPG", file=stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
