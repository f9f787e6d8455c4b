#!/usr/bin/env python3
"""
Example: Load, validate, and generate a schedule from a JSON definition.

Usage:
    python examples/run_schedule.py [definition.json] [--day-count DC] [--json] [--verbose]
"""

import sys
from pathlib import Path
import argparse
import logging
import traceback

# Add src to path for development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from dategen.core.day_count import DayCountConvention
from dategen.products.schema import load_schedule_spec, print_schedule_summary
from dategen.reporting import build_period_table


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Generate a schedule and its period table from a JSON definition"
    )
    parser.add_argument(
        "definition",
        type=str,
        nargs="?",
        default=str(Path(__file__).parent / "eur_swap_semiannual.json"),
        help="Path to JSON schedule definition"
    )
    parser.add_argument(
        "--day-count", "-d",
        type=str,
        choices=[dc.value for dc in DayCountConvention],
        default=None,
        help="Override the definition's day count convention"
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the period table as JSON"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Print detailed output and debug logging"
    )

    args = parser.parse_args()
    definition_path = Path(args.definition)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        spec = load_schedule_spec(definition_path)
        schedule = spec.build()
        day_count = DayCountConvention(args.day_count) if args.day_count else spec.day_count
        table = build_period_table(schedule, day_count)

        if args.json:
            print(table.to_json())
            return 0

        print("=" * 70)
        print("SCHEDULE GENERATOR")
        print("=" * 70)
        print(f"\nDefinition: {definition_path.name}")

        if args.verbose:
            print_schedule_summary(spec, schedule)
        table.print_summary()

        return 0

    except FileNotFoundError as e:
        print(f"\nERROR: {e}")
        return 1

    except Exception as e:
        print(f"\nERROR: {type(e).__name__}: {e}")
        if args.verbose:
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
