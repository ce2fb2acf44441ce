"""
BAC estimator CLI demo. Run from project root: python -m bac_estimator.main
Builds a sample drink history, prints the current estimate and curve, and optionally saves a graph.
"""

import argparse
import logging
import sys
from datetime import datetime, timedelta, timezone

from bac_estimator.calculations import Profile, Sex, hours_until_sober
from bac_estimator.catalog import BeverageType, parse_beverage_type
from bac_estimator.drinks import DrinkEvent
from bac_estimator.estimate import estimate
from bac_estimator.graph import curve_data, save_bac_graph


def _demo_drinks(now: datetime):
    return [
        DrinkEvent(500.0, BeverageType.BEER, now - timedelta(hours=2)),
        DrinkEvent(500.0, BeverageType.BEER, now),
    ]


def _parse_drink(raw: str, now: datetime) -> DrinkEvent:
    """TYPE:ML[:HOURS_AGO], e.g. beer:500:1.5"""
    parts = raw.split(":")
    if len(parts) not in (2, 3):
        raise argparse.ArgumentTypeError(f"expected TYPE:ML[:HOURS_AGO], got {raw!r}")
    try:
        volume = float(parts[1])
        hours_ago = float(parts[2]) if len(parts) == 3 else 0.0
    except ValueError:
        raise argparse.ArgumentTypeError(f"bad number in {raw!r}")
    return DrinkEvent(volume, parse_beverage_type(parts[0]), now - timedelta(hours=hours_ago))


def main(argv=None):
    parser = argparse.ArgumentParser(description="BAC estimator: estimate BAC from a drink history")
    parser.add_argument("--weight", type=float, default=60.0, help="Body weight (kg)")
    parser.add_argument("--sex", choices=[s.value for s in Sex], default=Sex.UNSPECIFIED.value)
    parser.add_argument("--drink", action="append", default=[], metavar="TYPE:ML[:HOURS_AGO]",
                        help="Drink to log; repeatable. Without any, a demo history is used")
    parser.add_argument("--graph", type=str, metavar="FILE", help="Save BAC graph to FILE (e.g. bac_graph.png)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    now = datetime.now(timezone.utc)
    profile = Profile(weight_kg=args.weight, sex=Sex.parse(args.sex))
    if args.drink:
        try:
            drinks = [_parse_drink(raw, now) for raw in args.drink]
        except argparse.ArgumentTypeError as exc:
            parser.error(str(exc))
    else:
        drinks = _demo_drinks(now)
        print("Demo history: 500 ml beer 2h ago, 500 ml beer now")

    result = estimate(drinks, profile, now)
    print(f"Weight: {profile.weight_kg} kg, sex: {profile.sex.value}")
    print(f"BAC now: {result.value:.4f}% ({result.status_level.value})")
    print(f"Hours until sober: {hours_until_sober(drinks, profile, now):.2f}h")

    curve = curve_data(drinks, profile, now, max_hours=8.0)
    print(f"Curve points: {len(curve)}")

    if args.graph:
        try:
            path = save_bac_graph(drinks, profile, now, output_path=args.graph, max_hours=8.0)
            print(f"Graph saved: {path}")
        except ImportError:
            print("matplotlib not installed. pip install matplotlib", file=sys.stderr)
            return 1

    return 0


if __name__ == "__main__":
    sys.exit(main() or 0)
