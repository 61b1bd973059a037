#!/usr/bin/env python3
"""
Prop simulation command line.

Usage:
    propsim prop props.json                          # Simulate each prop
    propsim batch lines.json --platform PrizePicks   # Simulate stored market lines
    propsim entry props.json --mode flex             # Evaluate props as one pick'em entry
    propsim compare props.json --sportsbook-odds -115

Input files hold a JSON list (or {"props": [...]} / {"lines": [...]}).
Results are printed to stdout as JSON; logs go to stderr.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Optional, Sequence

from .batch import run_batch_simulation
from .config import settings
from .logging_config import configure_logging, get_logger, log_error
from .models import PickemPlatform, SimulatedProp
from .portfolio import compare_platforms, get_pickem_payout, simulate_flex_entry, simulate_power_entry
from .schemas import PropInputError, load_market_lines, load_props
from .simulator import get_confidence_label, simulate_player_prop

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_INPUT_ERROR = 2


def _read_json(path: str) -> Any:
    try:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as e:
        raise PropInputError(f"Cannot read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise PropInputError(f"Invalid JSON in {path}: {e}") from e


def _emit(payload: Any) -> None:
    print(json.dumps(payload, indent=2))


def cmd_prop(args: argparse.Namespace) -> None:
    results = []
    for prop in load_props(_read_json(args.file)):
        sim = SimulatedProp(input=prop, result=simulate_player_prop(prop))
        entry = sim.to_dict()
        entry["confidence_label"] = get_confidence_label(sim.result.confidence_score).value
        results.append(entry)
    _emit(results)


def cmd_batch(args: argparse.Namespace) -> None:
    lines = load_market_lines(_read_json(args.file))
    run = run_batch_simulation(lines, platforms=args.platform, market_types=args.market_type)
    _emit({
        "summary": run.summary.to_dict(),
        "bets": [bet.to_dict() for bet in run.bets],
        "skipped": run.skipped,
        "run_notes": run.run_notes,
    })


def cmd_entry(args: argparse.Namespace) -> None:
    legs = [simulate_player_prop(prop) for prop in load_props(_read_json(args.file))]
    platform = PickemPlatform(args.platform)
    if args.mode == "power":
        entry = simulate_power_entry(legs, platform)
    else:
        entry = simulate_flex_entry(legs, platform)
    _emit({
        "mode": args.mode,
        "payout": get_pickem_payout(len(legs)).to_dict(),
        "legs": [leg.to_dict() for leg in legs],
        "entry": entry.to_dict(),
    })


def cmd_compare(args: argparse.Namespace) -> None:
    platform = PickemPlatform(args.pickem_platform)
    _emit([
        {
            "player_name": prop.player_name,
            "stat_type": prop.stat_type,
            **compare_platforms(prop, args.sportsbook_odds, platform).to_dict(),
        }
        for prop in load_props(_read_json(args.file))
    ])


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="propsim",
        description="Player prop probability simulation"
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        help=f"Log level (default: {settings.log_level})"
    )
    parser.add_argument(
        "--pretty-logs",
        action="store_true",
        help="Colored console logs instead of JSON"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    prop = sub.add_parser("prop", help="Simulate each prop in a JSON file")
    prop.add_argument("file", help="JSON file of props")
    prop.set_defaults(handler=cmd_prop)

    batch = sub.add_parser("batch", help="Simulate stored market lines")
    batch.add_argument("file", help="JSON file of market lines")
    batch.add_argument(
        "--platform",
        action="append",
        help="Only lines from this platform (repeatable)"
    )
    batch.add_argument(
        "--market-type",
        action="append",
        help="Only lines of this market type (repeatable)"
    )
    batch.set_defaults(handler=cmd_batch)

    entry = sub.add_parser("entry", help="Evaluate the props as one pick'em entry")
    entry.add_argument("file", help="JSON file of props (one per leg)")
    entry.add_argument("--mode", choices=["power", "flex"], default="power")
    entry.add_argument(
        "--platform",
        choices=[p.value for p in PickemPlatform],
        default=PickemPlatform.PRIZEPICKS.value,
    )
    entry.set_defaults(handler=cmd_entry)

    compare = sub.add_parser("compare", help="Sportsbook vs pick'em for each prop")
    compare.add_argument("file", help="JSON file of props")
    compare.add_argument(
        "--sportsbook-odds",
        type=float,
        required=True,
        help="American odds offered by the sportsbook (e.g. -115)"
    )
    compare.add_argument(
        "--pickem-platform",
        choices=[p.value for p in PickemPlatform],
        default=PickemPlatform.PRIZEPICKS.value,
    )
    compare.set_defaults(handler=cmd_compare)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        log_level=args.log_level,
        json_logs=settings.json_logs and not args.pretty_logs,
        service_name=settings.service_name,
    )

    try:
        args.handler(args)
    except ValueError as e:
        # PropInputError and pydantic.ValidationError are both ValueErrors
        log_error(logger, e, {"command": args.command, "file": args.file})
        return EXIT_INPUT_ERROR
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
