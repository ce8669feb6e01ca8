"""CLI for running LiftSweep buildings against a CSV of passenger arrivals."""
from __future__ import annotations

import argparse
import contextlib
import json
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from liftsweep import LiftSweepError
from liftsweep.activity import activity_file
from liftsweep.arrivals import load_arrivals
from liftsweep.scenario import default_scenarios, format_report, load_scenarios, run_scenario


def save_results(output_path: Optional[Path], data: Dict) -> None:
    if not output_path:
        return
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(data, indent=2))


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("arrivals", type=Path, help="CSV file of arrival_tick,origin_floor,destination_floor rows")
    parser.add_argument("--config", type=Path, help="JSON file with one or more building configurations")
    parser.add_argument(
        "--speed",
        type=int,
        action="append",
        help="Ticks per floor for a default building; repeat to compare speeds (default: 10 and 5)",
    )
    parser.add_argument("--max-ticks", type=int, help="Abort a building that has not finished after this many ticks")
    parser.add_argument("--output", type=Path, help="Optional file path to write the reports as JSON")
    parser.add_argument("--activity-log", type=Path, help="Write a line per elevator event to this file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    results = []
    try:
        arrivals = load_arrivals(args.arrivals)
        if args.config:
            scenarios = load_scenarios(args.config)
        else:
            scenarios = default_scenarios(args.speed or (10, 5))

        with contextlib.ExitStack() as stack:
            if args.activity_log:
                stack.enter_context(activity_file(args.activity_log))
            for scenario in scenarios:
                result = run_scenario(
                    scenario,
                    arrivals,
                    activity=args.activity_log is not None,
                    max_ticks=args.max_ticks,
                )
                results.append(result)
                print(format_report(result))
                print()
    except (OSError, ValueError, LiftSweepError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    save_results(args.output, {"arrivals": str(args.arrivals), "results": results})
    if args.output:
        print(f"Saved reports to {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
