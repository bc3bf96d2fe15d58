"""Run a Yahtzee simulation batch from the command line."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Iterable

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from yahtzee_core import (
    DEFAULT_TRIALS,
    EXPECTED_ROLLS_PER_TRIAL,
    SIMULATION_METHODS,
    InvalidTrialCountError,
    SimulationCancelledError,
    SimulationResult,
    configure_logging,
    deadline_reached,
    load_settings,
    parse_trial_count,
    relative_error,
    results_frame,
    run_simulation,
    set_max_trials,
)
from yahtzee_core.config import validate_log_level


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Simulate rolling five dice until a Yahtzee.")
    parser.add_argument(
        "--trials",
        default=str(DEFAULT_TRIALS),
        help="Number of trials to run (default: %(default)s).",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for a reproducible batch (default: fresh entropy).",
    )
    parser.add_argument(
        "--method",
        choices=SIMULATION_METHODS,
        default="loop",
        help="Simulation method (default: %(default)s).",
    )
    parser.add_argument(
        "--csv",
        type=Path,
        default=None,
        help="Write per-trial results to this CSV file.",
    )
    parser.add_argument(
        "--time-limit",
        type=float,
        default=None,
        help="Stop after this many seconds and report the trials finished so far.",
    )
    parser.add_argument(
        "--chunk-size",
        type=int,
        default=None,
        help="Trials per chunk when a time limit is set (default: from settings).",
    )
    parser.add_argument(
        "--log-level",
        type=validate_log_level,
        default=None,
        help="Override the log level (default: from YAHTZEE_SIM_LOG_LEVEL or INFO).",
    )
    return parser.parse_args(list(argv) if argv is not None else None)


def format_summary(result: SimulationResult) -> list[str]:
    """Return the printable summary lines for a simulation result."""

    summary = result.summary
    deviation = relative_error(summary.mean, EXPECTED_ROLLS_PER_TRIAL)
    return [
        f"Trials:        {summary.total_trials}",
        f"Average rolls: {summary.mean:.2f} ({deviation * 100:+.1f}% vs {EXPECTED_ROLLS_PER_TRIAL})",
        f"Min rolls:     {summary.minimum}",
        f"Max rolls:     {summary.maximum}",
        f"Median rolls:  {summary.median:.1f}",
        f"Elapsed:       {result.compute_seconds:.3f}s",
    ]


def main(argv: Iterable[str] | None = None) -> int:
    args = parse_args(argv)
    settings = load_settings()
    configure_logging(level=args.log_level or settings.log_level)
    set_max_trials(settings.max_trials)

    try:
        trials = parse_trial_count(args.trials)
    except InvalidTrialCountError as exc:
        print(f"Invalid trial count: {exc}", file=sys.stderr)
        return 2

    should_stop = deadline_reached(args.time_limit) if args.time_limit else None
    try:
        result = run_simulation(
            trials,
            seed=args.seed,
            method=args.method,
            chunk_size=args.chunk_size or (settings.chunk_size if should_stop else None),
            should_stop=should_stop,
        )
    except SimulationCancelledError as exc:
        print(exc, file=sys.stderr)
        return 1
    for line in format_summary(result):
        print(line)
    if not result.completed:
        print(f"Stopped early: {len(result.results)} of {result.requested_trials} trials finished")

    if args.csv is not None:
        args.csv.parent.mkdir(parents=True, exist_ok=True)
        results_frame(result.results).to_csv(args.csv, index=False)
        print(f"Results written to {args.csv}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
