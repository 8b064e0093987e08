#!/usr/bin/env python3
"""Batch run simulator for Lifepath endings.

Plays many complete runs with automatic choice policies and reports which
endings each dream card reaches, with ending score statistics. Runs execute in
parallel with ProcessPoolExecutor.

Usage:
    python scripts/simulate_runs.py \\
        --dreams surgeon,founder \\
        --policies aligned,random \\
        --runs 200 \\
        --seed 42 \\
        --output-dir results/

Available policies:
    - random: Pick any available option
    - first: Always pick the first available option
    - aligned: Pick the option best aligned with the dream card
    - cautious: Avoid scandal, then minimise stress
"""

import argparse
import logging
import sys

from lifepath.testing import POLICIES, BatchRunner, print_results_summary


def parse_list(value: str | None) -> list[str] | None:
    """Split a comma-separated argument, or None if not given."""
    if not value:
        return None
    return [item.strip() for item in value.split(",") if item.strip()]


def main():
    """Main entry point for the run simulator."""
    parser = argparse.ArgumentParser(
        description="Batch run simulator for Lifepath endings.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Every dream card against every policy, 100 runs each
  python scripts/simulate_runs.py --runs 100

  # Short runs for one dream card, reproducible
  python scripts/simulate_runs.py --dreams artist --turns 20 --seed 7
        """,
    )

    parser.add_argument(
        "--dreams",
        type=str,
        default=None,
        help="Comma-separated dream card ids (default: all)",
    )

    parser.add_argument(
        "--policies",
        type=str,
        default=None,
        help=f"Comma-separated policies (default: all of {', '.join(POLICIES)})",
    )

    parser.add_argument(
        "--runs",
        type=int,
        default=100,
        help="Number of runs per dream card and policy (default: 100)",
    )

    parser.add_argument(
        "--turns",
        type=int,
        default=None,
        help="Turns per run (default: LIFEPATH_TOTAL_TURNS or 50)",
    )

    parser.add_argument(
        "--content",
        type=str,
        default=None,
        help="Content directory (default: LIFEPATH_CONTENT_PATH or bundled content)",
    )

    parser.add_argument(
        "--workers",
        type=int,
        default=4,
        help="Number of parallel workers (default: 4)",
    )

    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducibility (optional)",
    )

    parser.add_argument(
        "--output-dir",
        type=str,
        default=None,
        help="Directory for batch_results.json (optional)",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    policies = parse_list(args.policies)
    unknown = [name for name in policies or [] if name not in POLICIES]
    if unknown:
        print(f"Unknown policies: {', '.join(unknown)}", file=sys.stderr)
        sys.exit(1)

    runner = BatchRunner(content_path=args.content, total_turns=args.turns)

    print(f"Running {args.runs} runs per cell with {args.workers} workers...")
    if args.seed is not None:
        print(f"Seed: {args.seed}")
    print()

    try:
        results = runner.run_all(
            dream_card_ids=parse_list(args.dreams),
            policy_names=policies,
            num_runs=args.runs,
            seed=args.seed,
            max_workers=args.workers,
            output_dir=args.output_dir,
        )
    except Exception as e:
        print(f"Error running simulation: {e}", file=sys.stderr)
        sys.exit(1)

    print_results_summary(results)
    sys.exit(0)


if __name__ == "__main__":
    main()
