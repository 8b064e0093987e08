"""Simulation framework for Lifepath.

This module provides automated run tools for ending balance validation.
Everything drives the real SimulationEngine; parallelism is achieved through
Python's multiprocessing.

Key classes:
- RunRunner: Plays one complete run with an automatic choice policy
- RunResult: Ending, score and choices of a finished run
- BatchRunner: Runs many runs across dream cards and policies
- CellStats: Statistics for one (dream card, policy) cell
- BatchResults: Aggregate results from a batch

Usage:
    from lifepath.testing import BatchRunner, run_single

    result = run_single("surgeon", policy_name="aligned", random_seed=1)

    runner = BatchRunner()
    results = runner.run_all(num_runs=50, seed=0)
"""

from .batch_runner import (
    BatchResults,
    BatchRunner,
    CellStats,
    print_results_summary,
)
from .run_runner import (
    POLICIES,
    Policy,
    RunResult,
    RunRunner,
    aligned_policy,
    cautious_policy,
    first_option_policy,
    get_policy,
    random_policy,
    run_single,
)

__all__ = [
    # Core classes
    "RunRunner",
    "RunResult",
    "BatchRunner",
    "BatchResults",
    "CellStats",
    # Policies
    "Policy",
    "POLICIES",
    "get_policy",
    "random_policy",
    "first_option_policy",
    "aligned_policy",
    "cautious_policy",
    # Execution
    "run_single",
    # Utilities
    "print_results_summary",
]
