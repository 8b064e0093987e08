"""Simulation engine module for Lifepath.

This module contains the core simulation logic including:
- consistency: Scoring a choice against the player's dream card
- selector: Stage-aware scenario selection without repeats
- endings: The ordered ending decision table and ending score
- dice: Injectable randomness and the life wheel
- game_engine: Turn resolution and run lifecycle

Usage:
    from lifepath.engine import create_engine

    engine = create_engine("surgeon", random_seed=7)

    while not engine.is_complete():
        engine.spin_wheel()
        scenario = engine.next_scenario()
        option = engine.available_options(scenario)[0]
        engine.resolve_scenario(scenario.id, option.id)

    report = engine.generate_report()
    print(report.ending.title, report.ending_score)
"""

from lifepath.engine.consistency import (
    ConsistencyResult,
    clamp,
    round_half_up,
    score_consistency,
)
from lifepath.engine.dice import RandomSource, make_random_source, spin_wheel
from lifepath.engine.endings import (
    DEFAULT_ENDING,
    ENDING_RULES,
    EndingRule,
    evaluate_ending,
    get_ending_score,
)
from lifepath.engine.errors import (
    NoContentAvailable,
    NotFound,
    RequirementNotMet,
    RunComplete,
    SimulationError,
)
from lifepath.engine.game_engine import (
    RunPhase,
    SimulationEngine,
    create_engine,
    neutral_scenario,
)
from lifepath.engine.selector import ScenarioCatalog

__all__ = [
    # Engine classes
    "SimulationEngine",
    "RunPhase",
    "ScenarioCatalog",
    "create_engine",
    "neutral_scenario",
    # Errors
    "SimulationError",
    "NotFound",
    "RequirementNotMet",
    "NoContentAvailable",
    "RunComplete",
    # Consistency
    "ConsistencyResult",
    "score_consistency",
    "clamp",
    "round_half_up",
    # Endings
    "EndingRule",
    "ENDING_RULES",
    "DEFAULT_ENDING",
    "evaluate_ending",
    "get_ending_score",
    # Randomness
    "RandomSource",
    "make_random_source",
    "spin_wheel",
]
