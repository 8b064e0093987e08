"""Simulation parameters for Lifepath.

This module is the SINGLE SOURCE OF TRUTH for all tunable simulation constants.

Parameter Categories:
- Run Shape: Turn count and stage thresholds
- Starting State: Default attribute, life status and personality values
- Status Flags: Scandal and haggard thresholds
- Consistency: Alignment scoring weights and clamps
- Endings: Ending score bounds and rule thresholds

Usage:
    from lifepath.parameters import DEFAULT_TOTAL_TURNS, PRIMARY_TRAIT_WEIGHT
"""

# =============================================================================
# RUN SHAPE
# =============================================================================

DEFAULT_TOTAL_TURNS = 50
"""Number of turns in a standard run.

One scenario is resolved per turn, so a standard run visits 50 scenarios
spread over five stages of ten turns each.
"""

STAGE_COUNT = 5
"""Number of life stages. Stage ids run 1..STAGE_COUNT.

Each stage covers an equal share of the run: stage k begins once
(k - 1) / STAGE_COUNT of the total turns have elapsed. With the default
50-turn run, stages begin at 10, 20, 30 and 40 elapsed turns; runs with a
different total scale proportionally.
"""

WHEEL_SEGMENTS = 6
"""Faces on the life wheel. A spin returns 1..WHEEL_SEGMENTS."""


# =============================================================================
# STARTING STATE
# =============================================================================

DEFAULT_ATTRIBUTES = {
    "intellect": 10,
    "physical": 10,
    "inspiration": 10,
    "luck": 10,
}
"""Starting skill attributes. All attributes are floored at 0, unbounded above."""

DEFAULT_LIFE_STATUS = {
    "money": 100,
    "stress": 10,
    "happiness": 50,
    "integrity": 50,
}
"""Starting life status. All values are floored at 0, unbounded above."""

PERSONALITY_TRAITS = ("R", "I", "A", "S", "E", "C")
"""Hidden personality categories (Realistic, Investigative, Artistic, Social,
Enterprising, Conventional)."""

DEFAULT_PERSONALITY_SCORE = 10
"""Starting score for every personality category."""


# =============================================================================
# STATUS FLAGS
# =============================================================================

SCANDAL_WARNING_THRESHOLD = 40
"""Scandal value at which the scandal level becomes "warning"."""

SCANDAL_MAX_THRESHOLD = 100
"""Scandal value at which the scandal level becomes "max"."""

SCANDAL_TRIGGER_BUMP = 20
"""Flat scandal increase applied when an effect sets triggers.scandal.

Applied in addition to any explicit scandal_delta on the same effect.
"""

INTEGRITY_SCANDAL_FLOOR = 20
"""Integrity below this value forces at least a "warning" scandal level."""

HAGGARD_STRESS_THRESHOLD = 80
"""Stress at or above this value makes the player haggard."""

HAGGARD_PHYSICAL_THRESHOLD = 15
"""Physical attribute at or below this value makes the player haggard."""


# =============================================================================
# CONSISTENCY
# =============================================================================

PRIMARY_TRAIT_WEIGHT = 4
"""Multiplier on the dream card's primary personality trait."""

SECONDARY_TRAIT_WEIGHT = 2
"""Multiplier on the dream card's secondary personality trait."""

INTEGRITY_WEIGHT = 1
"""Multiplier on any integrity change carried by the effect."""

LEGEND_BONUS = 20
"""Alignment bonus for an effect flagged as legendary."""

SCANDAL_PENALTY = 15
"""Consistency penalty for an effect flagged as scandalous."""

CONSISTENCY_DELTA_BOUNDS = (-30, 30)
"""Clamp for a single choice's consistency delta."""


# =============================================================================
# ENDINGS
# =============================================================================

ENDING_SCORE_BOUNDS = (-500, 500)
"""Clamp for the aggregate ending score."""

STABLE_DECISION_WEIGHT = 1.2
"""Consistency weight at or above which a decision counts as "stable"."""

STABLE_DECISION_SHARE = 0.4
"""Share of history that must be stable decisions for the heir ending."""

BALANCED_ATTRIBUTE_SPREAD = 15
"""Max attribute spread (max - min) for a balanced profile."""

DESTINY_BONUS = 10
"""Starting consistency granted when the dream card matches the profile."""
