"""Consistency scoring for Lifepath.

Measures how well one chosen effect lines up with the player's dream card.

Formula:
    score  = 4 * personality[primary] + 2 * personality[secondary]
    score += 1 * life_status.integrity        (if the effect touches integrity)
    score += 20                               (if triggers.legend)
    score *= consistency_weight               (if present)
    penalty = 15                              (if triggers.scandal)
    delta  = clamp(round(score - penalty), -30, 30)

The weight scales alignment only, never the scandal penalty.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from lifepath.models.content import DreamCard, OptionEffect
from lifepath.parameters import (
    CONSISTENCY_DELTA_BOUNDS,
    INTEGRITY_WEIGHT,
    LEGEND_BONUS,
    PRIMARY_TRAIT_WEIGHT,
    SCANDAL_PENALTY,
    SECONDARY_TRAIT_WEIGHT,
)

SCANDAL_NOTE = "Scandal warning triggered"
LEGEND_NOTE = "Legendary action aligned with dream card"


def clamp(value: float, min_val: float, max_val: float) -> float:
    """Clamp a value to the specified range."""
    return max(min_val, min(max_val, value))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward positive infinity."""
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class ConsistencyResult:
    """Outcome of scoring one choice.

    Attributes:
        delta: Change to apply to the consistency score (-30..30)
        scandal_penalty: Penalty carried into the ending score
        notes: Reflection notes explaining bonuses and penalties
    """

    delta: int
    scandal_penalty: int
    notes: list[str] = field(default_factory=list)


def score_consistency(dream_card: DreamCard, effect: OptionEffect) -> ConsistencyResult:
    """Score one effect against a dream card.

    Pure and deterministic: neither argument is modified.

    Args:
        dream_card: The player's dream card
        effect: Effect of the chosen option

    Returns:
        ConsistencyResult with the clamped delta, penalty and notes
    """
    notes = []
    score = 0.0
    scandal_penalty = 0

    personality = effect.personality
    score += personality.get(dream_card.primary_trait.value, 0) * PRIMARY_TRAIT_WEIGHT
    if dream_card.secondary_trait is not None:
        score += personality.get(dream_card.secondary_trait.value, 0) * SECONDARY_TRAIT_WEIGHT

    if "integrity" in effect.life_status:
        score += effect.life_status["integrity"] * INTEGRITY_WEIGHT

    if effect.triggers.scandal:
        scandal_penalty += SCANDAL_PENALTY
        notes.append(SCANDAL_NOTE)

    if effect.triggers.legend:
        score += LEGEND_BONUS
        notes.append(LEGEND_NOTE)

    if effect.consistency_weight is not None:
        score *= effect.consistency_weight

    low, high = CONSISTENCY_DELTA_BOUNDS
    delta = int(clamp(round_half_up(score - scandal_penalty), low, high))
    return ConsistencyResult(delta=delta, scandal_penalty=scandal_penalty, notes=notes)
