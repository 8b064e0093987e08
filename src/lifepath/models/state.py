"""Player state models for Lifepath.

This module defines the mutable state of a single run and the read-only
snapshot handed to the outside world.

All numeric values are floored at 0 after every mutation and are unbounded
above. Patches are sparse: only the keys present are touched and keys the
model does not know are ignored.

Categorical flags are derived from the counters by pure transition functions:
- scandal_level_for: scandal value -> none / warning / max, never downgrades
- integrity_scandal_level: integrity below the floor forces at least "warning"
- haggard_level_for: re-evaluated every turn, not sticky
- stage_for: elapsed share of the run -> stage 1..5
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from lifepath.models.content import DreamCard, OptionEffect, OptionId
from lifepath.parameters import (
    DEFAULT_ATTRIBUTES,
    DEFAULT_LIFE_STATUS,
    DEFAULT_PERSONALITY_SCORE,
    DEFAULT_TOTAL_TURNS,
    HAGGARD_PHYSICAL_THRESHOLD,
    HAGGARD_STRESS_THRESHOLD,
    INTEGRITY_SCANDAL_FLOOR,
    SCANDAL_MAX_THRESHOLD,
    SCANDAL_WARNING_THRESHOLD,
    STAGE_COUNT,
)

logger = logging.getLogger(__name__)


def floor_zero(value: float) -> float:
    """Floor a value at 0."""
    return max(0.0, float(value))


class ScandalLevel(str, Enum):
    """Sticky scandal tier."""

    NONE = "none"
    WARNING = "warning"
    MAX = "max"


class HaggardLevel(str, Enum):
    """Per-turn fatigue flag."""

    NONE = "none"
    HAGGARD = "haggard"


_SCANDAL_RANK = {
    ScandalLevel.NONE: 0,
    ScandalLevel.WARNING: 1,
    ScandalLevel.MAX: 2,
}


# =============================================================================
# Transition functions
# =============================================================================


def scandal_level_for(current: ScandalLevel, scandal_value: float) -> ScandalLevel:
    """Scandal level after the scandal value changes.

    "max" at or above SCANDAL_MAX_THRESHOLD, "warning" at or above
    SCANDAL_WARNING_THRESHOLD, otherwise the current level is kept. The level
    never moves down, even if the value later falls.
    """
    if scandal_value >= SCANDAL_MAX_THRESHOLD:
        derived = ScandalLevel.MAX
    elif scandal_value >= SCANDAL_WARNING_THRESHOLD:
        derived = ScandalLevel.WARNING
    else:
        return current
    return derived if _SCANDAL_RANK[derived] > _SCANDAL_RANK[current] else current


def integrity_scandal_level(current: ScandalLevel, integrity: float) -> ScandalLevel:
    """Scandal level after the end-of-turn integrity check.

    Integrity below INTEGRITY_SCANDAL_FLOOR raises the level to "warning"
    regardless of the scandal value, unless it is already "max".
    """
    if integrity < INTEGRITY_SCANDAL_FLOOR and current != ScandalLevel.MAX:
        return ScandalLevel.WARNING
    return current


def haggard_level_for(stress: float, physical: float) -> HaggardLevel:
    """Haggard when stress is high or the physical attribute is low."""
    if stress >= HAGGARD_STRESS_THRESHOLD or physical <= HAGGARD_PHYSICAL_THRESHOLD:
        return HaggardLevel.HAGGARD
    return HaggardLevel.NONE


def stage_for(turns_elapsed: int, total_turns: int) -> int:
    """Stage (1..STAGE_COUNT) for the number of turns elapsed.

    Each stage spans an equal share of the run. For a 50-turn run the
    boundaries are 10, 20, 30 and 40 elapsed turns.
    """
    elapsed = max(0, turns_elapsed)
    return min(STAGE_COUNT, 1 + (elapsed * STAGE_COUNT) // total_turns)


# =============================================================================
# Numeric records
# =============================================================================


class _PatchableRecord(BaseModel):
    """Fixed-key numeric record mutated only through sparse additive patches."""

    @field_validator("*", mode="before")
    @classmethod
    def clamp_floor(cls, v: Any) -> float:
        """Floor every value at 0."""
        return floor_zero(v)

    def apply_patch(self, patch: Mapping[str, float]) -> None:
        """Add each known key of the patch, flooring the result at 0.

        Raises:
            TypeError: If the record is a read-only snapshot copy
        """
        if type(self).model_config.get("frozen"):
            raise TypeError(f"{type(self).__name__} is read-only")
        fields = type(self).model_fields
        for key, delta in patch.items():
            if key not in fields:
                logger.debug(f"Ignoring unknown {type(self).__name__} key: {key}")
                continue
            setattr(self, key, floor_zero(getattr(self, key) + delta))

    def as_dict(self) -> dict[str, float]:
        """Plain dict copy of the values."""
        return self.model_dump()


class Attributes(_PatchableRecord):
    """Skill attributes."""

    intellect: float = Field(default=DEFAULT_ATTRIBUTES["intellect"], ge=0.0)
    physical: float = Field(default=DEFAULT_ATTRIBUTES["physical"], ge=0.0)
    inspiration: float = Field(default=DEFAULT_ATTRIBUTES["inspiration"], ge=0.0)
    luck: float = Field(default=DEFAULT_ATTRIBUTES["luck"], ge=0.0)


class LifeStatus(_PatchableRecord):
    """Life status counters."""

    money: float = Field(default=DEFAULT_LIFE_STATUS["money"], ge=0.0)
    stress: float = Field(default=DEFAULT_LIFE_STATUS["stress"], ge=0.0)
    happiness: float = Field(default=DEFAULT_LIFE_STATUS["happiness"], ge=0.0)
    integrity: float = Field(default=DEFAULT_LIFE_STATUS["integrity"], ge=0.0)


class PersonalityVector(_PatchableRecord):
    """Hidden personality scores, one per category."""

    R: float = Field(default=DEFAULT_PERSONALITY_SCORE, ge=0.0)
    I: float = Field(default=DEFAULT_PERSONALITY_SCORE, ge=0.0)  # noqa: E741
    A: float = Field(default=DEFAULT_PERSONALITY_SCORE, ge=0.0)
    S: float = Field(default=DEFAULT_PERSONALITY_SCORE, ge=0.0)
    E: float = Field(default=DEFAULT_PERSONALITY_SCORE, ge=0.0)
    C: float = Field(default=DEFAULT_PERSONALITY_SCORE, ge=0.0)

    def dominant(self) -> str:
        """Highest-scoring trait; ties go to the earliest in R, I, A, S, E, C order."""
        best_key, best_value = "I", -1.0
        for key, value in self.as_dict().items():
            if value > best_value:
                best_key, best_value = key, value
        return best_key


class HiddenMetrics(BaseModel):
    """Internal-only metrics, exposed read-only through snapshots.

    Attributes:
        personality: Hidden personality vector
        consistency_score: Running alignment with the dream card
        scandal_value: Accumulated scandal risk
    """

    personality: PersonalityVector = Field(default_factory=PersonalityVector)
    consistency_score: float = Field(default=0.0, ge=0.0)
    scandal_value: float = Field(default=0.0, ge=0.0)

    @field_validator("consistency_score", "scandal_value", mode="before")
    @classmethod
    def clamp_floor(cls, v: Any) -> float:
        """Floor counters at 0."""
        return floor_zero(v)


# =============================================================================
# Snapshot and mutable state
# =============================================================================


class FrozenAttributes(Attributes):
    """Read-only attributes held by a snapshot."""

    model_config = ConfigDict(frozen=True)


class FrozenLifeStatus(LifeStatus):
    """Read-only life status held by a snapshot."""

    model_config = ConfigDict(frozen=True)


class FrozenPersonalityVector(PersonalityVector):
    """Read-only personality vector held by a snapshot."""

    model_config = ConfigDict(frozen=True)


class FrozenHiddenMetrics(HiddenMetrics):
    """Read-only hidden metrics held by a snapshot."""

    model_config = ConfigDict(frozen=True)

    personality: FrozenPersonalityVector = Field(default_factory=FrozenPersonalityVector)


class PlayerSnapshot(BaseModel):
    """Immutable copy of a player's state at a point in time.

    Attributes:
        attributes: Skill attributes
        life_status: Life status counters
        hidden: Hidden metrics (personality, consistency, scandal)
        stage: Current stage (1-5)
        turns_remaining: Turns left in the run
        haggard: Fatigue flag
        scandal: Scandal tier
    """

    model_config = ConfigDict(frozen=True)

    attributes: FrozenAttributes
    life_status: FrozenLifeStatus
    hidden: FrozenHiddenMetrics
    stage: int
    turns_remaining: int
    haggard: HaggardLevel
    scandal: ScandalLevel

    @property
    def is_haggard(self) -> bool:
        return self.haggard == HaggardLevel.HAGGARD


class PlayerState(BaseModel):
    """Mutable state for one run.

    The single source of truth for the run's numbers plus turn and stage
    bookkeeping. Mutation goes through the apply_* methods and end_turn();
    none of them can fail.

    Attributes:
        dream_card: Archetype chosen for the run
        total_turns: Configured run length
        attributes: Skill attributes
        life_status: Life status counters
        hidden: Hidden metrics
        stage: Current stage (1-5), derived from turns elapsed
        turns_remaining: Turns left (starts at total_turns)
        haggard: Fatigue flag, recomputed every turn
        scandal: Sticky scandal tier
    """

    dream_card: DreamCard
    total_turns: int = Field(default=DEFAULT_TOTAL_TURNS, ge=1)
    attributes: Attributes = Field(default_factory=Attributes)
    life_status: LifeStatus = Field(default_factory=LifeStatus)
    hidden: HiddenMetrics = Field(default_factory=HiddenMetrics)
    stage: int = Field(default=1, ge=1, le=STAGE_COUNT)
    turns_remaining: int = Field(ge=0)
    haggard: HaggardLevel = Field(default=HaggardLevel.NONE)
    scandal: ScandalLevel = Field(default=ScandalLevel.NONE)

    @model_validator(mode="before")
    @classmethod
    def default_turns_remaining(cls, data: Any) -> Any:
        """A fresh run starts with every turn remaining."""
        if isinstance(data, dict) and data.get("turns_remaining") is None:
            data = {
                **data,
                "turns_remaining": data.get("total_turns", DEFAULT_TOTAL_TURNS),
            }
        return data

    @property
    def turns_elapsed(self) -> int:
        """Turns resolved so far."""
        return self.total_turns - self.turns_remaining

    # Patches

    def apply_attribute_delta(self, patch: Mapping[str, float]) -> None:
        """Apply a sparse additive patch to the attributes."""
        self.attributes.apply_patch(patch)

    def apply_life_status_delta(self, patch: Mapping[str, float]) -> None:
        """Apply a sparse additive patch to the life status."""
        self.life_status.apply_patch(patch)

    def apply_personality_delta(self, patch: Mapping[str, float]) -> None:
        """Apply a sparse additive patch to the hidden personality vector."""
        self.hidden.personality.apply_patch(patch)

    def apply_consistency_delta(self, delta: float) -> None:
        """Change the consistency score, floored at 0."""
        self.hidden.consistency_score = floor_zero(self.hidden.consistency_score + delta)

    def apply_scandal_delta(self, delta: float) -> None:
        """Change the scandal value, floored at 0, and update the sticky level."""
        self.hidden.scandal_value = floor_zero(self.hidden.scandal_value + delta)
        self._set_scandal(scandal_level_for(self.scandal, self.hidden.scandal_value))

    # Turn bookkeeping

    def end_turn(self) -> None:
        """Close the current turn.

        Decrements turns_remaining, then recomputes stage, the haggard flag and
        the integrity-driven scandal warning, in that order.
        """
        self.turns_remaining = max(0, self.turns_remaining - 1)
        self.stage = max(self.stage, stage_for(self.turns_elapsed, self.total_turns))
        self.haggard = haggard_level_for(self.life_status.stress, self.attributes.physical)
        self._set_scandal(integrity_scandal_level(self.scandal, self.life_status.integrity))

    def _set_scandal(self, level: ScandalLevel) -> None:
        if level != self.scandal:
            logger.info(f"Scandal level {self.scandal.value} -> {level.value}")
            self.scandal = level

    def snapshot(self) -> PlayerSnapshot:
        """Deep, independent, read-only copy of the current state."""
        return PlayerSnapshot(
            attributes=FrozenAttributes(**self.attributes.as_dict()),
            life_status=FrozenLifeStatus(**self.life_status.as_dict()),
            hidden=FrozenHiddenMetrics(
                personality=FrozenPersonalityVector(**self.hidden.personality.as_dict()),
                consistency_score=self.hidden.consistency_score,
                scandal_value=self.hidden.scandal_value,
            ),
            stage=self.stage,
            turns_remaining=self.turns_remaining,
            haggard=self.haggard,
            scandal=self.scandal,
        )


# =============================================================================
# History
# =============================================================================


class Reflection(BaseModel):
    """Consistency feedback for one resolved choice."""

    model_config = ConfigDict(frozen=True)

    consistency_delta: int = Field(default=0)
    scandal_penalty: int = Field(default=0)
    notes: tuple[str, ...] = Field(default=())


class ScenarioResult(BaseModel):
    """Append-only record of one resolved turn.

    Attributes:
        scenario_id: Scenario that was resolved
        option_id: Option the player chose
        stage: Stage the scenario belongs to
        effect: Effect that was applied
        snapshot_after: Player state after the turn closed
        reflection: Consistency feedback for the choice
    """

    model_config = ConfigDict(frozen=True)

    scenario_id: str
    option_id: OptionId
    stage: int = Field(ge=1, le=STAGE_COUNT)
    effect: OptionEffect
    snapshot_after: PlayerSnapshot
    reflection: Reflection
