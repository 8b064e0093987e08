"""Lifepath data models.

This module exports the content records and the player state models.
"""

from .content import (
    DreamCard,
    Ending,
    IntroProfile,
    NarrativeTag,
    OptionEffect,
    OptionId,
    PersonalityTrait,
    Requirements,
    Scenario,
    ScenarioOption,
    Triggers,
)
from .state import (
    Attributes,
    FrozenAttributes,
    FrozenHiddenMetrics,
    FrozenLifeStatus,
    FrozenPersonalityVector,
    HaggardLevel,
    HiddenMetrics,
    LifeStatus,
    PersonalityVector,
    PlayerSnapshot,
    PlayerState,
    Reflection,
    ScandalLevel,
    ScenarioResult,
    floor_zero,
    haggard_level_for,
    integrity_scandal_level,
    scandal_level_for,
    stage_for,
)

__all__ = [
    # Enums
    "PersonalityTrait",
    "NarrativeTag",
    "ScandalLevel",
    "HaggardLevel",
    # Content
    "DreamCard",
    "Ending",
    "IntroProfile",
    "OptionEffect",
    "OptionId",
    "Requirements",
    "Scenario",
    "ScenarioOption",
    "Triggers",
    # State
    "Attributes",
    "LifeStatus",
    "PersonalityVector",
    "HiddenMetrics",
    "FrozenAttributes",
    "FrozenLifeStatus",
    "FrozenPersonalityVector",
    "FrozenHiddenMetrics",
    "PlayerSnapshot",
    "PlayerState",
    "Reflection",
    "ScenarioResult",
    # State functions
    "floor_zero",
    "haggard_level_for",
    "integrity_scandal_level",
    "scandal_level_for",
    "stage_for",
]
