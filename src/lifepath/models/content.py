"""Content records consumed by the Lifepath engine.

Scenarios, options, dream cards and endings are immutable content loaded once
per run. Their keyed numbers are held as read-only mappings, so a record
handed out in a turn result cannot rewrite the catalog.

Effects carry sparse patches keyed by attribute, life status or personality
name; keys the engine does not recognise are ignored when the patch is
applied, so content can run ahead of the engine.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Annotated, Literal, Mapping

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, PlainSerializer, field_validator

from lifepath.parameters import STAGE_COUNT

OptionId = Literal["A", "B", "C", "D"]


def freeze_mapping(value: Mapping[str, float]) -> Mapping[str, float]:
    """Read-only copy of a mapping."""
    return MappingProxyType(dict(value))


# Keyed numbers on frozen content; validated into a read-only view, dumped as a dict
FrozenFloatMap = Annotated[
    Mapping[str, float],
    AfterValidator(freeze_mapping),
    PlainSerializer(dict, return_type=dict),
]


class PersonalityTrait(str, Enum):
    """The six hidden personality categories."""

    REALISTIC = "R"
    INVESTIGATIVE = "I"
    ARTISTIC = "A"
    SOCIAL = "S"
    ENTERPRISING = "E"
    CONVENTIONAL = "C"


class NarrativeTag(str, Enum):
    """Structured narrative markers an effect can carry.

    Ending rules that look for a narrative event accept either the tag or the
    matching marker text inside the effect's free-text notes.
    """

    REVERSAL = "Reversal roulette"
    TRAVEL = "Travel"


class DreamCard(BaseModel):
    """A long-term archetype the player commits to for a whole run.

    Attributes:
        id: Stable identifier (e.g. "surgeon")
        label: Display label
        primary_trait: Personality trait weighted most by consistency scoring
        secondary_trait: Optional second trait with a lower weight
        subtitle: Optional one-line flavour text
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    label: str
    primary_trait: PersonalityTrait
    secondary_trait: PersonalityTrait | None = Field(default=None)
    subtitle: str = Field(default="")


class Triggers(BaseModel):
    """Boolean narrative triggers attached to an effect."""

    model_config = ConfigDict(frozen=True)

    scandal: bool = Field(default=False)
    haggard: bool = Field(default=False)
    legend: bool = Field(default=False)


class OptionEffect(BaseModel):
    """Sparse state patch applied when an option is chosen.

    Attributes:
        attributes: Additive patch over intellect/physical/inspiration/luck
        life_status: Additive patch over money/stress/happiness/integrity
        personality: Additive patch over the personality vector (R, I, A, S, E, C)
        consistency_weight: Multiplier on the alignment score of this choice
        scandal_delta: Explicit change to the scandal value
        triggers: Scandal / haggard / legend flags
        notes: Free-text narrative notes
        tags: Structured narrative markers
    """

    model_config = ConfigDict(frozen=True)

    attributes: FrozenFloatMap = Field(default_factory=dict, validate_default=True)
    life_status: FrozenFloatMap = Field(default_factory=dict, validate_default=True)
    personality: FrozenFloatMap = Field(default_factory=dict, validate_default=True)
    consistency_weight: float | None = Field(default=None)
    scandal_delta: float | None = Field(default=None)
    triggers: Triggers = Field(default_factory=Triggers)
    notes: str | None = Field(default=None)
    tags: tuple[NarrativeTag, ...] = Field(default=())

    def has_marker(self, tag: NarrativeTag) -> bool:
        """Whether this effect carries a narrative marker, as a tag or in its notes."""
        if tag in self.tags:
            return True
        return self.notes is not None and tag.value in self.notes


class Requirements(BaseModel):
    """Minimum thresholds gating an option (or scenario)."""

    model_config = ConfigDict(frozen=True)

    min_attributes: FrozenFloatMap = Field(default_factory=dict, validate_default=True)
    min_life_status: FrozenFloatMap = Field(default_factory=dict, validate_default=True)

    def unmet(
        self,
        attributes: Mapping[str, float],
        life_status: Mapping[str, float],
    ) -> list[str]:
        """List the thresholds not met by the given values.

        Thresholds on keys the player does not have are skipped.

        Returns:
            Human-readable descriptions, empty if every threshold is met
        """
        failures = []
        for values, thresholds in (
            (attributes, self.min_attributes),
            (life_status, self.min_life_status),
        ):
            for key, minimum in thresholds.items():
                if key in values and values[key] < minimum:
                    failures.append(f"{key} {values[key]:g} < {minimum:g}")
        return failures


class ScenarioOption(BaseModel):
    """One of up to four choices offered by a scenario."""

    model_config = ConfigDict(frozen=True)

    id: OptionId
    label: str
    effect: OptionEffect = Field(default_factory=OptionEffect)
    requirements: Requirements | None = Field(default=None)


class Scenario(BaseModel):
    """A narrative situation tied to a life stage."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    stage: int = Field(ge=1, le=STAGE_COUNT)
    title: str
    description: str = Field(default="")
    options: list[ScenarioOption] = Field(min_length=1, max_length=4)
    requirements: Requirements | None = Field(default=None)

    @field_validator("options")
    @classmethod
    def unique_option_ids(cls, v: list[ScenarioOption]) -> list[ScenarioOption]:
        """Option ids must be unique within a scenario."""
        ids = [option.id for option in v]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Duplicate option ids: {ids}")
        return v

    def get_option(self, option_id: str) -> ScenarioOption | None:
        """Look up an option by id."""
        for option in self.options:
            if option.id == option_id:
                return option
        return None


class Ending(BaseModel):
    """A narrative outcome selected at the end of a run."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str


class IntroProfile(BaseModel):
    """Player profile collected by an onboarding flow.

    The engine treats this as opaque read-only data. Trait scores are keyed by
    the intro traits "Ambition", "Creativity" and "Stability".
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(default="")
    age: str = Field(default="")
    gender: str = Field(default="")
    declared_traits: tuple[str, ...] = Field(default=())
    trait_scores: FrozenFloatMap = Field(default_factory=dict, validate_default=True)
    suggested_career_label: str = Field(default="")

    @field_validator("age", mode="before")
    @classmethod
    def coerce_age(cls, v: object) -> str:
        """Accept numeric ages."""
        return "" if v is None else str(v)
