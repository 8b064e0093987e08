"""Core simulation engine for Lifepath.

This module implements the SimulationEngine class, which runs one life from
the first turn to the ending and reflection report.

Turn Sequence (resolve_scenario):
1. LOOKUP - Find the scenario and option, fail with NotFound
2. GATE - Check option requirements, fail with RequirementNotMet
3. APPLY - Attribute, life status and personality patches, then scandal
   (explicit delta, plus a flat bump when the scandal trigger is set)
4. SCORE - Consistency scoring against the dream card
5. END TURN - Decrement turns, recompute stage, haggard and scandal warning
6. RECORD - Append an immutable ScenarioResult to history

Every check runs before any mutation, so a rejected call leaves the player
state and history exactly as they were.

The engine is synchronous and not thread-safe; callers sharing one engine
across threads must synchronize externally.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Iterable, Optional, Union

from lifepath.engine.consistency import score_consistency
from lifepath.engine.dice import RandomSource, make_random_source, spin_wheel
from lifepath.engine.endings import evaluate_ending, get_ending_score
from lifepath.engine.errors import NoContentAvailable, NotFound, RequirementNotMet, RunComplete
from lifepath.engine.selector import ScenarioCatalog
from lifepath.models.content import (
    DreamCard,
    Ending,
    IntroProfile,
    OptionEffect,
    Scenario,
    ScenarioOption,
)
from lifepath.models.state import PlayerSnapshot, PlayerState, Reflection, ScenarioResult
from lifepath.parameters import DEFAULT_TOTAL_TURNS, SCANDAL_TRIGGER_BUMP
from lifepath.reflection.careers import destiny_bonus
from lifepath.reflection.report import LifeReport, build_report
from lifepath.storage import ContentRepository, get_content_repository, get_total_turns

logger = logging.getLogger(__name__)

NEUTRAL_SCENARIO_PREFIX = "neutral-stage-"


class RunPhase(Enum):
    """Lifecycle of a run."""

    ACTIVE = "active"
    COMPLETE = "complete"


def neutral_scenario(stage: int) -> Scenario:
    """Synthetic stand-in used when the catalog has no content.

    All four options are no-ops.
    """
    labels = {
        "A": "Keep going steadily",
        "B": "Try a new path",
        "C": "Pause and rest",
        "D": "Leave it to fate",
    }
    return Scenario(
        id=f"{NEUTRAL_SCENARIO_PREFIX}{stage}",
        stage=stage,
        title="A quiet stretch",
        description="Nothing in particular happens. Pick any option to keep going.",
        options=[ScenarioOption(id=option_id, label=label) for option_id, label in labels.items()],
    )


class SimulationEngine:
    """Runs a single life from first turn to ending.

    The engine owns an exclusive PlayerState and history log. The outside
    world reads state only through snapshot() and history().

    Attributes:
        dream_card: The run's dream card
        total_turns: Configured run length
    """

    def __init__(
        self,
        dream_card: DreamCard,
        total_turns: int = DEFAULT_TOTAL_TURNS,
        scenarios: Optional[Union[ScenarioCatalog, Iterable[Scenario]]] = None,
        initial_consistency: float = 0,
        rng: Optional[RandomSource] = None,
        random_seed: Optional[int] = None,
    ) -> None:
        """Initialize a run.

        Args:
            dream_card: Archetype chosen for this run
            total_turns: Number of turns (default 50)
            scenarios: Scenario catalog; defaults to the configured content repository
            initial_consistency: Starting consistency bonus
            rng: Random source for wheel spins and scenario picks
            random_seed: Seed for the default random source (ignored if rng is given)

        Raises:
            ValueError: If total_turns is less than 1
        """
        if total_turns < 1:
            raise ValueError(f"total_turns must be at least 1, got {total_turns}")

        if scenarios is None:
            scenarios = get_content_repository().list_scenarios()

        self.dream_card = dream_card
        self.total_turns = total_turns
        self._catalog = scenarios if isinstance(scenarios, ScenarioCatalog) else ScenarioCatalog(scenarios)
        self._random = make_random_source(rng, random_seed)

        self._player = PlayerState(dream_card=dream_card, total_turns=total_turns)
        if initial_consistency:
            self._player.apply_consistency_delta(initial_consistency)

        self._history: list[ScenarioResult] = []
        self._seen_ids: set[str] = set()
        self._synthetic: dict[str, Scenario] = {}

        logger.info(
            f"New run: dream={dream_card.id}, turns={total_turns}, "
            f"scenarios={len(self._catalog)}, initial_consistency={initial_consistency}"
        )

    # =========================================================================
    # Read access
    # =========================================================================

    @property
    def catalog(self) -> ScenarioCatalog:
        return self._catalog

    @property
    def phase(self) -> RunPhase:
        """ACTIVE while turns remain, COMPLETE afterwards."""
        if self._player.turns_remaining > 0:
            return RunPhase.ACTIVE
        return RunPhase.COMPLETE

    def is_complete(self) -> bool:
        return self.phase == RunPhase.COMPLETE

    def snapshot(self) -> PlayerSnapshot:
        """Independent copy of the current player state."""
        return self._player.snapshot()

    def history(self) -> list[ScenarioResult]:
        """Resolved turns, oldest first."""
        return list(self._history)

    def get_scenario(self, scenario_id: str) -> Optional[Scenario]:
        """Look up a catalog or synthetic scenario by id."""
        return self._catalog.by_id(scenario_id) or self._synthetic.get(scenario_id)

    def is_option_locked(self, option: ScenarioOption) -> bool:
        """Whether the player currently fails the option's requirements."""
        return bool(self._unmet_requirements(option))

    def available_options(self, scenario: Scenario) -> list[ScenarioOption]:
        """Options of the scenario the player can currently choose."""
        return [option for option in scenario.options if not self.is_option_locked(option)]

    # =========================================================================
    # Randomness
    # =========================================================================

    def spin_wheel(self) -> int:
        """Spin the six-sided life wheel."""
        roll = spin_wheel(self._random)
        logger.debug(f"Wheel spin: {roll}")
        return roll

    def next_scenario(self) -> Scenario:
        """Pick the next scenario for the current stage.

        Falls back to a synthetic neutral scenario when the catalog is empty,
        so a run never stalls.
        """
        stage = self._player.stage
        try:
            return self._catalog.pick_next(stage, self._seen_ids, self._random)
        except NoContentAvailable:
            logger.warning(f"No scenario content available at stage {stage}, using neutral scenario")
            return self.neutral_turn()

    def neutral_turn(self) -> Scenario:
        """Neutral scenario for the current stage, resolvable like any other.

        Lets a caller move on when every option of a scenario is locked.
        """
        scenario = neutral_scenario(self._player.stage)
        self._synthetic[scenario.id] = scenario
        return scenario

    # =========================================================================
    # Turn resolution
    # =========================================================================

    def resolve_scenario(self, scenario_id: str, option_id: str) -> ScenarioResult:
        """Resolve one turn by choosing an option of a scenario.

        Args:
            scenario_id: Id of the scenario being answered
            option_id: Id of the chosen option ("A".."D")

        Returns:
            The ScenarioResult appended to history

        Raises:
            RunComplete: If every turn has already been resolved
            NotFound: If the scenario or option does not exist
            RequirementNotMet: If the option's thresholds are not met
        """
        if self.is_complete():
            raise RunComplete(f"Run already complete after {len(self._history)} turns")

        scenario = self.get_scenario(scenario_id)
        if scenario is None:
            raise NotFound(f"Scenario not found: {scenario_id}")
        option = scenario.get_option(option_id)
        if option is None:
            raise NotFound(f"Option not found: {option_id} in scenario {scenario_id}")
        unmet = self._unmet_requirements(option)
        if unmet:
            raise RequirementNotMet(option_id, unmet)

        effect = option.effect
        self._apply_effect(effect)

        consistency = score_consistency(self.dream_card, effect)
        self._player.apply_consistency_delta(consistency.delta)

        self._player.end_turn()

        result = ScenarioResult(
            scenario_id=scenario_id,
            option_id=option.id,
            stage=scenario.stage,
            effect=effect,
            snapshot_after=self._player.snapshot(),
            reflection=Reflection(
                consistency_delta=consistency.delta,
                scandal_penalty=consistency.scandal_penalty,
                notes=tuple(consistency.notes),
            ),
        )
        self._history.append(result)
        self._seen_ids.add(scenario_id)

        logger.debug(
            f"Turn {len(self._history)}: {scenario_id}/{option.id} "
            f"consistency_delta={consistency.delta} stage={self._player.stage}"
        )
        if self.is_complete():
            logger.info(f"Run complete after {len(self._history)} turns")
        return result

    def _apply_effect(self, effect: OptionEffect) -> None:
        """Apply an effect's patches and scandal changes, in order."""
        self._player.apply_attribute_delta(effect.attributes)
        self._player.apply_life_status_delta(effect.life_status)
        self._player.apply_personality_delta(effect.personality)
        if effect.scandal_delta is not None:
            self._player.apply_scandal_delta(effect.scandal_delta)
        if effect.triggers.scandal:
            self._player.apply_scandal_delta(SCANDAL_TRIGGER_BUMP)

    def _unmet_requirements(self, option: ScenarioOption) -> list[str]:
        if option.requirements is None:
            return []
        return option.requirements.unmet(
            self._player.attributes.as_dict(),
            self._player.life_status.as_dict(),
        )

    # =========================================================================
    # Ending and report
    # =========================================================================

    def get_ending_score(self) -> int:
        """Aggregate ending score in [-500, 500]."""
        return get_ending_score(self._history)

    def evaluate_ending(self) -> Ending:
        """Ending selected by the ordered decision table."""
        return evaluate_ending(self._player.snapshot(), self._history)

    def generate_report(self, profile: Optional[IntroProfile] = None) -> LifeReport:
        """Life reflection report for the run so far.

        Args:
            profile: Optional intro profile used for career suggestions

        Returns:
            LifeReport with ending, score, personality profile, stage tally
            and career suggestions
        """
        return build_report(
            ending=self.evaluate_ending(),
            ending_score=self.get_ending_score(),
            snapshot=self._player.snapshot(),
            history=self._history,
            profile=profile,
        )


def create_engine(
    dream_card_id: str,
    repo: Optional[ContentRepository] = None,
    profile: Optional[IntroProfile] = None,
    total_turns: Optional[int] = None,
    rng: Optional[RandomSource] = None,
    random_seed: Optional[int] = None,
) -> SimulationEngine:
    """Create an engine from repository content.

    The starting consistency is the destiny bonus: a profile whose dominant
    trait recommends the chosen dream card starts ahead.

    Args:
        dream_card_id: Id of the dream card to play
        repo: Content repository (uses the configured one if not provided)
        profile: Optional intro profile
        total_turns: Run length (uses the configured default if not provided)
        rng: Optional random source
        random_seed: Optional seed for the default random source

    Returns:
        A new SimulationEngine

    Raises:
        NotFound: If the dream card does not exist
    """
    if repo is None:
        repo = get_content_repository()
    dream_card = repo.get_dream_card(dream_card_id)
    if dream_card is None:
        raise NotFound(f"Dream card not found: {dream_card_id}")

    return SimulationEngine(
        dream_card,
        total_turns=total_turns if total_turns is not None else get_total_turns(),
        scenarios=repo.list_scenarios(),
        initial_consistency=destiny_bonus(profile, dream_card),
        rng=rng,
        random_seed=random_seed,
    )
