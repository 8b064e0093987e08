"""Tests for lifepath.engine.game_engine.

Tests cover:
- Engine initialization and validation
- Turn resolution order and effects
- Rejected resolutions are side-effect free
- Scenario selection and the neutral fallback
- Run completion, endings and reports
- create_engine with repository content and destiny bonus
"""

import random

import pytest

from lifepath.engine.errors import NotFound, RequirementNotMet, RunComplete
from lifepath.engine.game_engine import (
    NEUTRAL_SCENARIO_PREFIX,
    RunPhase,
    SimulationEngine,
    create_engine,
    neutral_scenario,
)
from lifepath.models.content import (
    IntroProfile,
    OptionEffect,
    Requirements,
    Scenario,
    ScenarioOption,
)
from lifepath.models.state import ScandalLevel

from conftest import make_scenario


@pytest.fixture
def gated_scenario():
    """Scenario whose option B needs intellect 50."""
    return Scenario(
        id="gated",
        stage=1,
        title="Gated",
        options=[
            ScenarioOption(id="A", label="Open", effect=OptionEffect(life_status={"money": 5})),
            ScenarioOption(
                id="B",
                label="Locked",
                effect=OptionEffect(life_status={"money": 500}),
                requirements=Requirements(min_attributes={"intellect": 50}),
            ),
        ],
    )


@pytest.fixture
def engine(investigator_card, gated_scenario, rng):
    scenarios = [
        make_scenario("study", 1, A={"personality": {"I": 5}, "life_status": {"happiness": 5}}),
        make_scenario(
            "bribe",
            1,
            A={"scandal_delta": 50, "triggers": {"scandal": True}},
            B={"scandal_delta": 50},
        ),
        gated_scenario,
        make_scenario("later", 2),
    ]
    return SimulationEngine(investigator_card, scenarios=scenarios, rng=rng)


class TestInitialization:
    """Tests for engine construction."""

    def test_defaults(self, engine):
        snapshot = engine.snapshot()
        assert engine.total_turns == 50
        assert snapshot.turns_remaining == 50
        assert snapshot.stage == 1
        assert engine.phase == RunPhase.ACTIVE
        assert engine.history() == []

    def test_total_turns_must_be_positive(self, investigator_card):
        with pytest.raises(ValueError):
            SimulationEngine(investigator_card, total_turns=0, scenarios=[])

    def test_initial_consistency(self, investigator_card):
        engine = SimulationEngine(investigator_card, scenarios=[], initial_consistency=10)
        assert engine.snapshot().hidden.consistency_score == 10

    def test_duplicate_scenarios_rejected(self, investigator_card):
        with pytest.raises(ValueError):
            SimulationEngine(investigator_card, scenarios=[make_scenario("x", 1), make_scenario("x", 1)])


class TestResolveScenario:
    """Tests for resolve_scenario."""

    def test_worked_example(self, engine):
        result = engine.resolve_scenario("study", "A")
        snapshot = engine.snapshot()
        assert result.reflection.consistency_delta == 20
        assert snapshot.life_status.happiness == 55
        assert snapshot.turns_remaining == 49
        assert snapshot.stage == 1
        assert snapshot.hidden.consistency_score == 20
        assert snapshot.hidden.personality.I == 15

    def test_result_recorded(self, engine):
        result = engine.resolve_scenario("study", "A")
        history = engine.history()
        assert history == [result]
        assert result.scenario_id == "study"
        assert result.option_id == "A"
        assert result.stage == 1
        assert result.snapshot_after == engine.snapshot()

    def test_scandal_trigger_adds_bump(self, engine):
        engine.resolve_scenario("bribe", "A")
        snapshot = engine.snapshot()
        assert snapshot.hidden.scandal_value == 70
        assert snapshot.scandal == ScandalLevel.WARNING

    def test_scandal_delta_twice_reaches_max(self, engine):
        engine.resolve_scenario("bribe", "B")
        engine.resolve_scenario("bribe", "B")
        snapshot = engine.snapshot()
        assert snapshot.hidden.scandal_value == 100
        assert snapshot.scandal == ScandalLevel.MAX

    def test_unknown_scenario(self, engine):
        with pytest.raises(NotFound):
            engine.resolve_scenario("missing", "A")

    def test_unknown_option(self, engine):
        with pytest.raises(NotFound):
            engine.resolve_scenario("study", "D")

    def test_not_found_is_lookup_error(self, engine):
        with pytest.raises(LookupError):
            engine.resolve_scenario("missing", "A")

    def test_requirement_not_met(self, engine):
        with pytest.raises(RequirementNotMet) as exc_info:
            engine.resolve_scenario("gated", "B")
        assert exc_info.value.option_id == "B"
        assert exc_info.value.unmet

    def test_rejected_resolution_has_no_side_effects(self, engine):
        engine.resolve_scenario("study", "A")
        before = engine.snapshot()
        history_before = engine.history()
        for scenario_id, option_id in [("gated", "B"), ("missing", "A"), ("study", "C")]:
            with pytest.raises((RequirementNotMet, NotFound)):
                engine.resolve_scenario(scenario_id, option_id)
        assert engine.snapshot() == before
        assert engine.history() == history_before

    def test_option_unlocks_when_threshold_met(self, engine):
        engine._player.apply_attribute_delta({"intellect": 40})
        result = engine.resolve_scenario("gated", "B")
        assert result.option_id == "B"

    def test_available_options(self, engine, gated_scenario):
        assert [o.id for o in engine.available_options(gated_scenario)] == ["A"]
        assert engine.is_option_locked(gated_scenario.options[1])

    def test_history_is_a_copy(self, engine):
        engine.resolve_scenario("study", "A")
        engine.history().clear()
        assert len(engine.history()) == 1

    def test_result_effect_cannot_rewrite_catalog(self, engine):
        result = engine.resolve_scenario("study", "A")
        with pytest.raises(TypeError):
            result.effect.personality["I"] = 1000
        with pytest.raises(TypeError):
            engine.history()[0].effect.life_status["happiness"] = 1000
        effect = engine.catalog.by_id("study").options[0].effect
        assert effect.personality == {"I": 5}
        assert effect.life_status == {"happiness": 5}

    def test_history_snapshot_cannot_be_patched(self, engine):
        engine.resolve_scenario("study", "A")
        entry = engine.history()[0]
        with pytest.raises(TypeError):
            entry.snapshot_after.attributes.apply_patch({"intellect": 500})
        assert engine.history()[0].snapshot_after.attributes.intellect == 10
        assert engine.snapshot().attributes.intellect == 10

    def test_requirements_are_read_only(self, gated_scenario):
        requirements = gated_scenario.options[1].requirements
        with pytest.raises(TypeError):
            requirements.min_attributes["intellect"] = 0
        assert requirements.min_attributes == {"intellect": 50}


class TestRunCompletion:
    """Tests for the end of a run."""

    def test_run_complete_after_last_turn(self, investigator_card):
        engine = SimulationEngine(investigator_card, total_turns=2, scenarios=[make_scenario("x", 1)])
        engine.resolve_scenario("x", "A")
        engine.resolve_scenario("x", "A")
        assert engine.is_complete()
        assert engine.phase == RunPhase.COMPLETE
        with pytest.raises(RunComplete):
            engine.resolve_scenario("x", "A")
        assert len(engine.history()) == 2

    def test_stage_reaches_five(self, investigator_card):
        engine = SimulationEngine(investigator_card, total_turns=10, scenarios=[make_scenario("x", 1)])
        stages = []
        for _ in range(10):
            engine.resolve_scenario("x", "A")
            stages.append(engine.snapshot().stage)
        assert stages == sorted(stages)
        assert stages[-1] == 5

    def test_report(self, investigator_card):
        engine = SimulationEngine(investigator_card, total_turns=3, scenarios=[make_scenario("x", 1)])
        for _ in range(3):
            engine.resolve_scenario("x", "A")
        report = engine.generate_report()
        assert report.ending == engine.evaluate_ending()
        assert report.ending_score == engine.get_ending_score()
        assert report.stage_summaries == {1: 3, 2: 0, 3: 0, 4: 0, 5: 0}
        assert report.suggested_careers == []


class TestScenarioSelection:
    """Tests for next_scenario and the neutral fallback."""

    def test_next_scenario_current_stage(self, engine):
        assert engine.next_scenario().stage == 1

    def test_next_scenario_skips_resolved(self, engine):
        engine.resolve_scenario("study", "A")
        engine.resolve_scenario("bribe", "B")
        engine.resolve_scenario("gated", "A")
        assert engine.next_scenario().id == "later"

    def test_empty_catalog_uses_neutral(self, investigator_card):
        engine = SimulationEngine(investigator_card, scenarios=[])
        scenario = engine.next_scenario()
        assert scenario.id.startswith(NEUTRAL_SCENARIO_PREFIX)
        assert len(scenario.options) == 4
        assert engine.get_scenario(scenario.id) == scenario

    def test_neutral_options_are_no_ops(self, investigator_card):
        engine = SimulationEngine(investigator_card, scenarios=[])
        before = engine.snapshot()
        scenario = engine.next_scenario()
        result = engine.resolve_scenario(scenario.id, "C")
        after = engine.snapshot()
        assert result.reflection.consistency_delta == 0
        assert after.attributes == before.attributes
        assert after.life_status == before.life_status
        assert after.hidden == before.hidden
        assert after.turns_remaining == 49

    def test_neutral_turn_for_current_stage(self, investigator_card):
        engine = SimulationEngine(investigator_card, total_turns=5, scenarios=[make_scenario("x", 1)])
        engine.resolve_scenario("x", "A")
        scenario = engine.neutral_turn()
        assert scenario.stage == engine.snapshot().stage
        engine.resolve_scenario(scenario.id, "A")

    def test_neutral_scenario_shape(self):
        scenario = neutral_scenario(3)
        assert scenario.stage == 3
        assert [o.id for o in scenario.options] == ["A", "B", "C", "D"]
        assert all(o.effect == OptionEffect() for o in scenario.options)

    def test_spin_wheel_range(self, engine):
        rolls = {engine.spin_wheel() for _ in range(200)}
        assert rolls <= {1, 2, 3, 4, 5, 6}
        assert len(rolls) > 1

    def test_seeded_runs_are_reproducible(self, investigator_card, staged_scenarios):
        def play(seed):
            engine = SimulationEngine(investigator_card, total_turns=10, scenarios=staged_scenarios, random_seed=seed)
            picks = []
            while not engine.is_complete():
                scenario = engine.next_scenario()
                picks.append(scenario.id)
                engine.resolve_scenario(scenario.id, "A")
            return picks

        assert play(11) == play(11)

    def test_injected_rng_is_used(self, investigator_card, staged_scenarios):
        a = SimulationEngine(investigator_card, scenarios=staged_scenarios, rng=random.Random(3))
        b = SimulationEngine(investigator_card, scenarios=staged_scenarios, rng=random.Random(3))
        assert [a.spin_wheel() for _ in range(5)] == [b.spin_wheel() for _ in range(5)]


class TestCreateEngine:
    """Tests for create_engine."""

    def test_loads_from_repository(self, content_repo):
        engine = create_engine("surgeon", repo=content_repo, total_turns=5)
        assert engine.dream_card.id == "surgeon"
        assert len(engine.catalog) == 10
        assert engine.snapshot().hidden.consistency_score == 0

    def test_unknown_dream_card(self, content_repo):
        with pytest.raises(NotFound):
            create_engine("astronaut", repo=content_repo)

    def test_destiny_bonus_for_recommended_card(self, content_repo):
        profile = IntroProfile(trait_scores={"Ambition": 1, "Creativity": 0, "Stability": 5})
        engine = create_engine("surgeon", repo=content_repo, profile=profile)
        assert engine.snapshot().hidden.consistency_score == 10

    def test_no_bonus_for_other_card(self, content_repo):
        profile = IntroProfile(trait_scores={"Ambition": 5})
        engine = create_engine("surgeon", repo=content_repo, profile=profile)
        assert engine.snapshot().hidden.consistency_score == 0

    def test_total_turns_from_environment(self, content_repo, monkeypatch):
        monkeypatch.setenv("LIFEPATH_TOTAL_TURNS", "12")
        engine = create_engine("surgeon", repo=content_repo)
        assert engine.total_turns == 12
