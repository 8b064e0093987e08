"""Tests for lifepath.reflection: careers and the life report."""

import pytest

from lifepath.engine.endings import DEFAULT_ENDING
from lifepath.models.content import DreamCard, IntroProfile, OptionEffect
from lifepath.models.state import PlayerState, Reflection, ScenarioResult
from lifepath.reflection import (
    CAREER_SUGGESTIONS,
    INTRO_TRAITS,
    build_report,
    career_suggestions,
    destiny_bonus,
    dominant_intro_trait,
    format_report,
    recommended_dream_card_id,
    stage_summaries,
    suggest_career_label,
)


@pytest.fixture
def founder_card():
    return DreamCard(id="founder", label="Founder", primary_trait="E", secondary_trait="I")


class TestIntroTraits:
    """Tests for intro trait scoring."""

    def test_dominant_trait(self):
        assert dominant_intro_trait({"Ambition": 2, "Creativity": 7, "Stability": 3}) == "Creativity"

    def test_ties_go_to_first_listed(self):
        assert dominant_intro_trait({"Ambition": 4, "Creativity": 4, "Stability": 4}) == "Ambition"

    def test_ties_ignore_mapping_order(self):
        assert dominant_intro_trait({"Stability": 4, "Ambition": 4}) == "Ambition"
        assert dominant_intro_trait({"Stability": 5, "Creativity": 5, "Ambition": 1}) == "Creativity"

    def test_unknown_traits_rank_after_known_ones(self):
        assert dominant_intro_trait({"Curiosity": 6, "Stability": 6}) == "Stability"
        assert dominant_intro_trait({"Curiosity": 7, "Stability": 6}) == "Curiosity"

    def test_empty_scores(self):
        assert dominant_intro_trait({}) is None
        assert dominant_intro_trait(None) is None

    def test_recommended_cards(self):
        assert recommended_dream_card_id("Ambition") == "founder"
        assert recommended_dream_card_id("Creativity") == "artist"
        assert recommended_dream_card_id("Stability") == "surgeon"
        assert recommended_dream_card_id("Curiosity") is None
        assert recommended_dream_card_id(None) is None

    def test_career_label(self):
        assert suggest_career_label({"Creativity": 5}) == "Junior designer"
        assert suggest_career_label({}) == "Career explorer"


class TestDestinyBonus:
    """Tests for the starting consistency bonus."""

    def test_matching_card(self, founder_card):
        profile = IntroProfile(trait_scores={"Ambition": 9, "Stability": 2})
        assert destiny_bonus(profile, founder_card) == 10

    def test_other_card(self, surgeon_card):
        profile = IntroProfile(trait_scores={"Ambition": 9})
        assert destiny_bonus(profile, surgeon_card) == 0

    def test_no_profile(self, founder_card):
        assert destiny_bonus(None, founder_card) == 0

    def test_declared_trait_fallback(self, founder_card):
        profile = IntroProfile(declared_traits=("Ambition",))
        assert destiny_bonus(profile, founder_card) == 10


class TestCareerSuggestions:
    """Tests for career_suggestions."""

    def test_six_per_trait(self):
        for trait in INTRO_TRAITS:
            assert len(CAREER_SUGGESTIONS[trait]) == 6

    def test_for_profile(self):
        profile = IntroProfile(trait_scores={"Stability": 3})
        suggestions = career_suggestions(profile)
        assert [s.title for s in suggestions] == [s.title for s in CAREER_SUGGESTIONS["Stability"]]

    def test_without_profile(self):
        assert career_suggestions(None) == []

    def test_unknown_trait(self):
        assert career_suggestions(IntroProfile(trait_scores={"Curiosity": 3})) == []


class TestReport:
    """Tests for build_report and format_report."""

    @pytest.fixture
    def player(self, surgeon_card):
        state = PlayerState(dream_card=surgeon_card)
        state.apply_personality_delta({"S": 12})
        return state

    def _history(self, player, stages):
        return [
            ScenarioResult(
                scenario_id=f"s{i}",
                option_id="A",
                stage=stage,
                effect=OptionEffect(),
                snapshot_after=player.snapshot(),
                reflection=Reflection(),
            )
            for i, stage in enumerate(stages)
        ]

    def test_stage_summaries_always_has_five_keys(self):
        assert stage_summaries([]) == {1: 0, 2: 0, 3: 0, 4: 0, 5: 0}

    def test_stage_summaries_counts(self, player):
        counts = stage_summaries(self._history(player, [1, 1, 3, 5]))
        assert counts == {1: 2, 2: 0, 3: 1, 4: 0, 5: 1}

    def test_build_report(self, player):
        profile = IntroProfile(trait_scores={"Creativity": 4})
        report = build_report(
            ending=DEFAULT_ENDING,
            ending_score=42,
            snapshot=player.snapshot(),
            history=self._history(player, [2]),
            profile=profile,
        )
        assert report.ending == DEFAULT_ENDING
        assert report.ending_score == 42
        assert report.personality_profile["S"] == 22
        assert report.dominant_personality == "S"
        assert report.stage_summaries[2] == 1
        assert len(report.suggested_careers) == 6

    def test_report_does_not_mutate_inputs(self, player):
        snapshot = player.snapshot()
        history = self._history(player, [1])
        build_report(DEFAULT_ENDING, 0, snapshot, history)
        assert snapshot == player.snapshot()
        assert len(history) == 1

    def test_to_dict_and_format(self, player):
        report = build_report(DEFAULT_ENDING, -3, player.snapshot(), [], IntroProfile(trait_scores={"Ambition": 1}))
        data = report.to_dict()
        assert data["ending"]["id"] == DEFAULT_ENDING.id
        assert data["stage_summaries"]["1"] == 0
        text = format_report(report)
        assert DEFAULT_ENDING.title in text
        assert "Ending score: -3" in text
        assert "Suggested careers:" in text
