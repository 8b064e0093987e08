"""Shared pytest fixtures and markers for all tests."""

import random

import pytest

from lifepath.models.content import DreamCard, OptionEffect, Scenario, ScenarioOption
from lifepath.storage import InMemoryContentRepository


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "cli: marks Textual pilot tests of the terminal app"
    )


def make_scenario(scenario_id: str, stage: int, **option_effects) -> Scenario:
    """Build a scenario whose options A.. carry the given effect dicts.

    With no effects the scenario has a single no-op option A.
    """
    effects = option_effects or {"A": {}}
    return Scenario(
        id=scenario_id,
        stage=stage,
        title=scenario_id.replace("-", " ").title(),
        options=[
            ScenarioOption(id=option_id, label=f"Option {option_id}", effect=OptionEffect(**effect))
            for option_id, effect in effects.items()
        ],
    )


@pytest.fixture
def investigator_card():
    """Dream card with only a primary trait of I."""
    return DreamCard(id="investigator", label="Investigator", primary_trait="I")


@pytest.fixture
def surgeon_card():
    """Dream card with primary I and secondary S."""
    return DreamCard(id="surgeon", label="Surgeon", primary_trait="I", secondary_trait="S")


@pytest.fixture
def staged_scenarios():
    """Two no-op scenarios per stage."""
    return [make_scenario(f"s{stage}-{n}", stage) for stage in range(1, 6) for n in (1, 2)]


@pytest.fixture
def content_repo(surgeon_card, investigator_card, staged_scenarios):
    """In-memory repository with two dream cards and staged scenarios."""
    return InMemoryContentRepository(
        scenarios=staged_scenarios,
        dream_cards=[surgeon_card, investigator_card],
    )


@pytest.fixture
def rng():
    """Deterministic random source."""
    return random.Random(1234)
