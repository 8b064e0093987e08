"""Abstract repository interface for Lifepath content.

Scenario and dream-card content reaches the engine through a ContentRepository.
The JSON file backend and the in-memory backend both implement it, so the CLI,
the batch runner and the tests use content without knowing where it lives.
"""

from abc import ABC, abstractmethod
from typing import Optional

from lifepath.models.content import DreamCard, Scenario


class ContentRepository(ABC):
    """Abstract base class for scenario and dream-card content."""

    @abstractmethod
    def list_scenarios(self) -> list[Scenario]:
        """Return every available scenario.

        Returns:
            Scenarios ordered by stage, then id
        """
        pass

    @abstractmethod
    def get_scenario(self, scenario_id: str) -> Optional[Scenario]:
        """Load a scenario by ID.

        Args:
            scenario_id: Unique identifier for the scenario

        Returns:
            The scenario, or None if not found
        """
        pass

    @abstractmethod
    def list_dream_cards(self) -> list[DreamCard]:
        """Return every available dream card, in catalog order."""
        pass

    @abstractmethod
    def get_dream_card(self, card_id: str) -> Optional[DreamCard]:
        """Load a dream card by ID.

        Args:
            card_id: Unique identifier for the dream card

        Returns:
            The dream card, or None if not found
        """
        pass


class InMemoryContentRepository(ContentRepository):
    """Content repository backed by lists held in memory."""

    def __init__(
        self,
        scenarios: Optional[list[Scenario]] = None,
        dream_cards: Optional[list[DreamCard]] = None,
    ):
        self._scenarios = list(scenarios or [])
        self._dream_cards = list(dream_cards or [])

    def list_scenarios(self) -> list[Scenario]:
        return sorted(self._scenarios, key=lambda s: (s.stage, s.id))

    def get_scenario(self, scenario_id: str) -> Optional[Scenario]:
        for scenario in self._scenarios:
            if scenario.id == scenario_id:
                return scenario
        return None

    def list_dream_cards(self) -> list[DreamCard]:
        return list(self._dream_cards)

    def get_dream_card(self, card_id: str) -> Optional[DreamCard]:
        for card in self._dream_cards:
            if card.id == card_id:
                return card
        return None
