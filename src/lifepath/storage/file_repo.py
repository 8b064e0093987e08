"""File-based content repository using JSON files.

Layout of a content directory:

    dream_cards.json        list of dream cards
    scenarios/*.json        one file per stage (or any grouping), each holding
                            a list of scenarios or a single scenario object

Every record is validated with pydantic on load, so malformed content fails
fast with a ValidationError naming the file's offending field.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional

from lifepath.models.content import DreamCard, Scenario

from .repository import ContentRepository

logger = logging.getLogger(__name__)

DREAM_CARDS_FILE = "dream_cards.json"
SCENARIOS_DIR = "scenarios"


def _read_json(path: Path) -> Any:
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def _as_records(data: Any) -> list[dict]:
    """Accept either a list of records or a single record object."""
    if isinstance(data, list):
        return data
    return [data]


class FileContentRepository(ContentRepository):
    """JSON file-based content repository.

    Content is read once, on first access, and cached for the lifetime of the
    repository. Call reload() to pick up edits.
    """

    def __init__(self, content_path: str | Path):
        """Initialize repository.

        Args:
            content_path: Directory holding dream_cards.json and scenarios/
        """
        self.content_path = Path(content_path)
        self._scenarios: Optional[dict[str, Scenario]] = None
        self._dream_cards: Optional[dict[str, DreamCard]] = None

    @property
    def scenarios_path(self) -> Path:
        return self.content_path / SCENARIOS_DIR

    @property
    def dream_cards_path(self) -> Path:
        return self.content_path / DREAM_CARDS_FILE

    def reload(self) -> None:
        """Drop cached content so the next access reads from disk."""
        self._scenarios = None
        self._dream_cards = None

    def _load_scenarios(self) -> dict[str, Scenario]:
        if self._scenarios is not None:
            return self._scenarios

        scenarios: dict[str, Scenario] = {}
        if not self.scenarios_path.is_dir():
            logger.warning(f"Scenario directory not found: {self.scenarios_path}")
        else:
            for path in sorted(self.scenarios_path.glob("*.json")):
                for record in _as_records(_read_json(path)):
                    scenario = Scenario.model_validate(record)
                    if scenario.id in scenarios:
                        raise ValueError(f"Duplicate scenario id {scenario.id!r} in {path}")
                    scenarios[scenario.id] = scenario
        logger.info(f"Loaded {len(scenarios)} scenarios from {self.scenarios_path}")
        self._scenarios = scenarios
        return scenarios

    def _load_dream_cards(self) -> dict[str, DreamCard]:
        if self._dream_cards is not None:
            return self._dream_cards

        cards: dict[str, DreamCard] = {}
        if not self.dream_cards_path.exists():
            logger.warning(f"Dream card file not found: {self.dream_cards_path}")
        else:
            for record in _as_records(_read_json(self.dream_cards_path)):
                card = DreamCard.model_validate(record)
                cards[card.id] = card
        logger.debug(f"Loaded {len(cards)} dream cards from {self.dream_cards_path}")
        self._dream_cards = cards
        return cards

    def list_scenarios(self) -> list[Scenario]:
        """Return every scenario, ordered by stage then id."""
        return sorted(self._load_scenarios().values(), key=lambda s: (s.stage, s.id))

    def get_scenario(self, scenario_id: str) -> Optional[Scenario]:
        """Load a scenario by ID."""
        return self._load_scenarios().get(scenario_id)

    def list_dream_cards(self) -> list[DreamCard]:
        """Return every dream card in file order."""
        return list(self._load_dream_cards().values())

    def get_dream_card(self, card_id: str) -> Optional[DreamCard]:
        """Load a dream card by ID."""
        return self._load_dream_cards().get(card_id)
