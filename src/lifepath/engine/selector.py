"""Scenario catalog and next-scenario selection for Lifepath.

Selection policy for pick_next(stage, seen_ids):
1. Unseen scenarios of the current stage, uniformly at random.
2. Otherwise the first later stage (stage+1..5) with unseen scenarios.
3. Otherwise the nearest earlier stage with unseen scenarios. Without this
   step a player who runs ahead of the content of later stages would see
   repeats while earlier stages still hold unseen scenarios; with it no
   scenario is drawn twice until the whole catalog has been seen.
4. Otherwise reuse: any scenario of the current stage, or of the whole
   catalog if the stage has none.
5. An empty catalog raises NoContentAvailable.

A run of any length therefore never stalls for content, but repeats once every
scenario in the catalog has been seen.
"""

from __future__ import annotations

import logging
from typing import AbstractSet, Iterable, Optional

from lifepath.engine.dice import RandomSource
from lifepath.engine.errors import NoContentAvailable
from lifepath.models.content import Scenario
from lifepath.parameters import STAGE_COUNT

logger = logging.getLogger(__name__)


class ScenarioCatalog:
    """Immutable scenario content with stage and id lookups.

    Attributes:
        scenarios: Scenarios in catalog order
    """

    def __init__(self, scenarios: Iterable[Scenario]):
        """Initialize the catalog.

        Args:
            scenarios: Scenario records, in the order they should be listed

        Raises:
            ValueError: If two scenarios share an id
        """
        self.scenarios: tuple[Scenario, ...] = tuple(scenarios)
        self._by_id: dict[str, Scenario] = {}
        for scenario in self.scenarios:
            if scenario.id in self._by_id:
                raise ValueError(f"Duplicate scenario id: {scenario.id}")
            self._by_id[scenario.id] = scenario

    def __len__(self) -> int:
        return len(self.scenarios)

    def __contains__(self, scenario_id: object) -> bool:
        return scenario_id in self._by_id

    def by_stage(self, stage: int) -> list[Scenario]:
        """All scenarios tagged with the stage, in catalog order."""
        return [scenario for scenario in self.scenarios if scenario.stage == stage]

    def by_id(self, scenario_id: str) -> Optional[Scenario]:
        """Look up a scenario by id, or None if absent."""
        return self._by_id.get(scenario_id)

    def unseen(self, stage: int, seen_ids: AbstractSet[str]) -> list[Scenario]:
        """Scenarios of the stage not in seen_ids."""
        return [s for s in self.by_stage(stage) if s.id not in seen_ids]

    def pick_next(
        self,
        stage: int,
        seen_ids: AbstractSet[str],
        rng: RandomSource,
    ) -> Scenario:
        """Pick the next scenario for a player at the given stage.

        Args:
            stage: The player's current stage
            seen_ids: Ids of scenarios already resolved in this run
            rng: Random source for the uniform pick

        Returns:
            The chosen scenario

        Raises:
            NoContentAvailable: If the catalog is empty
        """
        if not self.scenarios:
            raise NoContentAvailable("Scenario catalog is empty")

        for candidate_stage in range(stage, STAGE_COUNT + 1):
            pool = self.unseen(candidate_stage, seen_ids)
            if pool:
                if candidate_stage != stage:
                    logger.debug(f"Stage {stage} exhausted, drawing from stage {candidate_stage}")
                return rng.choice(pool)

        for candidate_stage in range(stage - 1, 0, -1):
            pool = self.unseen(candidate_stage, seen_ids)
            if pool:
                logger.debug(f"Later stages exhausted, drawing from stage {candidate_stage}")
                return rng.choice(pool)

        pool = self.by_stage(stage) or list(self.scenarios)
        logger.warning("All scenarios seen, reusing content")
        return rng.choice(pool)
