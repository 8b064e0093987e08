"""Exceptions raised by the Lifepath engine.

Every failure is raised synchronously to the immediate caller. None is retried
internally, and a rejected resolution leaves the player state and history
untouched.
"""


class SimulationError(Exception):
    """Base class for engine failures."""


class NotFound(SimulationError, LookupError):
    """Unknown scenario, option or dream card id."""


class RequirementNotMet(SimulationError):
    """The chosen option is gated by a threshold the player does not meet."""

    def __init__(self, option_id: str, unmet: list[str]):
        self.option_id = option_id
        self.unmet = unmet
        super().__init__(f"Requirement not met for option {option_id}: {', '.join(unmet)}")


class NoContentAvailable(SimulationError):
    """The scenario catalog is empty."""


class RunComplete(SimulationError):
    """Every turn of the run has already been resolved."""
