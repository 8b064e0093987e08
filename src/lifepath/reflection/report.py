"""Life reflection report for Lifepath.

Combines the run's ending, ending score, final personality vector, a per-stage
tally of resolved scenarios and career suggestions into one report. Building a
report only reads state; it never mutates the run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

from lifepath.models.content import Ending, IntroProfile
from lifepath.models.state import PlayerSnapshot, ScenarioResult
from lifepath.parameters import STAGE_COUNT
from lifepath.reflection.careers import CareerSuggestion, career_suggestions

TRAIT_NAMES = {
    "R": "Realistic",
    "I": "Investigative",
    "A": "Artistic",
    "S": "Social",
    "E": "Enterprising",
    "C": "Conventional",
}


@dataclass
class LifeReport:
    """Complete end-of-run reflection.

    Attributes:
        ending: Ending chosen by the decision table
        ending_score: Aggregate ending score (-500..500)
        personality_profile: Final hidden personality vector
        dominant_personality: Highest-scoring personality trait
        stage_summaries: Resolved scenarios per stage, keys 1..5 always present
        suggested_careers: Career directions from the intro profile
    """

    ending: Ending
    ending_score: int
    personality_profile: dict[str, float]
    dominant_personality: str
    stage_summaries: dict[int, int]
    suggested_careers: list[CareerSuggestion] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "ending": self.ending.model_dump(),
            "ending_score": self.ending_score,
            "personality_profile": dict(self.personality_profile),
            "dominant_personality": self.dominant_personality,
            "stage_summaries": {str(k): v for k, v in self.stage_summaries.items()},
            "suggested_careers": [c.to_dict() for c in self.suggested_careers],
        }


def stage_summaries(history: Sequence[ScenarioResult]) -> dict[int, int]:
    """Count resolved scenarios per stage."""
    counts = {stage: 0 for stage in range(1, STAGE_COUNT + 1)}
    for entry in history:
        counts[entry.stage] = counts.get(entry.stage, 0) + 1
    return counts


def build_report(
    ending: Ending,
    ending_score: int,
    snapshot: PlayerSnapshot,
    history: Sequence[ScenarioResult],
    profile: Optional[IntroProfile] = None,
) -> LifeReport:
    """Assemble a LifeReport from already-evaluated run results."""
    vector = snapshot.hidden.personality
    personality = vector.as_dict()
    return LifeReport(
        ending=ending,
        ending_score=ending_score,
        personality_profile=personality,
        dominant_personality=vector.dominant(),
        stage_summaries=stage_summaries(history),
        suggested_careers=career_suggestions(profile),
    )


def format_report(report: LifeReport) -> str:
    """Render a report as plain text.

    Args:
        report: The report to render

    Returns:
        Multi-line text suitable for a terminal
    """
    lines = [
        f"Ending: {report.ending.title}",
        f"  {report.ending.description}",
        f"Ending score: {report.ending_score}",
        "",
        "Personality profile:",
    ]
    for key, value in report.personality_profile.items():
        marker = " *" if key == report.dominant_personality else ""
        lines.append(f"  {TRAIT_NAMES.get(key, key):<14} {value:>6g}{marker}")

    lines.append("")
    lines.append("Scenarios per stage:")
    for stage, count in report.stage_summaries.items():
        lines.append(f"  Stage {stage}: {count}")

    if report.suggested_careers:
        lines.append("")
        lines.append("Suggested careers:")
        for suggestion in report.suggested_careers:
            lines.append(f"  - {suggestion.title}: {suggestion.description}")

    return "\n".join(lines)
