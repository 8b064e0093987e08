"""Reflection module for Lifepath end-of-run analysis.

This module turns a finished run into a life reflection report and maps intro
profiles to dream-card recommendations and career suggestions.

Classes:
    LifeReport: Ending, score, personality profile, stage tally and careers.
    CareerSuggestion: A suggested career direction.

Functions:
    build_report: Assemble a LifeReport from evaluated run results.
    format_report: Render a LifeReport as plain text.
    destiny_bonus: Starting consistency bonus for a recommended dream card.
    career_suggestions: Career directions for an intro profile.
"""

from lifepath.reflection.careers import (
    CAREER_SUGGESTIONS,
    INTRO_TRAITS,
    CareerSuggestion,
    career_suggestions,
    destiny_bonus,
    dominant_intro_trait,
    recommended_dream_card_id,
    suggest_career_label,
)
from lifepath.reflection.report import (
    LifeReport,
    build_report,
    format_report,
    stage_summaries,
)

__all__ = [
    "CAREER_SUGGESTIONS",
    "CareerSuggestion",
    "INTRO_TRAITS",
    "LifeReport",
    "build_report",
    "career_suggestions",
    "destiny_bonus",
    "dominant_intro_trait",
    "format_report",
    "recommended_dream_card_id",
    "stage_summaries",
    "suggest_career_label",
]
