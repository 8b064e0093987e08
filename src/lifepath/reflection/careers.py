"""Career suggestions and dream-card recommendations from an intro profile.

Intro profiles score three traits: Ambition, Creativity and Stability. The
dominant trait picks a recommended dream card (which earns a starting
consistency bonus) and a list of career directions for the reflection report.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Mapping, Optional

from lifepath.models.content import DreamCard, IntroProfile
from lifepath.parameters import DESTINY_BONUS

INTRO_TRAITS = ("Ambition", "Creativity", "Stability")


@dataclass(frozen=True)
class CareerSuggestion:
    """A career direction suggested in the reflection report."""

    title: str
    description: str

    def to_dict(self) -> dict:
        return asdict(self)


CAREER_SUGGESTIONS: dict[str, tuple[CareerSuggestion, ...]] = {
    "Ambition": (
        CareerSuggestion("Founder / CEO", "Pulls resources together, takes risks and drives a team toward growth."),
        CareerSuggestion("Corporate strategy consultant", "Designs growth paths and acquisition strategies; used to high-pressure calls."),
        CareerSuggestion("Investment banking analyst", "Handles large deals and financial models at a fast pace."),
        CareerSuggestion("Lawyer", "Combines the law with persuasion to win the best terms for clients."),
        CareerSuggestion("Sales / sales manager", "Driven by targets and relationships; enjoys clear goals and challenges."),
        CareerSuggestion("Product manager", "Balances technology and business to set a product's direction and pace."),
    ),
    "Creativity": (
        CareerSuggestion("UX / UI designer", "Blends aesthetics and user psychology into playful interfaces."),
        CareerSuggestion("Game designer", "Builds levels, stories and systems into a complete experience."),
        CareerSuggestion("Brand / visual designer", "Tells stories with colour and shape to build a distinctive brand."),
        CareerSuggestion("Architect", "Turns abstract ideas into real spaces with both creativity and structure."),
        CareerSuggestion("Multimedia creator", "Expresses ideas through video, music and motion design."),
        CareerSuggestion("Service designer", "Reworks whole service flows so the user journey feels natural."),
    ),
    "Stability": (
        CareerSuggestion("Financial planner", "Helps people and families allocate assets for steady long-term growth."),
        CareerSuggestion("Data analyst", "Organises data in a structured setting to support decisions."),
        CareerSuggestion("Civil servant / administrator", "Prefers clear rules and stable processes."),
        CareerSuggestion("HR specialist", "Looks after the organisation and its people within a clear framework."),
        CareerSuggestion("Risk management specialist", "Thinks through the worst case so the organisation avoids pitfalls."),
        CareerSuggestion("Healthcare administrator", "Coordinates medical teams and resources for lasting quality care."),
    ),
}

RECOMMENDED_DREAM_CARDS = {
    "Ambition": "founder",
    "Creativity": "artist",
    "Stability": "surgeon",
}

STARTING_CAREER_LABELS = {
    "Ambition": "Junior lawyer",
    "Creativity": "Junior designer",
    "Stability": "Steady office worker",
}

DEFAULT_CAREER_LABEL = "Career explorer"


def dominant_intro_trait(trait_scores: Optional[Mapping[str, float]]) -> Optional[str]:
    """Highest-scoring intro trait.

    Ties go to the earliest of Ambition, Creativity, Stability, then to other
    keys in mapping order. Returns None when there are no scores.
    """
    if not trait_scores:
        return None
    keys = [trait for trait in INTRO_TRAITS if trait in trait_scores]
    keys += [key for key in trait_scores if key not in INTRO_TRAITS]
    best_key, best_value = keys[0], -1.0
    for key in keys:
        value = trait_scores[key]
        if value > best_value:
            best_key, best_value = key, value
    return best_key


def profile_trait(profile: Optional[IntroProfile]) -> Optional[str]:
    """Dominant trait of a profile, falling back to its first declared trait."""
    if profile is None:
        return None
    trait = dominant_intro_trait(profile.trait_scores)
    if trait is None and profile.declared_traits:
        trait = profile.declared_traits[0]
    return trait


def recommended_dream_card_id(trait: Optional[str]) -> Optional[str]:
    """Dream card recommended for an intro trait, if any."""
    if trait is None:
        return None
    return RECOMMENDED_DREAM_CARDS.get(trait)


def destiny_bonus(profile: Optional[IntroProfile], card: DreamCard) -> int:
    """Starting consistency bonus when the card matches the profile's recommendation."""
    recommended = recommended_dream_card_id(profile_trait(profile))
    if recommended is not None and recommended == card.id:
        return DESTINY_BONUS
    return 0


def suggest_career_label(trait_scores: Optional[Mapping[str, float]]) -> str:
    """Short starting-career label for the intro screen."""
    trait = dominant_intro_trait(trait_scores)
    return STARTING_CAREER_LABELS.get(trait or "", DEFAULT_CAREER_LABEL)


def career_suggestions(profile: Optional[IntroProfile]) -> list[CareerSuggestion]:
    """Career directions for the profile's dominant trait.

    Pure lookup: empty without a profile or a recognised trait.
    """
    trait = profile_trait(profile)
    if trait is None:
        return []
    return list(CAREER_SUGGESTIONS.get(trait, ()))
