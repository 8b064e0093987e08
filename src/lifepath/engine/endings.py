"""Run endings for Lifepath.

Endings are an ordered decision table of (ending, predicate) rules evaluated
top to bottom against the final snapshot and the run history. The first rule
whose predicate holds wins, and the last rule matches unconditionally. The
order is part of the contract: when two conditions hold at once, the earlier
rule decides.

Rule order:
 1. Legendary research    intellect > 90 and a legend-flagged choice
 2. Tired billionaire     money > 1,000,000 and happiness < 30
 3. Free artist           inspiration > 85 and happiness > 80
 4. Scandal               scandal value >= 100
 5. Reversal              a "Reversal roulette" choice
 6. Mentor                personality S > 85
 7. Order guardian        personality C > 90
 8. Data hermit           personality I > 85 and S < 30
 9. Forgotten gear        physical > 80 and personality E < 30
10. Content tourist       inspiration > 80 and stress > 70
11. Athlete               physical > 90 and stress > 60
12. Cross innovator       intellect > 80 and inspiration > 80
13. Power broker          personality E > 85 and S < 40
14. Minimalist            money < 200 and happiness > 95
15. Gambler               a "Reversal roulette" choice and any scandal
16. Heir                  mostly stable (weight >= 1.2) decisions
17. Explorer              a "Travel" choice
18. Ghost                 balanced attributes (spread <= 15)
19. Martyr                personality E > 70, intellect > 70 and stress > 80
20. Awakening             a "Reversal roulette" choice
21. Default               always

Rules 15 and 20 can never fire behind rule 5; they stay in the table so the
table mirrors the full ending catalog.

The ending score is a separate fold over history:
    sum(weight * consistency_delta - scandal_penalty), weight defaulting to 1,
    rounded and clamped to [-500, 500].
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Sequence

from lifepath.engine.consistency import clamp, round_half_up
from lifepath.models.content import Ending, NarrativeTag
from lifepath.models.state import PlayerSnapshot, ScenarioResult
from lifepath.parameters import (
    BALANCED_ATTRIBUTE_SPREAD,
    ENDING_SCORE_BOUNDS,
    SCANDAL_MAX_THRESHOLD,
    STABLE_DECISION_SHARE,
    STABLE_DECISION_WEIGHT,
)

History = Sequence[ScenarioResult]
EndingPredicate = Callable[[PlayerSnapshot, History], bool]


@dataclass(frozen=True)
class EndingRule:
    """One row of the ending decision table."""

    ending: Ending
    predicate: EndingPredicate

    def matches(self, snapshot: PlayerSnapshot, history: History) -> bool:
        return self.predicate(snapshot, history)


# =============================================================================
# History predicates
# =============================================================================


def has_legend(history: History) -> bool:
    """Whether any resolved choice was flagged legendary."""
    return any(entry.effect.triggers.legend for entry in history)


def has_marker(history: History, tag: NarrativeTag) -> bool:
    """Whether any resolved choice carries the narrative marker."""
    return any(entry.effect.has_marker(tag) for entry in history)


def is_mostly_stable(history: History) -> bool:
    """Whether enough choices carried a high consistency weight.

    An empty history counts as stable.
    """
    stable = sum(
        1
        for entry in history
        if entry.effect.consistency_weight is not None
        and entry.effect.consistency_weight >= STABLE_DECISION_WEIGHT
    )
    return stable >= math.floor(len(history) * STABLE_DECISION_SHARE)


def is_balanced(snapshot: PlayerSnapshot) -> bool:
    """Whether the attribute spread is within BALANCED_ATTRIBUTE_SPREAD."""
    values = snapshot.attributes.as_dict().values()
    return max(values) - min(values) <= BALANCED_ATTRIBUTE_SPREAD


# =============================================================================
# Decision table
# =============================================================================


def _rule(ending_id: str, title: str, description: str, predicate: EndingPredicate) -> EndingRule:
    return EndingRule(Ending(id=ending_id, title=title, description=description), predicate)


ENDING_RULES: tuple[EndingRule, ...] = (
    _rule(
        "ending-legendary-research",
        "Founder of a Legendary Research Center",
        "Your breakthrough research gave rise to a legendary research center.",
        lambda s, h: s.attributes.intellect > 90 and has_legend(h),
    ),
    _rule(
        "ending-tired-billionaire",
        "The Weary Billionaire",
        "Rich beyond measure, and worn out.",
        lambda s, h: s.life_status.money > 1_000_000 and s.life_status.happiness < 30,
    ),
    _rule(
        "ending-free-artist",
        "Free-Spirited Artist",
        "You are remembered for your art and your freedom.",
        lambda s, h: s.attributes.inspiration > 85 and s.life_status.happiness > 80,
    ),
    _rule(
        "ending-scandal",
        "The Disgraced Shortcut Taker",
        "Scandal wrote the last chapter of your story.",
        lambda s, h: s.hidden.scandal_value >= SCANDAL_MAX_THRESHOLD,
    ),
    _rule(
        "ending-reversal",
        "Comeback Winner",
        "One spin of the reversal roulette changed your life.",
        lambda s, h: has_marker(h, NarrativeTag.REVERSAL),
    ),
    _rule(
        "ending-mentor",
        "Distinguished Public Mentor",
        "Your life inspired the people around you.",
        lambda s, h: s.hidden.personality.S > 85,
    ),
    _rule(
        "ending-order-guardian",
        "Rigorous Guardian of Order",
        "You laid the foundations others build on.",
        lambda s, h: s.hidden.personality.C > 90,
    ),
    _rule(
        "ending-data-hermit",
        "Hermit of the Data Age",
        "Your algorithms quietly hold society together.",
        lambda s, h: s.hidden.personality.I > 85 and s.hidden.personality.S < 30,
    ),
    _rule(
        "ending-forgotten-gear",
        "The Forgotten Cog",
        "You gave your all behind the scenes and were replaced.",
        lambda s, h: s.attributes.physical > 80 and s.hidden.personality.E < 30,
    ),
    _rule(
        "ending-content-tourist",
        "Passing Through the Content Empire",
        "You were famous for a moment, then left the stage.",
        lambda s, h: s.attributes.inspiration > 80 and s.life_status.stress > 70,
    ),
    _rule(
        "ending-athlete",
        "Fiery Sports Star",
        "You burned your youth for glory and won it.",
        lambda s, h: s.attributes.physical > 90 and s.life_status.stress > 60,
    ),
    _rule(
        "ending-cross-innovator",
        "Cross-Disciplinary Innovator",
        "You fused technology and art into something new.",
        lambda s, h: s.attributes.intellect > 80 and s.attributes.inspiration > 80,
    ),
    _rule(
        "ending-power-broker",
        "Backroom Power Broker",
        "You control the resources and keep out of the spotlight.",
        lambda s, h: s.hidden.personality.E > 85 and s.hidden.personality.S < 40,
    ),
    _rule(
        "ending-minimalist",
        "Contented Minimalist",
        "You found freedom in having little.",
        lambda s, h: s.life_status.money < 200 and s.life_status.happiness > 95,
    ),
    _rule(
        "ending-gambler",
        "The Disappointed Gambler",
        "You waited for a miracle that never came.",
        lambda s, h: has_marker(h, NarrativeTag.REVERSAL) and s.hidden.scandal_value > 0,
    ),
    _rule(
        "ending-heir",
        "Keeper of the Family Legacy",
        "A life of steady stewardship.",
        lambda s, h: is_mostly_stable(h),
    ),
    _rule(
        "ending-explorer",
        "Globe-Trotting Explorer",
        "Your travels inspired those who came after you.",
        lambda s, h: has_marker(h, NarrativeTag.TRAVEL),
    ),
    _rule(
        "ending-ghost",
        "Ghost in the System",
        "You kept everything in balance and slipped away calmly.",
        lambda s, h: is_balanced(s),
    ),
    _rule(
        "ending-martyr",
        "Martyr of the Startup World",
        "You collapsed on the eve of success.",
        lambda s, h: (
            s.hidden.personality.E > 70
            and s.attributes.intellect > 70
            and s.life_status.stress > 80
        ),
    ),
    _rule(
        "ending-awakening",
        "Awakened to a Second Life",
        "You unlocked a second run at fate.",
        lambda s, h: has_marker(h, NarrativeTag.REVERSAL),
    ),
    _rule(
        "ending-default",
        "Traveler on Life's Road",
        "Your journey left footprints all its own.",
        lambda s, h: True,
    ),
)

DEFAULT_ENDING = ENDING_RULES[-1].ending


def evaluate_ending(
    snapshot: PlayerSnapshot,
    history: History,
    rules: Sequence[EndingRule] = ENDING_RULES,
) -> Ending:
    """Select the ending for a run.

    Args:
        snapshot: Final player state
        history: Resolved turns, oldest first
        rules: Ordered decision table (defaults to ENDING_RULES)

    Returns:
        The ending of the first matching rule, or DEFAULT_ENDING if none match
    """
    for rule in rules:
        if rule.matches(snapshot, history):
            return rule.ending
    return DEFAULT_ENDING


def get_ending_score(history: History) -> int:
    """Aggregate ending score for a run.

    Each entry contributes weight * consistency_delta - scandal_penalty, with
    weight the effect's consistency_weight (1 when absent).

    Returns:
        Integer in [-500, 500]
    """
    raw = 0.0
    for entry in history:
        weight = entry.effect.consistency_weight
        if weight is None:
            weight = 1
        raw += weight * entry.reflection.consistency_delta - entry.reflection.scandal_penalty
    low, high = ENDING_SCORE_BOUNDS
    return int(clamp(round_half_up(raw), low, high))
