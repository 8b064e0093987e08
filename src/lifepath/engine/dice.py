"""Randomness for Lifepath.

The engine draws every random number through a RandomSource so tests can
substitute a deterministic one. random.Random satisfies the protocol.
"""

from __future__ import annotations

import random
from typing import Optional, Protocol, Sequence, TypeVar

from lifepath.parameters import WHEEL_SEGMENTS

T = TypeVar("T")


class RandomSource(Protocol):
    """Capability interface for random draws."""

    def randint(self, a: int, b: int) -> int: ...

    def choice(self, seq: Sequence[T]) -> T: ...


def make_random_source(
    rng: Optional[RandomSource] = None,
    random_seed: Optional[int] = None,
) -> RandomSource:
    """Use the given source, or a random.Random seeded with random_seed."""
    if rng is not None:
        return rng
    return random.Random(random_seed)


def spin_wheel(rng: RandomSource, segments: int = WHEEL_SEGMENTS) -> int:
    """Spin the life wheel.

    Returns:
        A face value in 1..segments
    """
    return rng.randint(1, segments)
