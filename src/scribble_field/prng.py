"""Seeded linear congruential generator for reproducible scribbles.

Recurrence (Numerical Recipes constants, modulus 2^32):
    state = (state * 1664525 + 1013904223) mod 2^32
    draw  = state / 2^32                       → [0, 1)

One LCG instance is owned by one generate() call and never handed out, so
two runs with the same seed always see the same draw sequence.

Not cryptographically secure; it only exists to make output reproducible.
"""

import math
import random
from typing import Sequence, TypeVar

T = TypeVar("T")

MODULUS = 2 ** 32
MULTIPLIER = 1664525
INCREMENT = 1013904223


def check_seed(seed) -> int:
    """Validate a 32-bit unsigned seed.

    Raises
    ------
    ValueError
        If seed is not an integer in [0, 2^32)
    """
    if isinstance(seed, bool) or not isinstance(seed, int):
        raise ValueError(f"Seed must be an integer, got {type(seed).__name__}: {seed!r}")
    if not (0 <= seed < MODULUS):
        raise ValueError(f"Seed must be in [0, 2^32), got {seed}")
    return seed


def random_seed() -> int:
    """Pick a fresh 32-bit seed (once per session; log it to reproduce a run)."""
    return random.randrange(MODULUS)


class LCG:
    """Owned PRNG state with the jitter/choice helpers the generator needs."""

    __slots__ = ("_state", "draws")

    def __init__(self, seed: int):
        self._state = check_seed(seed)
        self.draws = 0

    def next(self) -> float:
        """Advance the state and return a float in [0, 1)."""
        self._state = (self._state * MULTIPLIER + INCREMENT) % MODULUS
        self.draws += 1
        return self._state / MODULUS

    def jitter(self, amount: float) -> float:
        """Uniform perturbation in [-amount, amount)."""
        return self.next() * amount * 2 - amount

    def randrange(self, start: int, stop: int) -> int:
        """Integer in [start, stop) as start + floor(rand * (stop - start))."""
        return start + math.floor(self.next() * (stop - start))

    def chance(self, p: float) -> bool:
        return self.next() < p

    def choice(self, items: Sequence[T]) -> T:
        return items[math.floor(self.next() * len(items))]
