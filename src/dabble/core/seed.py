"""SeededRandom: deterministic draw stream derived from a string seed.

The seed string (normally a ``YYYY-MM-DD`` date) is hashed with
HMAC-SHA256 into a 64-bit integer that seeds an isolated
``random.Random`` (Mersenne Twister). Same seed string, same stream, on
every platform running CPython. Puzzles are therefore stable for this
package but are not bit-identical to any other seeding scheme.
"""

from __future__ import annotations

import hashlib
import hmac
import math
import random
from typing import Sequence, TypeVar

T = TypeVar("T")

_HMAC_KEY = b"dabble-daily-puzzle"


def derive_seed(seed: str) -> int:
    """Derive an integer seed via HMAC. Same string always gives the same seed."""
    digest = hmac.new(_HMAC_KEY, seed.encode("utf-8"), hashlib.sha256).digest()
    return int.from_bytes(digest[:8], byteorder="big")


class SeededRandom:
    """Reproducible stream of floats in [0, 1) plus the helpers built on it.

    Every helper consumes draws only through ``next()`` so the sequence of
    calls fully determines the output.
    """

    def __init__(self, seed: str) -> None:
        self._seed = seed
        self._rng = random.Random(derive_seed(seed))
        self._draws = 0

    @property
    def seed(self) -> str:
        return self._seed

    @property
    def draws(self) -> int:
        """Number of floats consumed so far."""
        return self._draws

    def next(self) -> float:
        self._draws += 1
        return self._rng.random()

    def next_int(self, low: int, high: int) -> int:
        """Uniform integer in the inclusive range [low, high]."""
        if high < low:
            raise ValueError(f"empty range [{low}, {high}]")
        return math.floor(self.next() * (high - low + 1)) + low

    def shuffle(self, items: Sequence[T]) -> list[T]:
        """Fisher–Yates shuffle. Returns a new list; ``items`` is untouched."""
        result = list(items)
        for i in range(len(result) - 1, 0, -1):
            j = math.floor(self.next() * (i + 1))
            result[i], result[j] = result[j], result[i]
        return result

    def chance(self, probability: float) -> bool:
        """True with the given probability (one draw)."""
        return self.next() < probability
