#!/usr/bin/env python3
"""
Random Source
=============
All random draws of the translator go through one small object, so callers
can swap in a seeded generator (or a stub) and get reproducible output.

By default draws come from secrets.SystemRandom(), which is backed by the
operating system entropy pool. Passing a seed gives a plain random.Random
instead.

Anything with the same two methods (random.Random included) can be passed
wherever a TrueRandom is expected.
"""

import random as _random
import secrets
from typing import Any, Optional, Sequence


class TrueRandom:
    """
    Random number source used by the translator.

    Only two draws are needed: a float in [0.0, 1.0) for probability gates
    and a uniform pick from a non-empty sequence.
    """

    def __init__(self, seed: Optional[int] = None):
        if seed is None:
            self._rng = secrets.SystemRandom()
        else:
            self._rng = _random.Random(seed)
        self.seed = seed

    def random(self) -> float:
        """Return random float in [0.0, 1.0)."""
        return self._rng.random()

    def choice(self, seq: Sequence[Any]) -> Any:
        """Return a random element from non-empty sequence."""
        if not seq:
            raise IndexError("Cannot choose from empty sequence")
        return self._rng.choice(seq)


# Global instance
_true_random = TrueRandom()


def get_rng() -> TrueRandom:
    """Get the global random number generator."""
    return _true_random
