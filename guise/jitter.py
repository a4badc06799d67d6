"""Random integers for request jitter."""

from __future__ import annotations

import random

# OS entropy, no seed state shared between callers.
_system_random = random.SystemRandom()


def random_int(low: int, high: int, rng: random.Random | None = None) -> int:
    """
    Return a random integer N with ``low <= N < high``.

    Args:
        low: Inclusive lower bound.
        high: Exclusive upper bound; must be greater than ``low``.
        rng: Generator to draw from. Defaults to a SystemRandom instance; pass a
            seeded ``random.Random`` for reproducible sequences.

    Raises:
        ValueError: if ``high <= low``.
    """
    if high <= low:
        raise ValueError(f"empty range [{low}, {high})")
    return (rng or _system_random).randrange(low, high)
