"""Uniform random selection of distinct candidates."""

import random


def pick_distinct(pool, k, rng=None):
    """
    Return ``k`` distinct items from ``pool`` chosen uniformly at random.

    ``rng`` needs only a ``shuffle`` method; tests pass a seeded
    ``random.Random`` or a stub. Defaults to the OS entropy source.
    """
    items = list(pool)
    if k > len(items):
        raise ValueError(f"Cannot pick {k} from {len(items)} candidates")

    rng = rng or random.SystemRandom()
    rng.shuffle(items)
    return items[:k]
