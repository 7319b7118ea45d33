import random

import pytest

from apps.challenges.services.selection import pick_distinct


class ReverseShuffle:
    def shuffle(self, items):
        items.reverse()


def test_uses_given_rng():
    assert pick_distinct([1, 2, 3], 2, ReverseShuffle()) == [3, 2]


def test_does_not_mutate_pool():
    pool = [1, 2, 3]

    pick_distinct(pool, 2, ReverseShuffle())

    assert pool == [1, 2, 3]


def test_picks_are_distinct():
    picks = pick_distinct(range(10), 10, random.Random(7))

    assert sorted(picks) == list(range(10))


def test_seeded_rng_is_reproducible():
    assert pick_distinct('abcdef', 2, random.Random(42)) == pick_distinct('abcdef', 2, random.Random(42))


def test_default_rng():
    assert len(set(pick_distinct(range(5), 2))) == 2


def test_not_enough_items():
    with pytest.raises(ValueError):
        pick_distinct([1], 2)
