"""
Eligibility filter for monthly challenges.

Pure functions over plain data: no ORM access happens here. The history
loader builds a ``HistoricalContext`` from the database and the assignment
and swap engines feed candidates through ``filter_eligible``.

Rules (a restaurant is excluded if any fires):

    dietary            a dietary flag forbids one of its cuisine tags
    allergy            an allergy flag and a tag overlap (substring either way)
    swap_cooldown      swapped out of one of the user's cycles in the last 3 months
    capacity           issued+verified redemptions this month reached the offer cap
    recent_cycle       assigned to the user in a cycle in the last 6 months
    cycle_frequency    assigned in 2+ distinct cycles in the last 12 months
    verified_cooldown  verified redemption in the last 6 months
    verified_yearly    2+ verified redemptions in the last 12 months

The relaxed pass drops recent_cycle and cycle_frequency and instead excludes
only restaurants from last calendar month's cycle.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Iterable, Optional

from apps.challenges.periods import shift_months

logger = logging.getLogger(__name__)


DIETARY_EXCLUSIONS = {
    'vegetarian': frozenset({'bbq', 'steakhouse', 'meat', 'burgers'}),
    'vegan': frozenset({'bbq', 'steakhouse', 'meat', 'burgers', 'cheese', 'eggs', 'dairy'}),
    'halal': frozenset({'pork', 'beer', 'wine', 'bar'}),
}

SWAP_COOLDOWN_MONTHS = 3
REPEAT_BLOCK_MONTHS = 6
FREQUENCY_WINDOW_MONTHS = 12
MAX_CYCLES_PER_WINDOW = 2
VERIFIED_COOLDOWN_MONTHS = 6
MAX_VERIFIED_PER_YEAR = 2


class ExclusionRule(str, Enum):
    DIETARY = 'dietary'
    ALLERGY = 'allergy'
    SWAP_COOLDOWN = 'swap_cooldown'
    CAPACITY = 'capacity'
    RECENT_CYCLE = 'recent_cycle'
    CYCLE_FREQUENCY = 'cycle_frequency'
    VERIFIED_COOLDOWN = 'verified_cooldown'
    VERIFIED_YEARLY_CAP = 'verified_yearly_cap'
    LAST_MONTH = 'last_month'


@dataclass(frozen=True)
class DietaryConflict:
    flag: str
    conflicting_tags: tuple


@dataclass(frozen=True)
class Candidate:
    """A restaurant with an active offer, reduced to what the rules read."""

    restaurant_id: Any
    name: str
    cuisine_tags: tuple
    monthly_cap: int


@dataclass(frozen=True)
class DinerProfile:
    dietary_flags: tuple = ()
    allergy_flags: tuple = ()

    @classmethod
    def from_flags(cls, dietary_flags=None, allergy_flags=None):
        return cls(tuple(dietary_flags or ()), tuple(allergy_flags or ()))


@dataclass
class HistoricalContext:
    """Everything about past activity the rules need, keyed by restaurant id."""

    now: datetime
    # Effective dates (verified_at, else created_at) of the user's verified redemptions
    verified_dates: dict = field(default_factory=dict)
    swapped_out_recently: frozenset = frozenset()
    recent_cycle_restaurants: frozenset = frozenset()
    cycle_counts: dict = field(default_factory=dict)
    last_month_restaurants: frozenset = frozenset()
    # All users, current calendar month, issued + verified
    month_redemption_counts: dict = field(default_factory=dict)

    @property
    def verified_cooldown_start(self):
        return shift_months(self.now, -VERIFIED_COOLDOWN_MONTHS)

    @property
    def verified_window_start(self):
        return shift_months(self.now, -FREQUENCY_WINDOW_MONTHS)


def get_dietary_conflict(cuisine_tags: Optional[Iterable[str]],
                         dietary_flags: Optional[Iterable[str]]) -> Optional[DietaryConflict]:
    """
    Return the first dietary flag that forbids one of the tags, or None.

    Tag matching is exact and case-insensitive. Unknown flags are ignored.
    """
    tags = [tag.lower() for tag in cuisine_tags or () if tag]
    if not tags:
        return None

    for flag in dietary_flags or ():
        forbidden = DIETARY_EXCLUSIONS.get(str(flag).lower())
        if not forbidden:
            continue
        conflicts = tuple(tag for tag in tags if tag in forbidden)
        if conflicts:
            return DietaryConflict(flag=flag, conflicting_tags=conflicts)
    return None


def has_allergy_conflict(cuisine_tags: Optional[Iterable[str]],
                         allergy_flags: Optional[Iterable[str]]) -> bool:
    """True when an allergy and a tag contain one another (case-insensitive)."""
    allergies = [a.strip().lower() for a in allergy_flags or () if a and a.strip()]
    if not allergies:
        return False
    tags = [t.strip().lower() for t in cuisine_tags or () if t and t.strip()]
    return any(a in t or t in a for t in tags for a in allergies)


def exclusion_reasons(candidate: Candidate, diner: DinerProfile,
                      history: HistoricalContext, *, relaxed: bool = False) -> list:
    """List every rule that excludes ``candidate``; empty means eligible."""
    reasons = []
    rid = candidate.restaurant_id

    conflict = get_dietary_conflict(candidate.cuisine_tags, diner.dietary_flags)
    if conflict:
        logger.debug(
            "Excluded %s due to %s conflict (overlapping tags: %s)",
            candidate.name, conflict.flag, ', '.join(conflict.conflicting_tags)
        )
        reasons.append(ExclusionRule.DIETARY)

    if has_allergy_conflict(candidate.cuisine_tags, diner.allergy_flags):
        reasons.append(ExclusionRule.ALLERGY)

    if rid in history.swapped_out_recently:
        reasons.append(ExclusionRule.SWAP_COOLDOWN)

    if history.month_redemption_counts.get(rid, 0) >= candidate.monthly_cap:
        reasons.append(ExclusionRule.CAPACITY)

    if relaxed:
        if rid in history.last_month_restaurants:
            reasons.append(ExclusionRule.LAST_MONTH)
    else:
        if rid in history.recent_cycle_restaurants:
            reasons.append(ExclusionRule.RECENT_CYCLE)
        if history.cycle_counts.get(rid, 0) >= MAX_CYCLES_PER_WINDOW:
            reasons.append(ExclusionRule.CYCLE_FREQUENCY)

    verified = history.verified_dates.get(rid, ())
    if any(d >= history.verified_cooldown_start for d in verified):
        reasons.append(ExclusionRule.VERIFIED_COOLDOWN)
    if sum(1 for d in verified if d >= history.verified_window_start) >= MAX_VERIFIED_PER_YEAR:
        reasons.append(ExclusionRule.VERIFIED_YEARLY_CAP)

    return reasons


def filter_eligible(candidates: Iterable[Candidate], diner: DinerProfile,
                    history: HistoricalContext, *, relaxed: bool = False) -> list:
    """Candidates no rule excludes, in input order."""
    return [
        candidate for candidate in candidates
        if not exclusion_reasons(candidate, diner, history, relaxed=relaxed)
    ]
