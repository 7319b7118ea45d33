"""
One-time swap of a challenge item.

Each cycle allows a single swap. The replacement is drawn from the same
market under the full eligibility filter (no relaxed fallback) and never
repeats a restaurant that has appeared anywhere in the cycle.
"""

import logging
from dataclasses import dataclass
from uuid import UUID

from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from apps.accounts.models import User, UserProfile
from apps.challenges.models import (
    ChallengeCycle,
    ChallengeItem,
    ItemStatus,
    MAX_SWAPS_PER_CYCLE,
)

from .assignment import OfferTerms
from .eligibility import DinerProfile, filter_eligible
from .exceptions import (
    ItemNotFoundError,
    ItemAlreadySwappedError,
    CycleNotFoundError,
    NotCycleOwnerError,
    SwapLimitReachedError,
    NoEligibleRestaurantsError,
    InsufficientInventoryError,
)
from .history import load_candidates, load_history
from .selection import pick_distinct
from .store import store_errors

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SwapResult:
    challenge_item: ChallengeItem
    replaced_item: ChallengeItem
    restaurant: object
    offer: OfferTerms


def swap_challenge_item(*, item_id: UUID, user: User, rng=None) -> SwapResult:
    """
    Replace one item of the user's cycle with a new eligible restaurant.

    Checks run in order: item exists, item not already swapped out, cycle
    exists and belongs to ``user``, cycle still has its swap.

    Raises:
        ItemNotFoundError, ItemAlreadySwappedError, CycleNotFoundError,
        NotCycleOwnerError, SwapLimitReachedError: Precondition failures
        NoEligibleRestaurantsError: Nothing else in the market to swap into
        InsufficientInventoryError: Nothing left after the eligibility filter
        StoreUnavailableError: On database failure
    """
    with store_errors("Swap"):
        return _swap(item_id=item_id, user=user, rng=rng)


@transaction.atomic
def _swap(*, item_id, user, rng) -> SwapResult:
    try:
        item = (
            ChallengeItem.objects
            .select_for_update()
            .select_related('restaurant')
            .get(id=item_id)
        )
    except (ChallengeItem.DoesNotExist, ValidationError):
        raise ItemNotFoundError("Challenge item not found.")

    if item.status == ItemStatus.SWAPPED_OUT:
        raise ItemAlreadySwappedError("This item was already swapped.")

    try:
        cycle = ChallengeCycle.objects.select_for_update().get(id=item.cycle_id)
    except ChallengeCycle.DoesNotExist:
        raise CycleNotFoundError("Challenge cycle not found.")

    if cycle.user_id != user.id:
        raise NotCycleOwnerError("This challenge does not belong to you.")

    if cycle.swap_count_used >= MAX_SWAPS_PER_CYCLE:
        raise SwapLimitReachedError("You have already used your one swap for this month.")

    # Every restaurant the cycle has held, swapped out or not
    excluded = set(cycle.items.values_list('restaurant_id', flat=True))
    candidates, restaurants = load_candidates(
        market_id=item.restaurant.market_id,
        exclude_ids=excluded,
    )
    if not candidates:
        raise NoEligibleRestaurantsError("No other restaurants available to swap into.")

    profile = UserProfile.objects.filter(user=user).first()
    diner = DinerProfile.from_flags(
        profile.dietary_flags if profile else None,
        profile.allergy_flags if profile else None,
    )
    now = timezone.now()
    eligible = filter_eligible(candidates, diner, load_history(user=user, now=now))
    if not eligible:
        raise InsufficientInventoryError(
            required=1,
            found=0,
            message="No eligible replacement restaurant found. Check dietary preferences, allergies, and cooldowns.",
        )

    replacement = pick_distinct(eligible, 1, rng)[0]

    item.status = ItemStatus.SWAPPED_OUT
    item.swapped_out_at = now
    item.save(update_fields=['status', 'swapped_out_at'])

    new_item = ChallengeItem.objects.create(
        cycle=cycle,
        restaurant_id=replacement.restaurant_id,
        slot_number=item.slot_number,
        status=ItemStatus.ASSIGNED,
        swapped_from_item=item,
    )

    cycle.swap_count_used += 1
    cycle.save(update_fields=['swap_count_used'])

    logger.info(
        "User %s swapped slot %d of cycle %s: %s -> %s",
        user.id, item.slot_number, cycle.id, item.restaurant.name, replacement.name
    )

    restaurant = restaurants[replacement.restaurant_id]
    return SwapResult(
        challenge_item=new_item,
        replaced_item=item,
        restaurant=restaurant,
        offer=OfferTerms.from_offer(restaurant.active_offer),
    )
