"""
Monthly challenge generation.

generate_monthly_challenge is idempotent per (user, calendar month): the
first call assigns two distinct restaurants, later calls return the same
cycle. The profile row lock serialises concurrent calls for one user and
the partial unique constraint on ChallengeCycle backs it up.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from django.conf import settings
from django.db import transaction, IntegrityError
from django.utils import timezone

from apps.accounts.models import User, UserProfile
from apps.challenges.models import ChallengeCycle, ChallengeItem, CycleStatus, ItemStatus
from apps.challenges.periods import current_cycle_month
from apps.redemptions.models import Redemption, RedemptionStatus
from apps.restaurants.models import RestaurantOffer
from apps.restaurants.services import get_default_market

from .eligibility import DinerProfile, filter_eligible
from .exceptions import (
    ProfileRequiredError,
    SubscriptionRequiredError,
    NoEligibleRestaurantsError,
    InsufficientInventoryError,
)
from .history import load_candidates, load_history
from .selection import pick_distinct
from .store import store_errors

logger = logging.getLogger(__name__)

CHALLENGE_ITEMS_PER_MONTH = 2

# Offer terms shown when a restaurant has no offer row left
DEFAULT_DISCOUNT_CENTS = 1000
DEFAULT_MIN_SPEND_CENTS = 4000


@dataclass(frozen=True)
class OfferTerms:
    discount_amount_cents: int
    min_spend_cents: int

    @classmethod
    def from_offer(cls, offer: Optional[RestaurantOffer]):
        if offer is None:
            return cls(DEFAULT_DISCOUNT_CENTS, DEFAULT_MIN_SPEND_CENTS)
        return cls(offer.discount_amount_cents, offer.min_spend_cents)


@dataclass(frozen=True)
class ChallengeItemView:
    challenge_item: ChallengeItem
    restaurant: Any
    offer: OfferTerms
    redemption_token: Optional[str] = None
    redemption_status: Optional[str] = None


@dataclass(frozen=True)
class ChallengeView:
    cycle: ChallengeCycle
    items: list


def generate_monthly_challenge(*, user: User, market_id=None, rng=None) -> ChallengeView:
    """
    Return the user's challenge for the current month, creating it if needed.

    Args:
        user: Subscriber requesting the challenge
        market_id: Market to draw from; defaults to the profile's market
        rng: Random source with ``shuffle``; defaults to SystemRandom

    Raises:
        ProfileRequiredError: If the user has not onboarded
        SubscriptionRequiredError: If the paywall is on and the user is not active
        NoEligibleRestaurantsError: If the market has no assignable restaurants
        InsufficientInventoryError: If fewer than two pass the relaxed filter
        StoreUnavailableError: On database failure
    """
    with store_errors("Assignment"):
        cycle = _get_or_create_cycle(user=user, market_id=market_id, rng=rng)
        return build_challenge_view(cycle)


def get_current_challenge(*, user: User) -> Optional[ChallengeView]:
    """Current month's active challenge, or None. Never generates."""
    with store_errors("Loading challenge"):
        cycle = (
            ChallengeCycle.objects
            .filter(user=user, cycle_month=current_cycle_month(), status=CycleStatus.ACTIVE)
            .first()
        )
        if cycle is None:
            return None
        return build_challenge_view(cycle)


@transaction.atomic
def _get_or_create_cycle(*, user, market_id, rng) -> ChallengeCycle:
    try:
        profile = UserProfile.objects.select_for_update().get(user=user)
    except UserProfile.DoesNotExist:
        raise ProfileRequiredError("Complete onboarding before generating a challenge.")

    now = timezone.now()
    cycle_month = current_cycle_month(now)

    existing = _active_cycle(user, cycle_month)
    if existing is not None:
        logger.info("Reusing challenge cycle %s for user %s", existing.id, user.id)
        return existing

    if settings.REQUIRE_ACTIVE_SUBSCRIPTION and not profile.has_active_subscription:
        raise SubscriptionRequiredError("An active subscription is required to get monthly challenges.")

    if market_id is None:
        market_id = profile.market_id
    if market_id is None:
        market = get_default_market()
        market_id = market.id if market else None

    candidates, _ = load_candidates(market_id=market_id) if market_id else ([], {})
    if not candidates:
        raise NoEligibleRestaurantsError("No eligible restaurants found in this market.")

    diner = DinerProfile.from_flags(profile.dietary_flags, profile.allergy_flags)
    history = load_history(user=user, now=now)

    eligible = filter_eligible(candidates, diner, history)
    if len(eligible) < CHALLENGE_ITEMS_PER_MONTH:
        logger.info(
            "Only %d restaurant(s) eligible for user %s; relaxing variety rules",
            len(eligible), user.id
        )
        eligible = filter_eligible(candidates, diner, history, relaxed=True)

    if len(eligible) < CHALLENGE_ITEMS_PER_MONTH:
        logger.warning(
            "Insufficient inventory for user %s in market %s: %d eligible",
            user.id, market_id, len(eligible)
        )
        raise InsufficientInventoryError(required=CHALLENGE_ITEMS_PER_MONTH, found=len(eligible))

    chosen = pick_distinct(eligible, CHALLENGE_ITEMS_PER_MONTH, rng)

    try:
        with transaction.atomic():
            cycle = ChallengeCycle.objects.create(
                user=user,
                cycle_month=cycle_month,
                status=CycleStatus.ACTIVE,
                swap_count_used=0,
            )
            ChallengeItem.objects.bulk_create([
                ChallengeItem(
                    cycle=cycle,
                    restaurant_id=candidate.restaurant_id,
                    slot_number=slot,
                    status=ItemStatus.ASSIGNED,
                )
                for slot, candidate in enumerate(chosen, start=1)
            ])
    except IntegrityError:
        existing = _active_cycle(user, cycle_month)
        if existing is None:
            raise
        logger.info("Concurrent generation for user %s; returning cycle %s", user.id, existing.id)
        return existing

    logger.info(
        "Generated challenge cycle %s for user %s: %s",
        cycle.id, user.id, ', '.join(c.name for c in chosen)
    )
    return cycle


def _active_cycle(user, cycle_month):
    return (
        ChallengeCycle.objects
        .filter(user=user, cycle_month=cycle_month, status=CycleStatus.ACTIVE)
        .first()
    )


def current_offer(restaurant) -> Optional[RestaurantOffer]:
    """Newest active offer, else newest offer of any state."""
    offers = sorted(restaurant.offers.all(), key=lambda o: (o.active, o.created_at), reverse=True)
    return offers[0] if offers else None


def build_challenge_view(cycle: ChallengeCycle) -> ChallengeView:
    """
    Denormalise a cycle's current items with restaurant, offer terms and,
    for redeemed items, the latest still-issued token.
    """
    items = list(
        cycle.items
        .exclude(status=ItemStatus.SWAPPED_OUT)
        .select_related('restaurant')
        .prefetch_related('restaurant__offers')
        .order_by('slot_number', 'created_at')
    )

    latest_redemption = {}
    redeemed_ids = [item.id for item in items if item.status == ItemStatus.REDEEMED]
    if redeemed_ids:
        redemptions = (
            Redemption.objects
            .filter(challenge_item_id__in=redeemed_ids)
            .order_by('-created_at')
        )
        for redemption in redemptions:
            latest_redemption.setdefault(redemption.challenge_item_id, redemption)

    views = []
    for item in items:
        redemption = latest_redemption.get(item.id)
        views.append(ChallengeItemView(
            challenge_item=item,
            restaurant=item.restaurant,
            offer=OfferTerms.from_offer(current_offer(item.restaurant)),
            redemption_token=(
                redemption.token
                if redemption and redemption.status == RedemptionStatus.ISSUED
                else None
            ),
            redemption_status=redemption.status if redemption else None,
        ))

    return ChallengeView(cycle=cycle, items=views)
