"""
Load eligibility inputs from the database.

``load_candidates`` turns the assignable catalog into ``Candidate`` values;
``load_history`` collects the user's past cycles, swaps and redemptions plus
the market-wide capacity counts into a ``HistoricalContext``.
"""

from collections import defaultdict

from django.db.models import Count, Q

from apps.challenges.models import ChallengeItem, ItemStatus
from apps.challenges.periods import current_cycle_month, month_window, shift_months
from apps.redemptions.models import Redemption, RedemptionStatus
from apps.restaurants.services import list_assignable_restaurants

from .eligibility import (
    Candidate,
    HistoricalContext,
    SWAP_COOLDOWN_MONTHS,
    REPEAT_BLOCK_MONTHS,
    FREQUENCY_WINDOW_MONTHS,
)


def load_candidates(*, market_id, exclude_ids=()):
    """
    Assignable restaurants in a market.

    Returns ``(candidates, restaurants_by_id)``; each restaurant carries its
    ``active_offer``.
    """
    excluded = set(exclude_ids)
    restaurants = {
        r.id: r for r in list_assignable_restaurants(market_id=market_id)
        if r.id not in excluded
    }
    candidates = [
        Candidate(
            restaurant_id=r.id,
            name=r.name,
            cuisine_tags=tuple(r.cuisine_tags or ()),
            monthly_cap=r.active_offer.max_redemptions_per_month,
        )
        for r in restaurants.values()
    ]
    return candidates, restaurants


def load_history(*, user, now) -> HistoricalContext:
    cycle_month = current_cycle_month(now)
    user_items = ChallengeItem.objects.filter(cycle__user=user)

    verified_dates = defaultdict(list)
    verified = (
        Redemption.objects
        .filter(user=user, status=RedemptionStatus.VERIFIED)
        .values_list('restaurant_id', 'verified_at', 'created_at')
    )
    for restaurant_id, verified_at, created_at in verified:
        verified_dates[restaurant_id].append(verified_at or created_at)

    swap_cutoff = shift_months(now, -SWAP_COOLDOWN_MONTHS)
    swapped_out = (
        user_items
        .filter(status=ItemStatus.SWAPPED_OUT)
        .filter(
            Q(swapped_out_at__gte=swap_cutoff)
            | Q(swapped_out_at__isnull=True, created_at__gte=swap_cutoff)
        )
        .values_list('restaurant_id', flat=True)
    )

    recent = (
        user_items
        .filter(cycle__cycle_month__gte=shift_months(now, -REPEAT_BLOCK_MONTHS).date())
        .values_list('restaurant_id', flat=True)
    )

    cycle_counts = (
        user_items
        .filter(cycle__cycle_month__gte=shift_months(now, -FREQUENCY_WINDOW_MONTHS).date())
        .values('restaurant_id')
        .order_by()
        .annotate(cycles=Count('cycle', distinct=True))
    )

    last_month = (
        user_items
        .filter(cycle__cycle_month=shift_months(cycle_month, -1))
        .values_list('restaurant_id', flat=True)
    )

    month_start, month_end = month_window(cycle_month)
    month_counts = (
        Redemption.objects
        .filter(
            status__in=[RedemptionStatus.ISSUED, RedemptionStatus.VERIFIED],
            created_at__gte=month_start,
            created_at__lt=month_end,
        )
        .values('restaurant_id')
        .order_by()
        .annotate(total=Count('id'))
    )

    return HistoricalContext(
        now=now,
        verified_dates=dict(verified_dates),
        swapped_out_recently=frozenset(swapped_out),
        recent_cycle_restaurants=frozenset(recent),
        cycle_counts={row['restaurant_id']: row['cycles'] for row in cycle_counts},
        last_month_restaurants=frozenset(last_month),
        month_redemption_counts={row['restaurant_id']: row['total'] for row in month_counts},
    )
