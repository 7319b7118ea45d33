"""XP, level, history and badge progress for a subscriber."""

from dataclasses import dataclass
from typing import Optional

from apps.accounts.models import User
from apps.challenges.services.store import store_errors
from apps.redemptions.models import Badge, UserBadge, Redemption, RedemptionStatus

from .badge_awards import ensure_badges

XP_PER_REDEMPTION = 100


@dataclass(frozen=True)
class Level:
    level: int
    name: str
    min_xp: int
    next_level_xp: Optional[int]


LEVELS = (
    Level(1, 'The Explorer', 0, 500),
    Level(2, 'The Tastemaker', 500, 1500),
    Level(3, 'The Connoisseur', 1500, 3000),
    Level(4, 'The Local Legend', 3000, None),
)


def get_level_info(xp: int) -> dict:
    """Level reached at ``xp`` and percent progress towards the next one."""
    tier = next((t for t in reversed(LEVELS) if xp >= t.min_xp), LEVELS[0])

    if tier.next_level_xp is None:
        progress = 100
    else:
        span = tier.next_level_xp - tier.min_xp
        progress = min(100, round(max(xp - tier.min_xp, 0) / span * 100))

    return {
        'level': tier.level,
        'current_level_name': tier.name,
        'next_level_xp': tier.next_level_xp,
        'progress_percent': progress,
    }


def get_user_stats(*, user: User) -> dict:
    with store_errors("Loading stats"):
        verified = list(
            Redemption.objects
            .filter(user=user, status=RedemptionStatus.VERIFIED)
            .select_related('restaurant')
        )
        verified.sort(key=lambda r: r.effective_date, reverse=True)

        ensure_badges()
        awarded = dict(
            UserBadge.objects.filter(user=user).values_list('badge_id', 'awarded_at')
        )
        catalogue = list(Badge.objects.all())

    xp = len(verified) * XP_PER_REDEMPTION
    badges = [
        {
            'id': badge.slug,
            'name': badge.name,
            'description': badge.description,
            'icon': badge.icon,
            'is_earned': badge.slug in awarded,
            'awarded_at': awarded.get(badge.slug),
        }
        for badge in catalogue
    ]
    # Earned first, catalogue order otherwise
    badges.sort(key=lambda b: not b['is_earned'])

    return {
        'xp': xp,
        **get_level_info(xp),
        'redemption_count': len(verified),
        'history': [
            {
                'restaurant_name': r.restaurant.name,
                'date': r.effective_date.date(),
            }
            for r in verified
        ],
        'badges': badges,
    }
