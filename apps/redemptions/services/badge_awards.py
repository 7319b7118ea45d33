"""
Badge catalogue and awarding.

Badges are cumulative count thresholds over a user's all-time verified
redemptions. Awarding is insert-if-absent, so re-running it is a no-op.
"""

import logging
from dataclasses import dataclass

from apps.accounts.models import User
from apps.redemptions.models import Badge, UserBadge, Redemption, RedemptionStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BadgeDefinition:
    slug: str
    name: str
    threshold: int
    description: str = ''
    icon: str = ''


BADGE_DEFINITIONS = (
    BadgeDefinition('first_bite', 'First Bite', 1, 'Verified your first challenge.', 'utensils'),
    BadgeDefinition('hat_trick', 'Hat Trick', 3, 'Three verified challenges.', 'flame'),
    BadgeDefinition('wanderer', 'The Wanderer', 3, 'Explored three partner restaurants.', 'compass'),
    BadgeDefinition('high_five', 'High Five', 5, 'Five verified challenges.', 'star'),
)


def badges_for_count(verified_count: int):
    """Badge rows whose (possibly admin-edited) threshold the count has reached."""
    return list(Badge.objects.filter(threshold__lte=verified_count))


def ensure_badges(definitions=BADGE_DEFINITIONS):
    """Create missing Badge rows; existing rows are left as edited."""
    for definition in definitions:
        Badge.objects.get_or_create(
            slug=definition.slug,
            defaults={
                'name': definition.name,
                'threshold': definition.threshold,
                'description': definition.description,
                'icon': definition.icon,
            },
        )


def award_badges_for_user(*, user: User) -> list:
    """
    Award every badge the user's verified count has reached.

    Thresholds come from the Badge rows, so edits made in the admin apply
    to the next award.

    Returns:
        Names of badges newly awarded by this call
    """
    verified_count = Redemption.objects.filter(user=user, status=RedemptionStatus.VERIFIED).count()
    if not verified_count:
        return []

    ensure_badges()
    due = badges_for_count(verified_count)
    already = set(
        UserBadge.objects
        .filter(user=user, badge__in=due)
        .values_list('badge_id', flat=True)
    )
    new = [badge for badge in due if badge.slug not in already]
    if not new:
        return []

    UserBadge.objects.bulk_create(
        [UserBadge(user=user, badge=badge) for badge in new],
        ignore_conflicts=True,
    )
    names = [badge.name for badge in new]
    logger.info("Awarded badges %s to user %s at %d verified", ', '.join(names), user.id, verified_count)
    return names
