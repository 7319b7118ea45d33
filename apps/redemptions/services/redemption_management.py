"""
Redemption issuing and expiry.

Redeeming locks the challenge item, creates an issued Redemption with a
fresh token and flips the item to redeemed, all in one transaction.
"""

import logging
from uuid import UUID

from django.core.exceptions import ValidationError
from django.db import transaction, IntegrityError
from django.utils import timezone

from apps.accounts.models import User
from apps.challenges.models import ChallengeItem, ItemStatus
from apps.challenges.periods import current_cycle_month, month_window
from apps.challenges.services.store import store_errors
from apps.redemptions.models import Redemption, RedemptionStatus

from .exceptions import (
    ItemNotFoundError,
    NotItemOwnerError,
    AlreadyRedeemedError,
    ItemSwappedOutError,
    TokenGenerationError,
)
from .tokens import generate_token

logger = logging.getLogger(__name__)


def redeem_challenge_item(*, item_id: UUID, user: User, max_retries: int = 5) -> Redemption:
    """
    Issue a single-use token for an assigned challenge item.

    Args:
        item_id: Challenge item to redeem
        user: Owner of the item's cycle
        max_retries: Attempts at drawing a token that is not already taken

    Returns:
        The issued Redemption; ``token`` and ``created_at`` go to the user

    Raises:
        ItemNotFoundError: If the item does not exist
        NotItemOwnerError: If the item's cycle belongs to someone else
        AlreadyRedeemedError: If the item was already redeemed
        ItemSwappedOutError: If the item was swapped away
        TokenGenerationError: If every token drawn collided
        StoreUnavailableError: On database failure
    """
    with store_errors("Redemption"):
        return _redeem(item_id=item_id, user=user, max_retries=max_retries)


@transaction.atomic
def _redeem(*, item_id, user, max_retries):
    try:
        item = (
            ChallengeItem.objects
            .select_for_update()
            .select_related('cycle')
            .get(id=item_id)
        )
    except (ChallengeItem.DoesNotExist, ValidationError):
        raise ItemNotFoundError("Challenge item not found.")

    if item.cycle.user_id != user.id:
        raise NotItemOwnerError("This challenge does not belong to you.")

    if item.status == ItemStatus.REDEEMED:
        raise AlreadyRedeemedError("This challenge has already been redeemed.")
    if item.status == ItemStatus.SWAPPED_OUT:
        raise ItemSwappedOutError("This spot was swapped. Only assigned challenges can be redeemed.")

    redemption = None
    for attempt in range(max_retries):
        try:
            with transaction.atomic():
                redemption = Redemption.objects.create(
                    user=user,
                    restaurant_id=item.restaurant_id,
                    challenge_item=item,
                    token=generate_token(),
                    status=RedemptionStatus.ISSUED,
                )
            break
        except IntegrityError:
            # Token collision, draw again
            logger.warning("Redemption token collision (attempt %d)", attempt + 1)

    if redemption is None:
        raise TokenGenerationError(
            f"Failed to generate a unique redemption code after {max_retries} attempts."
        )

    item.status = ItemStatus.REDEEMED
    item.save(update_fields=['status'])

    logger.info("Issued redemption %s for item %s (user %s)", redemption.id, item.id, user.id)
    return redemption


def expire_stale_redemptions(*, now=None) -> int:
    """Mark issued redemptions from before the current month as expired."""
    month_start, _ = month_window(current_cycle_month(now or timezone.now()))
    with store_errors("Expiry"):
        expired = (
            Redemption.objects
            .filter(status=RedemptionStatus.ISSUED, created_at__lt=month_start)
            .update(status=RedemptionStatus.EXPIRED)
        )
    if expired:
        logger.info("Expired %d redemption(s) issued before %s", expired, month_start.date())
    return expired
