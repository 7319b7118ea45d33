"""
Partner verification of redemption tokens.

Lookup is case-insensitive. Unknown tokens and tokens for another
restaurant get the same "Invalid code" answer. The issued -> verified
transition is a conditional UPDATE, so of two simultaneous submissions
exactly one wins and the other is told the code was already used.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from django.db import transaction
from django.utils import dateformat, timezone

from apps.challenges.services.store import store_errors
from apps.redemptions.models import Redemption, RedemptionStatus

from .badge_awards import award_badges_for_user
from .exceptions import InvalidTokenError, TokenAlreadyUsedError, TokenExpiredError
from .tokens import normalize_token

logger = logging.getLogger(__name__)

USED_AT_FORMAT = 'M j, Y, g:i A'


@dataclass(frozen=True)
class VerificationResult:
    redemption: Redemption
    email: Optional[str]
    restaurant_name: str
    verified_at: datetime
    new_badges: list = field(default_factory=list)


def verify_redemption_token(*, token: str, restaurant_id) -> VerificationResult:
    """
    Mark a token verified on behalf of the restaurant's partner session.

    Raises:
        InvalidTokenError: Blank, unknown, or another restaurant's token
        TokenAlreadyUsedError: Token was verified before (message cites when)
        TokenExpiredError: Token expired unused
        StoreUnavailableError: On database failure
    """
    token = normalize_token(token)
    if not token:
        raise InvalidTokenError("Invalid code")

    with store_errors("Verification"):
        redemption = (
            Redemption.objects
            .select_related('user', 'restaurant')
            .filter(token__iexact=token)
            .first()
        )
        if redemption is None or str(redemption.restaurant_id) != str(restaurant_id):
            logger.info("Rejected unknown token at restaurant %s", restaurant_id)
            raise InvalidTokenError("Invalid code")

        _check_still_issued(redemption)

        now = timezone.now()
        with transaction.atomic():
            updated = (
                Redemption.objects
                .filter(id=redemption.id, status=RedemptionStatus.ISSUED)
                .update(status=RedemptionStatus.VERIFIED, verified_at=now)
            )
            if not updated:
                redemption.refresh_from_db()
                _check_still_issued(redemption)
                raise TokenAlreadyUsedError("This code was already used.")

            new_badges = award_badges_for_user(user=redemption.user)

    redemption.status = RedemptionStatus.VERIFIED
    redemption.verified_at = now
    logger.info("Verified redemption %s at restaurant %s", redemption.id, restaurant_id)

    profile = getattr(redemption.user, 'profile', None)
    return VerificationResult(
        redemption=redemption,
        email=(profile.email if profile and profile.email else redemption.user.email),
        restaurant_name=redemption.restaurant.name,
        verified_at=now,
        new_badges=new_badges,
    )


def _check_still_issued(redemption: Redemption):
    if redemption.status == RedemptionStatus.VERIFIED:
        used_at = (
            dateformat.format(timezone.localtime(redemption.verified_at), USED_AT_FORMAT)
            if redemption.verified_at else 'a previous time'
        )
        raise TokenAlreadyUsedError(
            f"This code was already used on {used_at}.",
            verified_at=redemption.verified_at,
        )
    if redemption.status == RedemptionStatus.EXPIRED:
        raise TokenExpiredError("Code expired")
