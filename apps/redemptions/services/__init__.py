"""Services for redemptions, partner verification, badges and stats."""

from .exceptions import (
    RedemptionServiceError,
    ItemNotFoundError,
    NotItemOwnerError,
    AlreadyRedeemedError,
    ItemSwappedOutError,
    InvalidTokenError,
    TokenAlreadyUsedError,
    TokenExpiredError,
    TokenGenerationError,
)
from .tokens import generate_token, normalize_token, TOKEN_ALPHABET, TOKEN_PREFIX
from .redemption_management import redeem_challenge_item, expire_stale_redemptions
from .verification import VerificationResult, verify_redemption_token
from .badge_awards import BADGE_DEFINITIONS, award_badges_for_user, badges_for_count, ensure_badges
from .user_stats import LEVELS, XP_PER_REDEMPTION, get_level_info, get_user_stats
from .partner_stats import get_partner_monthly_stats

__all__ = [
    # Exceptions
    'RedemptionServiceError',
    'ItemNotFoundError',
    'NotItemOwnerError',
    'AlreadyRedeemedError',
    'ItemSwappedOutError',
    'InvalidTokenError',
    'TokenAlreadyUsedError',
    'TokenExpiredError',
    'TokenGenerationError',
    # Tokens
    'generate_token',
    'normalize_token',
    'TOKEN_ALPHABET',
    'TOKEN_PREFIX',
    # Redemption lifecycle
    'redeem_challenge_item',
    'expire_stale_redemptions',
    'VerificationResult',
    'verify_redemption_token',
    # Badges & stats
    'BADGE_DEFINITIONS',
    'award_badges_for_user',
    'badges_for_count',
    'ensure_badges',
    'LEVELS',
    'XP_PER_REDEMPTION',
    'get_level_info',
    'get_user_stats',
    'get_partner_monthly_stats',
]
