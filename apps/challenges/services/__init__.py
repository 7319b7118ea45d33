"""Services for monthly challenge generation and swaps."""

from .exceptions import (
    ChallengeServiceError,
    ProfileRequiredError,
    SubscriptionRequiredError,
    NoEligibleRestaurantsError,
    InsufficientInventoryError,
    ItemNotFoundError,
    ItemAlreadySwappedError,
    CycleNotFoundError,
    NotCycleOwnerError,
    SwapLimitReachedError,
    StoreUnavailableError,
)
from .eligibility import (
    DIETARY_EXCLUSIONS,
    Candidate,
    DinerProfile,
    HistoricalContext,
    ExclusionRule,
    get_dietary_conflict,
    has_allergy_conflict,
    exclusion_reasons,
    filter_eligible,
)
from .selection import pick_distinct
from .assignment import (
    CHALLENGE_ITEMS_PER_MONTH,
    ChallengeView,
    ChallengeItemView,
    OfferTerms,
    generate_monthly_challenge,
    get_current_challenge,
    build_challenge_view,
)
from .swap import SwapResult, swap_challenge_item

__all__ = [
    # Exceptions
    'ChallengeServiceError',
    'ProfileRequiredError',
    'SubscriptionRequiredError',
    'NoEligibleRestaurantsError',
    'InsufficientInventoryError',
    'ItemNotFoundError',
    'ItemAlreadySwappedError',
    'CycleNotFoundError',
    'NotCycleOwnerError',
    'SwapLimitReachedError',
    'StoreUnavailableError',
    # Eligibility
    'DIETARY_EXCLUSIONS',
    'Candidate',
    'DinerProfile',
    'HistoricalContext',
    'ExclusionRule',
    'get_dietary_conflict',
    'has_allergy_conflict',
    'exclusion_reasons',
    'filter_eligible',
    'pick_distinct',
    # Engines
    'CHALLENGE_ITEMS_PER_MONTH',
    'ChallengeView',
    'ChallengeItemView',
    'OfferTerms',
    'generate_monthly_challenge',
    'get_current_challenge',
    'build_challenge_view',
    'SwapResult',
    'swap_challenge_item',
]
