"""Domain-specific exceptions for challenge services."""


class ChallengeServiceError(Exception):
    """Base exception for challenge services."""
    code = 'challenge_error'


class ProfileRequiredError(ChallengeServiceError):
    """Raised when the user has no profile to read flags from."""
    code = 'profile_not_found'


class SubscriptionRequiredError(ChallengeServiceError):
    code = 'subscription_required'


class NoEligibleRestaurantsError(ChallengeServiceError):
    """Raised when the market catalog has nothing assignable at all."""
    code = 'no_eligible_restaurants'


class InsufficientInventoryError(ChallengeServiceError):
    """Raised when fewer restaurants pass the filter than must be assigned."""
    code = 'insufficient_inventory'

    def __init__(self, required, found, message=None):
        self.required = required
        self.found = found
        super().__init__(message or (
            f"No eligible restaurants found. Need at least {required} distinct "
            f"restaurants; found {found}. Check dietary preferences, allergies, "
            f"redemption cooldown, swap cooldown, and capacity."
        ))


class ItemNotFoundError(ChallengeServiceError):
    code = 'item_not_found'


class ItemAlreadySwappedError(ChallengeServiceError):
    code = 'already_swapped'


class CycleNotFoundError(ChallengeServiceError):
    code = 'cycle_not_found'


class NotCycleOwnerError(ChallengeServiceError):
    code = 'not_owner'


class SwapLimitReachedError(ChallengeServiceError):
    code = 'swap_limit_reached'


class StoreUnavailableError(ChallengeServiceError):
    """Raised when the database rejects or cannot serve an engine operation."""
    code = 'store_unavailable'
