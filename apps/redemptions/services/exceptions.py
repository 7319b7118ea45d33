"""Domain-specific exceptions for redemption services."""


class RedemptionServiceError(Exception):
    """Base exception for redemption services."""
    code = 'redemption_error'


class ItemNotFoundError(RedemptionServiceError):
    code = 'item_not_found'


class NotItemOwnerError(RedemptionServiceError):
    code = 'not_owner'


class AlreadyRedeemedError(RedemptionServiceError):
    code = 'already_redeemed'


class ItemSwappedOutError(RedemptionServiceError):
    """Raised when redeeming a slot that was swapped away."""
    code = 'item_swapped_out'


class InvalidTokenError(RedemptionServiceError):
    """Unknown token, or a token for another restaurant."""
    code = 'invalid_code'


class TokenAlreadyUsedError(RedemptionServiceError):
    code = 'already_used'

    def __init__(self, message, verified_at=None):
        self.verified_at = verified_at
        super().__init__(message)


class TokenExpiredError(RedemptionServiceError):
    code = 'expired'


class TokenGenerationError(RedemptionServiceError):
    code = 'token_generation_failed'
