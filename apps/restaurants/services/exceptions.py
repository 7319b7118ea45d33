"""Domain-specific exceptions for catalog and partner services."""


class PartnerServiceError(Exception):
    """Base exception for restaurant/partner services."""
    code = 'partner_error'


class RestaurantNotFoundError(PartnerServiceError):
    code = 'restaurant_not_found'


class MarketNotFoundError(PartnerServiceError):
    code = 'market_not_found'


class InvalidPinError(PartnerServiceError):
    code = 'invalid_pin'


class PartnerSessionRequiredError(PartnerServiceError):
    """Raised when a partner-only operation has no valid session."""
    code = 'partner_session_required'


class InvalidRestaurantDataError(PartnerServiceError):
    code = 'invalid_restaurant_data'
