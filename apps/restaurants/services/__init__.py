"""Services for the restaurant catalog and partner sessions."""

from .exceptions import (
    PartnerServiceError,
    RestaurantNotFoundError,
    MarketNotFoundError,
    InvalidPinError,
    PartnerSessionRequiredError,
    InvalidRestaurantDataError,
)
from .catalog import (
    parse_cuisine_tags,
    list_markets,
    get_default_market,
    list_assignable_restaurants,
    get_restaurant,
    create_restaurant,
    retire_restaurant,
)
from .partner_sessions import login_partner, get_session_restaurant

__all__ = [
    # Exceptions
    'PartnerServiceError',
    'RestaurantNotFoundError',
    'MarketNotFoundError',
    'InvalidPinError',
    'PartnerSessionRequiredError',
    'InvalidRestaurantDataError',
    # Catalog
    'parse_cuisine_tags',
    'list_markets',
    'get_default_market',
    'list_assignable_restaurants',
    'get_restaurant',
    'create_restaurant',
    'retire_restaurant',
    # Partner sessions
    'login_partner',
    'get_session_restaurant',
]
