"""Partner (restaurant staff) login by restaurant id and PIN."""

import logging

from django.core.exceptions import ValidationError

from apps.restaurants.models import Restaurant

from .exceptions import InvalidPinError, RestaurantNotFoundError

logger = logging.getLogger(__name__)


def login_partner(*, restaurant_id, pin: str) -> Restaurant:
    """
    Check a partner PIN and return the restaurant it unlocks.

    Raises:
        InvalidPinError: If fields are missing or the PIN does not match
        RestaurantNotFoundError: If the restaurant id is unknown
    """
    pin = (pin or '').strip()
    if not restaurant_id or not pin:
        raise InvalidPinError("Select a restaurant and enter your PIN.")

    try:
        restaurant = Restaurant.objects.get(id=restaurant_id)
    except (Restaurant.DoesNotExist, ValidationError):
        raise RestaurantNotFoundError("Restaurant not found.")

    if not restaurant.check_pin(pin):
        logger.warning("Rejected partner PIN for restaurant %s", restaurant.id)
        raise InvalidPinError("Invalid PIN.")

    logger.info("Partner login for restaurant %s", restaurant.id)
    return restaurant


def get_session_restaurant(restaurant_id):
    """Restaurant for a session cookie value, or None if it no longer exists."""
    if not restaurant_id:
        return None
    try:
        return Restaurant.objects.get(id=restaurant_id)
    except (Restaurant.DoesNotExist, ValidationError):
        return None
