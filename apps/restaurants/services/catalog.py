"""
Restaurant catalog service.

The assignable catalog is every active restaurant in a market that has at
least one active offer. Offers are resolved once per query and attached to
the restaurant as ``active_offer`` so callers never re-query them.
"""

import logging
import re

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Prefetch

from apps.restaurants.models import (
    Market,
    MarketStatus,
    Restaurant,
    RestaurantOffer,
    RestaurantOrg,
    RestaurantStatus,
)

from .exceptions import (
    MarketNotFoundError,
    RestaurantNotFoundError,
    InvalidRestaurantDataError,
)

logger = logging.getLogger(__name__)

DEFAULT_DISCOUNT_CENTS = 1000
DEFAULT_MIN_SPEND_CENTS = 4000
DEFAULT_MONTHLY_CAP = 50


def parse_cuisine_tags(text):
    """Split admin input such as ``"Thai; noodles, Spicy"`` into clean tags."""
    return [part.strip().lower() for part in re.split(r'[,;]', text or '') if part.strip()]


def list_markets():
    return Market.objects.filter(status=MarketStatus.ACTIVE)


def get_default_market():
    """First active market, used when neither request nor profile names one."""
    return Market.objects.filter(status=MarketStatus.ACTIVE).order_by('created_at').first()


def list_assignable_restaurants(*, market_id=None):
    """
    Active restaurants with an active offer, each carrying ``active_offer``.

    When a restaurant has several active offers the newest one wins.
    """
    queryset = (
        Restaurant.objects
        .filter(status=RestaurantStatus.ACTIVE, offers__active=True)
        .distinct()
        .prefetch_related(
            Prefetch(
                'offers',
                queryset=RestaurantOffer.objects.filter(active=True).order_by('-created_at'),
                to_attr='active_offers',
            )
        )
        .order_by('name')
    )
    if market_id is not None:
        queryset = queryset.filter(market_id=market_id)

    restaurants = list(queryset)
    for restaurant in restaurants:
        restaurant.active_offer = restaurant.active_offers[0]
    return restaurants


def get_restaurant(*, restaurant_id) -> Restaurant:
    """
    Raises:
        RestaurantNotFoundError: If no restaurant has this id
    """
    try:
        return Restaurant.objects.get(id=restaurant_id)
    except (Restaurant.DoesNotExist, ValidationError):
        raise RestaurantNotFoundError("Restaurant not found.")


@transaction.atomic
def create_restaurant(
    *,
    name: str,
    cuisine: str = '',
    market: Market = None,
    address: str = '',
    description: str = '',
    pin: str = '',
    max_redemptions_per_month: int = DEFAULT_MONTHLY_CAP,
) -> Restaurant:
    """
    Create an org, its restaurant and the default active offer.

    Raises:
        InvalidRestaurantDataError: If the name is blank
        MarketNotFoundError: If no market is given and none exists
    """
    name = (name or '').strip()
    if not name:
        raise InvalidRestaurantDataError("Name is required.")

    market = market or get_default_market()
    if market is None:
        raise MarketNotFoundError("No market found. Create a market first.")

    org = RestaurantOrg.objects.create(name=name, market=market)
    restaurant = Restaurant(
        name=name,
        market=market,
        org=org,
        cuisine_tags=parse_cuisine_tags(cuisine),
        address=(address or '').strip(),
        description=(description or '').strip(),
    )
    restaurant.set_pin(pin)
    restaurant.save()

    RestaurantOffer.objects.create(
        restaurant=restaurant,
        discount_amount_cents=DEFAULT_DISCOUNT_CENTS,
        min_spend_cents=DEFAULT_MIN_SPEND_CENTS,
        max_redemptions_per_month=max_redemptions_per_month,
        active=True,
    )

    logger.info("Created restaurant %s in market %s", restaurant.id, market.name)
    return restaurant


@transaction.atomic
def retire_restaurant(*, restaurant_id) -> Restaurant:
    """Deactivate a restaurant and its offers; history keeps referencing it."""
    restaurant = get_restaurant(restaurant_id=restaurant_id)
    restaurant.status = RestaurantStatus.INACTIVE
    restaurant.save(update_fields=['status', 'updated_at'])
    restaurant.offers.filter(active=True).update(active=False)

    logger.info("Retired restaurant %s", restaurant.id)
    return restaurant
