import pytest
from rest_framework.test import APIClient

from apps.restaurants.models import Market, Restaurant, RestaurantOffer, RestaurantStatus


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def market(db):
    return Market.objects.create(name='McKinney, TX', timezone='America/Chicago')


@pytest.fixture
def other_market(db):
    return Market.objects.create(name='Austin, TX', timezone='America/Chicago')


@pytest.fixture
def make_restaurant(market):
    """Factory: restaurant with an active offer and PIN 1234 unless told otherwise."""

    def _make(name, tags=(), offer=True, cap=50, status=RestaurantStatus.ACTIVE, in_market=None):
        restaurant = Restaurant(
            name=name,
            market=in_market or market,
            cuisine_tags=list(tags),
            status=status,
        )
        restaurant.set_pin('1234')
        restaurant.save()
        if offer:
            RestaurantOffer.objects.create(
                restaurant=restaurant,
                max_redemptions_per_month=cap,
                active=True,
            )
        return restaurant

    return _make


@pytest.fixture
def restaurant(make_restaurant):
    return make_restaurant('Hutchins BBQ', tags=['BBQ', ' Meat '])
