import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.accounts.models import User, UserProfile, SubscriptionStatus
from apps.restaurants.models import Market, Restaurant, RestaurantOffer


class FirstPicks:
    """Random source stub: keeps the pool order so picks are predictable."""

    def shuffle(self, items):
        pass


@pytest.fixture
def first_picks():
    return FirstPicks()


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def market(db):
    return Market.objects.create(name='McKinney, TX', timezone='America/Chicago')


@pytest.fixture
def user(db):
    return User.objects.create_user(email='diner@example.com', password='TestPass123!')


@pytest.fixture
def other_user(db):
    return User.objects.create_user(email='otherdiner@example.com', password='TestPass123!')


@pytest.fixture
def profile(user, market):
    """Active subscriber with no dietary restrictions."""
    return UserProfile.objects.create(
        user=user,
        email=user.email,
        market=market,
        subscription_status=SubscriptionStatus.ACTIVE,
    )


@pytest.fixture
def make_restaurant(market):
    def _make(name, tags=(), cap=50):
        restaurant = Restaurant.objects.create(name=name, market=market, cuisine_tags=list(tags))
        RestaurantOffer.objects.create(restaurant=restaurant, max_redemptions_per_month=cap, active=True)
        return restaurant

    return _make


@pytest.fixture
def restaurants(make_restaurant):
    """Four restaurants, listed in name order by the catalog."""
    return [
        make_restaurant('A Taqueria', ['mexican']),
        make_restaurant('B Bistro', ['french']),
        make_restaurant('C Smokehouse', ['bbq', 'meat']),
        make_restaurant('D Noodle Bar', ['ramen', 'japanese']),
    ]


@pytest.fixture
def authenticated_client(api_client, user):
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client
