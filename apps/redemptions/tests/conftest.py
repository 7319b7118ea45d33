import pytest
from django.urls import reverse
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.accounts.models import User, UserProfile
from apps.challenges.models import ChallengeCycle, ChallengeItem
from apps.challenges.periods import current_cycle_month
from apps.redemptions.models import Redemption
from apps.restaurants.models import Market, Restaurant, RestaurantOffer


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def user(db):
    user = User.objects.create_user(email='diner@example.com', password='TestPass123!')
    UserProfile.objects.create(user=user, email='diner.profile@example.com')
    return user


@pytest.fixture
def other_user(db):
    return User.objects.create_user(email='otherdiner@example.com', password='TestPass123!')


@pytest.fixture
def market(db):
    return Market.objects.create(name='McKinney, TX', timezone='America/Chicago')


@pytest.fixture
def make_restaurant(market):
    def _make(name, pin='1234'):
        restaurant = Restaurant(name=name, market=market, cuisine_tags=['american'])
        restaurant.set_pin(pin)
        restaurant.save()
        RestaurantOffer.objects.create(restaurant=restaurant, active=True)
        return restaurant

    return _make


@pytest.fixture
def restaurant(make_restaurant):
    return make_restaurant('Rick\'s Chophouse')


@pytest.fixture
def other_restaurant(make_restaurant):
    return make_restaurant('Harvest Kitchen', pin='5678')


@pytest.fixture
def cycle(user):
    return ChallengeCycle.objects.create(user=user, cycle_month=current_cycle_month())


@pytest.fixture
def challenge_item(cycle, restaurant):
    return ChallengeItem.objects.create(cycle=cycle, restaurant=restaurant, slot_number=1)


@pytest.fixture
def make_redemption(user, restaurant):
    """Redemption with an explicit token; no challenge item attached."""

    def _make(token, status='issued', for_user=None, at=None):
        return Redemption.objects.create(
            user=for_user or user,
            restaurant=at or restaurant,
            token=token,
            status=status,
        )

    return _make


@pytest.fixture
def authenticated_client(api_client, user):
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def partner_client(restaurant):
    """Client holding a partner session cookie for ``restaurant``."""
    client = APIClient()
    response = client.post(
        reverse('restaurants:partner-login'),
        {'restaurant_id': str(restaurant.id), 'pin': '1234'},
        format='json',
    )
    assert response.status_code == 200
    return client
