import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.accounts.models import User, UserProfile


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def user(db):
    return User.objects.create_user(email='payer@example.com', password='TestPass123!')


@pytest.fixture
def profile(user):
    return UserProfile.objects.create(user=user, email=user.email)


@pytest.fixture
def authenticated_client(api_client, user):
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def stripe_settings(settings):
    """Configured Stripe keys and site URL."""
    settings.STRIPE_SECRET_KEY = 'sk_test_123'
    settings.STRIPE_WEBHOOK_SECRET = 'whsec_123'
    settings.STRIPE_PRICE_ID = 'price_123'
    settings.SITE_BASE_URL = 'https://wanderbite.test/'
    return settings
