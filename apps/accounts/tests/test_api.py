import pytest
from django.urls import reverse
from rest_framework import status

from apps.accounts.models import User, UserProfile


# =============================================================================
# Registration Tests
# =============================================================================

@pytest.mark.django_db
class TestRegistration:
    """Tests for POST /api/auth/register/"""

    def test_register_success(self, api_client):
        """Successfully register a new user."""
        url = reverse('users:register')
        data = {
            'email': 'newuser@example.com',
            'password': 'SecurePass123!',
            'password_confirm': 'SecurePass123!',
            'display_name': 'New User',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_201_CREATED
        assert 'access' in response.data['tokens']
        assert 'refresh' in response.data['tokens']
        assert response.data['user']['has_profile'] is False
        assert User.objects.filter(email='newuser@example.com').exists()

    def test_register_duplicate_email(self, api_client, user):
        """Cannot register with existing email."""
        url = reverse('users:register')
        data = {
            'email': user.email,
            'password': 'SecurePass123!',
            'password_confirm': 'SecurePass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['ok'] is False
        assert response.data['code'] == 'registration_failed'

    def test_register_password_mismatch(self, api_client):
        """Registration fails when passwords don't match."""
        url = reverse('users:register')
        data = {
            'email': 'mismatch@example.com',
            'password': 'SecurePass123!',
            'password_confirm': 'DifferentPass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'password_confirm' in response.data


# =============================================================================
# Login Tests
# =============================================================================

@pytest.mark.django_db
class TestLogin:
    """Tests for POST /api/auth/login/"""

    def test_login_success(self, api_client, user):
        url = reverse('users:login')
        response = api_client.post(url, {'email': user.email, 'password': 'TestPass123!'})

        assert response.status_code == status.HTTP_200_OK
        assert 'access' in response.data['tokens']
        assert response.data['user']['email'] == user.email

    def test_login_case_insensitive_email(self, api_client, user):
        url = reverse('users:login')
        response = api_client.post(url, {'email': 'TestUser@Example.com', 'password': 'TestPass123!'})

        assert response.status_code == status.HTTP_200_OK

    def test_login_wrong_password(self, api_client, user):
        url = reverse('users:login')
        response = api_client.post(url, {'email': user.email, 'password': 'WrongPass123!'})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data['code'] == 'invalid_credentials'

    def test_login_inactive_account(self, api_client, user_inactive):
        url = reverse('users:login')
        response = api_client.post(url, {'email': user_inactive.email, 'password': 'TestPass123!'})

        assert response.status_code == status.HTTP_403_FORBIDDEN


# =============================================================================
# Onboarding & Profile Tests
# =============================================================================

@pytest.mark.django_db
class TestOnboarding:
    """Tests for POST /api/auth/onboarding/"""

    def test_onboarding_creates_profile(self, authenticated_client, user):
        url = reverse('users:onboarding')
        data = {
            'dietary_flags': ['Vegan', ' vegan ', 'Halal'],
            'distance_band': '25_mi',
            'wants_cocktail_experience': True,
        }
        response = authenticated_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['ok'] is True
        profile = UserProfile.objects.get(user=user)
        assert profile.dietary_flags == ['vegan', 'halal']
        assert profile.distance_band == '25_mi'
        assert profile.email == user.email

    def test_onboarding_drops_blank_flags(self, authenticated_client, user):
        response = authenticated_client.post(
            reverse('users:onboarding'),
            {'dietary_flags': ['', 'Vegetarian', '   '], 'distance_band': '5_mi'},
            format='json',
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert UserProfile.objects.get(user=user).dietary_flags == ['vegetarian']

    def test_onboarding_twice_conflicts(self, authenticated_client, profile):
        url = reverse('users:onboarding')
        response = authenticated_client.post(url, {'distance_band': '5_mi'}, format='json')

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['code'] == 'profile_exists'

    def test_onboarding_requires_auth(self, api_client):
        url = reverse('users:onboarding')
        response = api_client.post(url, {'distance_band': '5_mi'}, format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestProfile:
    """Tests for GET/PATCH /api/auth/profile/"""

    def test_get_profile_without_onboarding(self, authenticated_client):
        response = authenticated_client.get(reverse('users:profile'))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['code'] == 'profile_not_found'

    def test_get_profile(self, authenticated_client, profile):
        response = authenticated_client.get(reverse('users:profile'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['data']['dietary_flags'] == ['vegetarian']

    def test_patch_allergy_flags(self, authenticated_client, profile):
        response = authenticated_client.patch(
            reverse('users:profile'),
            {'allergy_flags': ['Peanut', ''], 'full_name': '  Ada Diner '},
            format='json',
        )

        assert response.status_code == status.HTTP_200_OK
        profile.refresh_from_db()
        assert profile.allergy_flags == ['peanut']
        assert profile.full_name == 'Ada Diner'

    def test_patch_username_taken(self, authenticated_client, profile, other_user):
        UserProfile.objects.create(user=other_user, email=other_user.email, username='taken')

        response = authenticated_client.patch(
            reverse('users:profile'), {'username': 'taken'}, format='json'
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['code'] == 'username_taken'
        assert response.data['error'] == 'That username is already taken.'


@pytest.mark.django_db
class TestOnboardingDetails:
    """Tests for /api/auth/onboarding/details/"""

    def test_check_reports_missing_fields(self, authenticated_client, profile):
        response = authenticated_client.get(reverse('users:onboarding-details'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['data']['needs_completion'] is True
        assert response.data['data']['username'] is None

    def test_submit_details(self, authenticated_client, profile):
        response = authenticated_client.post(
            reverse('users:onboarding-details'),
            {'username': 'ada', 'address': '1 Main St'},
            format='json',
        )

        assert response.status_code == status.HTTP_200_OK
        check = authenticated_client.get(reverse('users:onboarding-details'))
        assert check.data['data'] == {'needs_completion': False}

    def test_submit_blank_address_rejected(self, authenticated_client, profile):
        response = authenticated_client.post(
            reverse('users:onboarding-details'),
            {'username': 'ada', 'address': '  '},
            format='json',
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['code'] == 'invalid_profile_data'
