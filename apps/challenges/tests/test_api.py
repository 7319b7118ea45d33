import uuid
from unittest.mock import patch

import pytest
from django.db import DatabaseError
from django.urls import reverse
from rest_framework import status

from apps.accounts.models import SubscriptionStatus


@pytest.mark.django_db
class TestCurrentChallenge:
    """Tests for GET /api/challenges/current/"""

    def test_none_before_generation(self, authenticated_client, profile, restaurants):
        response = authenticated_client.get(reverse('challenges:current'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {'ok': True, 'data': None}

    def test_requires_auth(self, api_client):
        response = api_client.get(reverse('challenges:current'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestGenerateChallenge:
    """Tests for POST /api/challenges/generate/"""

    def test_generate(self, authenticated_client, profile, restaurants):
        response = authenticated_client.post(reverse('challenges:generate'), {}, format='json')

        assert response.status_code == status.HTTP_200_OK
        data = response.data['data']
        assert data['cycle']['swaps_remaining'] == 1
        assert len(data['items']) == 2
        item = data['items'][0]
        assert item['offer'] == {'discount_amount_cents': 1000, 'min_spend_cents': 4000}
        assert item['redemption_token'] is None
        assert item['restaurant']['name']

    def test_generate_twice_same_cycle(self, authenticated_client, profile, restaurants):
        url = reverse('challenges:generate')
        first = authenticated_client.post(url, {}, format='json')
        second = authenticated_client.post(url, {}, format='json')

        assert first.data['data']['cycle']['id'] == second.data['data']['cycle']['id']

        current = authenticated_client.get(reverse('challenges:current'))
        assert current.data['data']['cycle']['id'] == first.data['data']['cycle']['id']

    def test_without_profile(self, authenticated_client, restaurants):
        response = authenticated_client.post(reverse('challenges:generate'), {}, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['code'] == 'profile_not_found'

    def test_without_subscription(self, authenticated_client, profile, restaurants):
        profile.subscription_status = SubscriptionStatus.NONE
        profile.save()

        response = authenticated_client.post(reverse('challenges:generate'), {}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_insufficient_inventory(self, authenticated_client, profile, make_restaurant):
        make_restaurant('Only One')

        response = authenticated_client.post(reverse('challenges:generate'), {}, format='json')

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.data['ok'] is False
        assert response.data['error'].startswith('No eligible restaurants found.')


@pytest.mark.django_db
class TestSwapItem:
    """Tests for POST /api/challenges/items/<id>/swap/"""

    def generate(self, client):
        response = client.post(reverse('challenges:generate'), {}, format='json')
        return response.data['data']['items']

    def test_swap(self, authenticated_client, profile, restaurants):
        items = self.generate(authenticated_client)
        item_id = items[0]['challenge_item']['id']

        response = authenticated_client.post(reverse('challenges:swap', args=[item_id]))

        assert response.status_code == status.HTTP_200_OK
        data = response.data['data']
        assert data['replaced_item']['id'] == item_id
        assert data['replaced_item']['status'] == 'swapped_out'
        assert data['challenge_item']['swapped_from_item_id'] == item_id
        assert data['restaurant']['id'] not in {i['restaurant']['id'] for i in items}

    def test_second_swap_conflicts(self, authenticated_client, profile, restaurants):
        items = self.generate(authenticated_client)
        authenticated_client.post(reverse('challenges:swap', args=[items[0]['challenge_item']['id']]))

        response = authenticated_client.post(
            reverse('challenges:swap', args=[items[1]['challenge_item']['id']])
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['code'] == 'swap_limit_reached'

    def test_unknown_item(self, authenticated_client, profile):
        response = authenticated_client.post(reverse('challenges:swap', args=[uuid.uuid4()]))

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_generate_store_failure(self, authenticated_client, profile, restaurants):
        with patch('apps.challenges.services.assignment.load_candidates',
                   side_effect=DatabaseError('connection lost')):
            response = authenticated_client.post(reverse('challenges:generate'), {}, format='json')

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert response.data['code'] == 'store_unavailable'
        assert response.data['error'] == 'Assignment failed: connection lost'
