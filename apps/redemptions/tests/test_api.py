import pytest
from django.urls import reverse
from rest_framework import status

from apps.redemptions.models import RedemptionStatus


@pytest.mark.django_db
class TestRedeemItem:
    """Tests for POST /api/redemptions/items/<id>/redeem/"""

    def test_redeem(self, authenticated_client, challenge_item):
        response = authenticated_client.post(reverse('redemptions:redeem', args=[challenge_item.id]))

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['data']['token'].startswith('WB-')
        assert response.data['data']['redeemed_at']

    def test_redeemed_token_shows_on_challenge(self, authenticated_client, challenge_item):
        redeemed = authenticated_client.post(reverse('redemptions:redeem', args=[challenge_item.id]))

        current = authenticated_client.get(reverse('challenges:current'))

        item = current.data['data']['items'][0]
        assert item['challenge_item']['status'] == 'redeemed'
        assert item['redemption_token'] == redeemed.data['data']['token']

    def test_redeem_twice(self, authenticated_client, challenge_item):
        url = reverse('redemptions:redeem', args=[challenge_item.id])
        authenticated_client.post(url)

        response = authenticated_client.post(url)

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['error'] == 'This challenge has already been redeemed.'


@pytest.mark.django_db
class TestVerifyToken:
    """Tests for POST /api/redemptions/verify/"""

    def test_requires_partner_session(self, api_client, make_redemption):
        make_redemption('WB-AB23C')

        response = api_client.post(reverse('redemptions:verify'), {'token': 'WB-AB23C'}, format='json')

        assert response.status_code in (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN)

    def test_verify(self, partner_client, make_redemption):
        make_redemption('WB-AB23C')

        response = partner_client.post(reverse('redemptions:verify'), {'token': 'wb-ab23c'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['data']['email'] == 'diner.profile@example.com'
        assert response.data['data']['new_badges'] == ['First Bite']

    def test_verify_twice(self, partner_client, make_redemption):
        make_redemption('WB-AB23C')
        url = reverse('redemptions:verify')
        partner_client.post(url, {'token': 'WB-AB23C'}, format='json')

        response = partner_client.post(url, {'token': 'WB-AB23C'}, format='json')

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['code'] == 'already_used'

    def test_other_restaurants_token(self, partner_client, other_restaurant, make_redemption):
        redemption = make_redemption('WB-AB23C', at=other_restaurant)

        response = partner_client.post(reverse('redemptions:verify'), {'token': 'WB-AB23C'}, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['error'] == 'Invalid code'
        redemption.refresh_from_db()
        assert redemption.status == RedemptionStatus.ISSUED

    def test_partner_stats(self, partner_client, make_redemption):
        make_redemption('WB-AB23C')
        partner_client.post(reverse('redemptions:verify'), {'token': 'WB-AB23C'}, format='json')

        response = partner_client.get(reverse('redemptions:partner-stats'))

        assert response.data['data'] == {'total_redemptions_this_month': 1}


@pytest.mark.django_db
class TestMyStats:
    """Tests for GET /api/redemptions/stats/"""

    def test_new_user(self, authenticated_client):
        response = authenticated_client.get(reverse('redemptions:my-stats'))

        assert response.status_code == status.HTTP_200_OK
        data = response.data['data']
        assert data['xp'] == 0
        assert data['level'] == 1
        assert data['current_level_name'] == 'The Explorer'
        assert data['history'] == []
        assert [b['id'] for b in data['badges']] == ['first_bite', 'hat_trick', 'wanderer', 'high_five']
