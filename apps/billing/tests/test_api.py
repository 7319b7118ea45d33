from datetime import datetime, timezone as dt_timezone
from unittest.mock import Mock, patch

import pytest
import stripe
from django.urls import reverse
from rest_framework import status

from apps.accounts.models import SubscriptionStatus


def checkout_completed_event(user_id, customer='cus_123', subscription='sub_123'):
    return {
        'type': 'checkout.session.completed',
        'data': {'object': {
            'metadata': {'user_id': str(user_id)},
            'customer': customer,
            'subscription': subscription,
        }},
    }


@pytest.mark.django_db
class TestCheckout:
    """Tests for POST /api/billing/checkout/"""

    def test_checkout_returns_session_url(self, authenticated_client, user, stripe_settings):
        session = Mock(id='cs_test_1', url='https://checkout.stripe.com/c/cs_test_1')

        with patch('stripe.checkout.Session.create', return_value=session) as create:
            response = authenticated_client.post(reverse('billing:checkout'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['data']['url'] == session.url
        kwargs = create.call_args.kwargs
        assert kwargs['mode'] == 'subscription'
        assert kwargs['line_items'] == [{'price': 'price_123', 'quantity': 1}]
        assert kwargs['success_url'] == 'https://wanderbite.test/?success=true'
        assert kwargs['cancel_url'] == 'https://wanderbite.test/?canceled=true'
        assert kwargs['metadata'] == {'user_id': str(user.id)}

    def test_checkout_without_price(self, authenticated_client, stripe_settings):
        stripe_settings.STRIPE_PRICE_ID = ''

        response = authenticated_client.post(reverse('billing:checkout'))

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.data['error'] == 'Stripe price is not configured.'

    def test_checkout_requires_auth(self, api_client):
        response = api_client.post(reverse('billing:checkout'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_stripe_failure(self, authenticated_client, stripe_settings):
        with patch('stripe.checkout.Session.create', side_effect=stripe.StripeError('card declined')):
            response = authenticated_client.post(reverse('billing:checkout'))

        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        assert response.data['code'] == 'payment_provider_error'


@pytest.mark.django_db
class TestPortal:
    """Tests for POST /api/billing/portal/"""

    def test_portal_without_customer(self, authenticated_client, profile, stripe_settings):
        response = authenticated_client.post(reverse('billing:portal'))

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['code'] == 'no_billing_account'

    def test_portal_returns_url(self, authenticated_client, profile, stripe_settings):
        profile.stripe_customer_id = 'cus_123'
        profile.save()
        session = Mock(url='https://billing.stripe.com/p/session_1')

        with patch('stripe.billing_portal.Session.create', return_value=session) as create:
            response = authenticated_client.post(reverse('billing:portal'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['data']['url'] == session.url
        assert create.call_args.kwargs == {
            'customer': 'cus_123',
            'return_url': 'https://wanderbite.test/billing',
        }


@pytest.mark.django_db
class TestWebhook:
    """Tests for POST /api/billing/webhook/"""

    def post_event(self, api_client, event):
        with patch('stripe.Webhook.construct_event', return_value=event) as construct:
            response = api_client.post(
                reverse('billing:webhook'),
                data=b'{}',
                content_type='application/json',
                HTTP_STRIPE_SIGNATURE='t=1,v1=abc',
            )
        return response, construct

    def test_checkout_completed_activates_subscription(self, api_client, profile, stripe_settings):
        period_end = int(datetime(2026, 11, 19, tzinfo=dt_timezone.utc).timestamp())

        with patch('stripe.Subscription.retrieve', return_value={'current_period_end': period_end}):
            response, construct = self.post_event(api_client, checkout_completed_event(profile.user_id))

        assert response.status_code == status.HTTP_200_OK
        assert construct.call_args.args == (b'{}', 't=1,v1=abc', 'whsec_123')
        profile.refresh_from_db()
        assert profile.subscription_status == SubscriptionStatus.ACTIVE
        assert profile.stripe_customer_id == 'cus_123'
        assert profile.current_period_end == datetime(2026, 11, 19, tzinfo=dt_timezone.utc)

    def test_subscription_deleted_cancels(self, api_client, profile, stripe_settings):
        profile.stripe_customer_id = 'cus_123'
        profile.subscription_status = SubscriptionStatus.ACTIVE
        profile.save()
        event = {
            'type': 'customer.subscription.deleted',
            'data': {'object': {'customer': 'cus_123'}},
        }

        response, _ = self.post_event(api_client, event)

        assert response.status_code == status.HTTP_200_OK
        profile.refresh_from_db()
        assert profile.subscription_status == SubscriptionStatus.CANCELED

    def test_unhandled_event_is_acknowledged(self, api_client, profile, stripe_settings):
        event = {'type': 'invoice.paid', 'data': {'object': {}}}

        response, _ = self.post_event(api_client, event)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['data'] == {'received': True}

    def test_bad_signature(self, api_client, stripe_settings):
        error = stripe.SignatureVerificationError('bad signature', 't=1,v1=abc')
        with patch('stripe.Webhook.construct_event', side_effect=error):
            response = api_client.post(
                reverse('billing:webhook'),
                data=b'{}',
                content_type='application/json',
                HTTP_STRIPE_SIGNATURE='t=1,v1=abc',
            )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['code'] == 'invalid_webhook'

    def test_missing_signature(self, api_client, stripe_settings):
        response = api_client.post(reverse('billing:webhook'), data=b'{}', content_type='application/json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_missing_webhook_secret(self, api_client, stripe_settings):
        stripe_settings.STRIPE_WEBHOOK_SECRET = ''

        response, _ = self.post_event(api_client, {'type': 'invoice.paid', 'data': {'object': {}}})

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
