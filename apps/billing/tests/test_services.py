from datetime import datetime, timezone as dt_timezone
from unittest.mock import patch

import pytest
import stripe
from django.db import connection

from apps.accounts.models import SubscriptionStatus
from apps.billing.services import handle_stripe_event, PaymentProviderError


def checkout_completed(user_id):
    return {
        'type': 'checkout.session.completed',
        'data': {'object': {
            'metadata': {'user_id': str(user_id)},
            'customer': 'cus_123',
            'subscription': 'sub_123',
        }},
    }


@pytest.mark.django_db
class TestHandleStripeEvent:

    def test_subscription_lookup_happens_outside_a_transaction(self, profile, stripe_settings):
        depth = len(connection.savepoint_ids)
        seen = []
        period_end = int(datetime(2026, 11, 19, tzinfo=dt_timezone.utc).timestamp())

        def retrieve(subscription_id):
            seen.append(len(connection.savepoint_ids))
            return {'current_period_end': period_end}

        with patch('stripe.Subscription.retrieve', side_effect=retrieve):
            assert handle_stripe_event(checkout_completed(profile.user_id)) is True

        assert seen == [depth]

    def test_lookup_failure_leaves_profile_untouched(self, profile, stripe_settings):
        with patch('stripe.Subscription.retrieve', side_effect=stripe.StripeError('timeout')):
            with pytest.raises(PaymentProviderError):
                handle_stripe_event(checkout_completed(profile.user_id))

        profile.refresh_from_db()
        assert profile.subscription_status == SubscriptionStatus.NONE
        assert profile.stripe_customer_id == ''

    def test_unknown_user_is_ignored(self, profile, stripe_settings):
        event = checkout_completed('not-a-uuid')
        event['data']['object']['subscription'] = None

        assert handle_stripe_event(event) is False
