"""Apply Stripe webhook events to subscriber profiles."""

import logging
from datetime import datetime, timezone as dt_timezone

import stripe
from django.core.exceptions import ValidationError

from apps.accounts.models import UserProfile, SubscriptionStatus

from .exceptions import PaymentProviderError
from .stripe_gateway import retrieve_period_end, _field

logger = logging.getLogger(__name__)


def _object_id(value):
    """Stripe expands some references into objects; accept either form."""
    if value is None or isinstance(value, str):
        return value
    return _field(value, 'id')


def handle_stripe_event(event) -> bool:
    """
    Update profiles for the events we care about.

    Runs outside a transaction: the Stripe lookup happens first and each
    profile change is a single UPDATE.

    Returns:
        True if the event changed state, False if it was ignored
    """
    event_type = _field(event, 'type')
    obj = event['data']['object']
    logger.info("Received Stripe event %s", event_type)

    if event_type == 'checkout.session.completed':
        return _checkout_completed(obj)
    if event_type == 'customer.subscription.deleted':
        return _subscription_deleted(obj)

    logger.debug("Ignoring Stripe event %s", event_type)
    return False


def _checkout_completed(session) -> bool:
    metadata = _field(session, 'metadata') or {}
    user_id = _field(metadata, 'user_id')
    if not user_id:
        logger.error("checkout.session.completed without metadata.user_id")
        return False

    current_period_end = None
    subscription_id = _object_id(_field(session, 'subscription'))
    if subscription_id:
        try:
            period_end = retrieve_period_end(subscription_id)
        except stripe.StripeError as e:
            raise PaymentProviderError(f"Could not load subscription {subscription_id}: {e}")
        if period_end:
            current_period_end = datetime.fromtimestamp(period_end, tz=dt_timezone.utc)

    try:
        updated = UserProfile.objects.filter(user_id=user_id).update(
            stripe_customer_id=_object_id(_field(session, 'customer')) or '',
            subscription_status=SubscriptionStatus.ACTIVE,
            current_period_end=current_period_end,
        )
    except ValidationError:
        logger.error("checkout.session.completed with malformed user id %r", user_id)
        return False
    if not updated:
        logger.warning("Checkout completed for user %s without a profile", user_id)
    else:
        logger.info("Subscription activated for user %s", user_id)
    return bool(updated)


def _subscription_deleted(subscription) -> bool:
    customer_id = _object_id(_field(subscription, 'customer'))
    if not customer_id:
        return False

    updated = UserProfile.objects.filter(stripe_customer_id=customer_id).update(
        subscription_status=SubscriptionStatus.CANCELED,
    )
    logger.info("Subscription canceled for customer %s (%d profile(s))", customer_id, updated)
    return bool(updated)
