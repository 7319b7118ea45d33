"""
Stripe Checkout and Billing Portal sessions.

Checkout runs in subscription mode with the configured price; the user id
travels in session metadata so the webhook can find the profile again.
"""

import logging

import stripe
from django.conf import settings

from apps.accounts.models import User, UserProfile

from .exceptions import (
    BillingNotConfiguredError,
    NoBillingAccountError,
    PaymentProviderError,
    InvalidWebhookError,
)

logger = logging.getLogger(__name__)


def _client():
    if not settings.STRIPE_SECRET_KEY:
        raise BillingNotConfiguredError("Stripe is not configured.")
    stripe.api_key = settings.STRIPE_SECRET_KEY
    return stripe


def _base_url():
    if not settings.SITE_BASE_URL:
        raise BillingNotConfiguredError("SITE_BASE_URL is not set.")
    return settings.SITE_BASE_URL.rstrip('/')


def create_checkout_session(*, user: User) -> str:
    """
    Start a subscription checkout and return the hosted page URL.

    Raises:
        BillingNotConfiguredError: If the price, key or base URL is missing
        PaymentProviderError: If Stripe fails or returns no URL
    """
    if not settings.STRIPE_PRICE_ID:
        raise BillingNotConfiguredError("Stripe price is not configured.")
    base_url = _base_url()
    client = _client()

    try:
        session = client.checkout.Session.create(
            mode='subscription',
            line_items=[{'price': settings.STRIPE_PRICE_ID, 'quantity': 1}],
            success_url=f"{base_url}/?success=true",
            cancel_url=f"{base_url}/?canceled=true",
            customer_email=user.email,
            metadata={'user_id': str(user.id)},
        )
    except stripe.StripeError as e:
        logger.error("Failed to create checkout session for user %s: %s", user.id, e)
        raise PaymentProviderError(str(e) or "Checkout failed.")

    if not session.url:
        raise PaymentProviderError("Failed to create checkout URL.")

    logger.info("Created checkout session %s for user %s", session.id, user.id)
    return session.url


def create_billing_portal_session(*, user: User) -> str:
    """
    Open the Stripe customer portal for a subscribed user.

    Raises:
        NoBillingAccountError: If the user never completed checkout
        BillingNotConfiguredError: If the key or base URL is missing
        PaymentProviderError: If Stripe fails or returns no URL
    """
    profile = UserProfile.objects.filter(user=user).first()
    if profile is None or not profile.stripe_customer_id:
        raise NoBillingAccountError("No billing account found. Subscribe first to manage your plan.")

    base_url = _base_url()
    client = _client()

    try:
        session = client.billing_portal.Session.create(
            customer=profile.stripe_customer_id,
            return_url=f"{base_url}/billing",
        )
    except stripe.StripeError as e:
        logger.error("Failed to create portal session for user %s: %s", user.id, e)
        raise PaymentProviderError(str(e) or "Billing portal failed.")

    if not session.url:
        raise PaymentProviderError("Failed to create billing portal URL.")
    return session.url


def construct_event(*, payload: bytes, signature: str):
    """
    Verify a webhook signature and parse the event.

    Raises:
        BillingNotConfiguredError: If no webhook secret is configured
        InvalidWebhookError: If the signature is missing or wrong
    """
    if not settings.STRIPE_WEBHOOK_SECRET:
        raise BillingNotConfiguredError("Webhook secret not configured.")
    if not signature:
        raise InvalidWebhookError("Missing stripe-signature header.")

    try:
        return stripe.Webhook.construct_event(payload, signature, settings.STRIPE_WEBHOOK_SECRET)
    except (stripe.SignatureVerificationError, ValueError) as e:
        logger.warning("Stripe webhook signature verification failed: %s", e)
        raise InvalidWebhookError(f"Webhook Error: {e}")


def retrieve_period_end(subscription_id: str):
    """Unix timestamp of the subscription's current period end, or None."""
    subscription = _client().Subscription.retrieve(subscription_id)
    period_end = _field(subscription, 'current_period_end')
    if period_end is None:
        items = _field(_field(subscription, 'items') or {}, 'data') or []
        period_end = _field(items[0], 'current_period_end') if items else None
    return period_end


def _field(obj, key):
    try:
        return obj[key]
    except (KeyError, TypeError):
        return None
