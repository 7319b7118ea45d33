"""Services for Stripe subscription billing."""

from .exceptions import (
    BillingServiceError,
    BillingNotConfiguredError,
    NoBillingAccountError,
    PaymentProviderError,
    InvalidWebhookError,
)
from .stripe_gateway import (
    create_checkout_session,
    create_billing_portal_session,
    construct_event,
)
from .subscription_sync import handle_stripe_event

__all__ = [
    # Exceptions
    'BillingServiceError',
    'BillingNotConfiguredError',
    'NoBillingAccountError',
    'PaymentProviderError',
    'InvalidWebhookError',
    # Services
    'create_checkout_session',
    'create_billing_portal_session',
    'construct_event',
    'handle_stripe_event',
]
