"""Domain-specific exceptions for billing services."""


class BillingServiceError(Exception):
    """Base exception for billing services."""
    code = 'billing_error'


class BillingNotConfiguredError(BillingServiceError):
    code = 'billing_not_configured'


class NoBillingAccountError(BillingServiceError):
    code = 'no_billing_account'


class PaymentProviderError(BillingServiceError):
    """Raised when Stripe rejects or fails a request."""
    code = 'payment_provider_error'


class InvalidWebhookError(BillingServiceError):
    code = 'invalid_webhook'
