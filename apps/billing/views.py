import logging

from rest_framework import status, serializers
from rest_framework.decorators import api_view, permission_classes, authentication_classes
from rest_framework.permissions import IsAuthenticated, AllowAny
from drf_spectacular.utils import extend_schema, inline_serializer

from config.api import success, failure_for
from .services import (
    create_checkout_session,
    create_billing_portal_session,
    construct_event,
    handle_stripe_event,
    BillingServiceError,
    BillingNotConfiguredError,
    NoBillingAccountError,
    PaymentProviderError,
    InvalidWebhookError,
)

logger = logging.getLogger(__name__)


BILLING_ERROR_STATUS = [
    (NoBillingAccountError, status.HTTP_400_BAD_REQUEST),
    (InvalidWebhookError, status.HTTP_400_BAD_REQUEST),
    (BillingNotConfiguredError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (PaymentProviderError, status.HTTP_502_BAD_GATEWAY),
]

RedirectUrlSerializer = inline_serializer(
    name='RedirectUrl',
    fields={'url': serializers.URLField()},
)


@extend_schema(
    request=None,
    responses={200: RedirectUrlSerializer},
    description="Start a Stripe Checkout subscription for the current user.",
    tags=['billing'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def checkout(request):
    try:
        url = create_checkout_session(user=request.user)
    except BillingServiceError as e:
        return failure_for(e, BILLING_ERROR_STATUS)

    return success({'url': url})


@extend_schema(
    request=None,
    responses={200: RedirectUrlSerializer},
    description="Open the Stripe billing portal to manage the subscription.",
    tags=['billing'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def portal(request):
    try:
        url = create_billing_portal_session(user=request.user)
    except BillingServiceError as e:
        return failure_for(e, BILLING_ERROR_STATUS)

    return success({'url': url})


@extend_schema(
    request=None,
    responses={200: None},
    description="Stripe webhook receiver. Verifies the signature against the raw body.",
    tags=['billing'],
)
@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
def webhook(request):
    # Signature covers the exact bytes Stripe sent
    payload = request.body
    signature = request.META.get('HTTP_STRIPE_SIGNATURE', '')

    try:
        event = construct_event(payload=payload, signature=signature)
        handle_stripe_event(event)
    except BillingServiceError as e:
        logger.error("Stripe webhook rejected: %s", e)
        return failure_for(e, BILLING_ERROR_STATUS, default=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return success({'received': True})
