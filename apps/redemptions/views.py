from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from drf_spectacular.utils import extend_schema

from config.api import success, failure_for
from apps.challenges.services import StoreUnavailableError
from apps.restaurants.permissions import HasPartnerSession
from .serializers import (
    IssuedRedemptionSerializer,
    VerifyTokenSerializer,
    VerificationResultSerializer,
    UserStatsSerializer,
    PartnerStatsSerializer,
)
from .services import (
    redeem_challenge_item,
    verify_redemption_token,
    get_user_stats,
    get_partner_monthly_stats,
    RedemptionServiceError,
    ItemNotFoundError,
    NotItemOwnerError,
    AlreadyRedeemedError,
    ItemSwappedOutError,
    InvalidTokenError,
    TokenAlreadyUsedError,
    TokenExpiredError,
)


REDEMPTION_ERROR_STATUS = [
    (ItemNotFoundError, status.HTTP_404_NOT_FOUND),
    (NotItemOwnerError, status.HTTP_403_FORBIDDEN),
    (AlreadyRedeemedError, status.HTTP_409_CONFLICT),
    (ItemSwappedOutError, status.HTTP_409_CONFLICT),
    (InvalidTokenError, status.HTTP_404_NOT_FOUND),
    (TokenAlreadyUsedError, status.HTTP_409_CONFLICT),
    (TokenExpiredError, status.HTTP_410_GONE),
    (StoreUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE),
]


@extend_schema(
    request=None,
    responses={201: IssuedRedemptionSerializer},
    description="Redeem an assigned challenge item and receive a single-use code.",
    tags=['redemptions'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def redeem_item(request, item_id):
    try:
        redemption = redeem_challenge_item(item_id=item_id, user=request.user)
    except (RedemptionServiceError, StoreUnavailableError) as e:
        return failure_for(e, REDEMPTION_ERROR_STATUS)

    return success(IssuedRedemptionSerializer(redemption).data, status.HTTP_201_CREATED)


@extend_schema(
    request=VerifyTokenSerializer,
    responses={200: VerificationResultSerializer},
    description="Partner staff verify a code for their own restaurant.",
    tags=['partner'],
)
@api_view(['POST'])
@permission_classes([HasPartnerSession])
def verify_token(request):
    serializer = VerifyTokenSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        result = verify_redemption_token(
            token=serializer.validated_data['token'],
            restaurant_id=request.partner_restaurant.id,
        )
    except (RedemptionServiceError, StoreUnavailableError) as e:
        return failure_for(e, REDEMPTION_ERROR_STATUS)

    return success(VerificationResultSerializer(result).data)


@extend_schema(
    responses={200: PartnerStatsSerializer},
    description="Verified redemptions at the partner's restaurant this month.",
    tags=['partner'],
)
@api_view(['GET'])
@permission_classes([HasPartnerSession])
def partner_stats(request):
    try:
        stats = get_partner_monthly_stats(restaurant_id=request.partner_restaurant.id)
    except StoreUnavailableError as e:
        return failure_for(e, REDEMPTION_ERROR_STATUS)

    return success(PartnerStatsSerializer(stats).data)


@extend_schema(
    responses={200: UserStatsSerializer},
    description="XP, level, verified history and badges for the current user.",
    tags=['redemptions'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def my_stats(request):
    try:
        stats = get_user_stats(user=request.user)
    except StoreUnavailableError as e:
        return failure_for(e, REDEMPTION_ERROR_STATUS)

    return success(UserStatsSerializer(stats).data)
