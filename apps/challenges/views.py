from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from drf_spectacular.utils import extend_schema

from config.api import success, failure_for
from .serializers import (
    ChallengeViewSerializer,
    SwapResultSerializer,
    GenerateChallengeSerializer,
)
from .services import (
    generate_monthly_challenge,
    get_current_challenge,
    swap_challenge_item,
    ChallengeServiceError,
    ProfileRequiredError,
    SubscriptionRequiredError,
    NoEligibleRestaurantsError,
    InsufficientInventoryError,
    ItemNotFoundError,
    ItemAlreadySwappedError,
    CycleNotFoundError,
    NotCycleOwnerError,
    SwapLimitReachedError,
    StoreUnavailableError,
)


CHALLENGE_ERROR_STATUS = [
    (ProfileRequiredError, status.HTTP_404_NOT_FOUND),
    (ItemNotFoundError, status.HTTP_404_NOT_FOUND),
    (CycleNotFoundError, status.HTTP_404_NOT_FOUND),
    (SubscriptionRequiredError, status.HTTP_403_FORBIDDEN),
    (NotCycleOwnerError, status.HTTP_403_FORBIDDEN),
    (ItemAlreadySwappedError, status.HTTP_409_CONFLICT),
    (SwapLimitReachedError, status.HTTP_409_CONFLICT),
    (NoEligibleRestaurantsError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (InsufficientInventoryError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (StoreUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE),
]


@extend_schema(
    responses={200: ChallengeViewSerializer},
    description="This month's challenge, or null if none has been generated.",
    tags=['challenges'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def current_challenge(request):
    try:
        view = get_current_challenge(user=request.user)
    except ChallengeServiceError as e:
        return failure_for(e, CHALLENGE_ERROR_STATUS)

    return success(ChallengeViewSerializer(view).data if view else None)


@extend_schema(
    request=GenerateChallengeSerializer,
    responses={200: ChallengeViewSerializer},
    description="Generate this month's two restaurants, or return the existing ones.",
    tags=['challenges'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def generate_challenge(request):
    """Idempotent: repeated calls in one month return the same cycle."""
    serializer = GenerateChallengeSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        view = generate_monthly_challenge(
            user=request.user,
            market_id=serializer.validated_data.get('market_id'),
        )
    except ChallengeServiceError as e:
        return failure_for(e, CHALLENGE_ERROR_STATUS)

    return success(ChallengeViewSerializer(view).data)


@extend_schema(
    request=None,
    responses={200: SwapResultSerializer},
    description="Use the cycle's single swap to replace this item.",
    tags=['challenges'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def swap_item(request, item_id):
    try:
        result = swap_challenge_item(item_id=item_id, user=request.user)
    except ChallengeServiceError as e:
        return failure_for(e, CHALLENGE_ERROR_STATUS)

    return success(SwapResultSerializer(result).data)
