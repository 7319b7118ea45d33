import uuid

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from drf_spectacular.utils import extend_schema, OpenApiParameter

from config.api import success, failure, failure_for
from .models import Restaurant, RestaurantStatus
from .permissions import (
    read_partner_restaurant,
    attach_partner_cookie,
    clear_partner_cookie,
)
from .serializers import (
    MarketSerializer,
    RestaurantListSerializer,
    PartnerRestaurantSerializer,
    PartnerLoginSerializer,
)
from .services import (
    list_markets,
    list_assignable_restaurants,
    login_partner,
    PartnerServiceError,
    RestaurantNotFoundError,
    MarketNotFoundError,
    InvalidPinError,
)


PARTNER_ERROR_STATUS = [
    (RestaurantNotFoundError, status.HTTP_404_NOT_FOUND),
    (InvalidPinError, status.HTTP_401_UNAUTHORIZED),
]


@extend_schema(
    responses={200: MarketSerializer(many=True)},
    description="List active markets.",
    tags=['restaurants'],
)
@api_view(['GET'])
@permission_classes([AllowAny])
def market_list(request):
    return success(MarketSerializer(list_markets(), many=True).data)


@extend_schema(
    parameters=[
        OpenApiParameter(name='market', type=str, description='Market UUID'),
    ],
    responses={200: RestaurantListSerializer(many=True)},
    description="Active partner restaurants with their current offer.",
    tags=['restaurants'],
)
@api_view(['GET'])
@permission_classes([AllowAny])
def restaurant_list(request):
    """Public locations listing."""
    market_id = request.query_params.get('market')
    if market_id:
        try:
            market_id = uuid.UUID(market_id)
        except ValueError:
            return failure(MarketNotFoundError("Unknown market."), status.HTTP_404_NOT_FOUND)

    restaurants = list_assignable_restaurants(market_id=market_id or None)
    return success(RestaurantListSerializer(restaurants, many=True).data)


@extend_schema(
    responses={200: PartnerRestaurantSerializer(many=True)},
    description="Restaurants to choose from on the partner login screen.",
    tags=['partner'],
)
@api_view(['GET'])
@permission_classes([AllowAny])
def partner_restaurant_options(request):
    restaurants = Restaurant.objects.filter(status=RestaurantStatus.ACTIVE).order_by('name')
    return success(PartnerRestaurantSerializer(restaurants, many=True).data)


@extend_schema(
    request=PartnerLoginSerializer,
    description="Check a restaurant PIN and start a partner session cookie.",
    tags=['partner'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def partner_login(request):
    serializer = PartnerLoginSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        restaurant = login_partner(**serializer.validated_data)
    except PartnerServiceError as e:
        return failure_for(e, PARTNER_ERROR_STATUS)

    response = success({
        'restaurant_id': str(restaurant.id),
        'restaurant_name': restaurant.name,
    })
    return attach_partner_cookie(response, restaurant)


@extend_schema(
    request=None,
    description="End the partner session.",
    tags=['partner'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def partner_logout(request):
    return clear_partner_cookie(success(None))


@extend_schema(
    description="Current partner session, or null when signed out.",
    tags=['partner'],
)
@api_view(['GET'])
@permission_classes([AllowAny])
def partner_session(request):
    restaurant = read_partner_restaurant(request)
    if restaurant is None:
        return success(None)

    return success({
        'restaurant_id': str(restaurant.id),
        'restaurant_name': restaurant.name,
    })
