from rest_framework import status, serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.tokens import RefreshToken
from drf_spectacular.utils import extend_schema

from config.api import success, failure, failure_for
from .serializers import (
    UserSerializer,
    UserRegistrationSerializer,
    UserLoginSerializer,
    UserProfileSerializer,
    OnboardingSerializer,
    ProfileUpdateSerializer,
    OnboardingDetailsSerializer,
)
from .services import (
    register_user,
    authenticate_subscriber,
    get_profile,
    complete_onboarding,
    update_profile,
    update_onboarding_details,
    get_onboarding_check,
    AccountsServiceError,
    UserRegistrationError,
    InvalidCredentialsError,
    InactiveAccountError,
    ProfileNotFoundError,
    ProfileAlreadyExistsError,
    UsernameTakenError,
)


PROFILE_ERROR_STATUS = [
    (ProfileNotFoundError, status.HTTP_404_NOT_FOUND),
    (ProfileAlreadyExistsError, status.HTTP_409_CONFLICT),
    (UsernameTakenError, status.HTTP_409_CONFLICT),
]


# Response serializers for API documentation
class TokensResponseSerializer(serializers.Serializer):
    refresh = serializers.CharField()
    access = serializers.CharField()


class AuthResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    user = UserSerializer()
    tokens = TokensResponseSerializer()


class ErrorResponseSerializer(serializers.Serializer):
    ok = serializers.BooleanField()
    error = serializers.CharField()
    code = serializers.CharField()


def _tokens_for(user):
    refresh = RefreshToken.for_user(user)
    return {
        'refresh': str(refresh),
        'access': str(refresh.access_token),
    }


@extend_schema(
    request=UserRegistrationSerializer,
    responses={201: AuthResponseSerializer, 400: ErrorResponseSerializer},
    description="Register a new subscriber account and receive JWT tokens.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def register(request):
    """Register a new user account."""
    serializer = UserRegistrationSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    data = serializer.validated_data
    try:
        user = register_user(
            email=data['email'],
            password=data['password'],
            display_name=data.get('display_name', ''),
        )
    except UserRegistrationError as e:
        return failure(e)

    return Response({
        'message': 'Registration successful. Complete onboarding to get your first challenge.',
        'user': UserSerializer(user).data,
        'tokens': _tokens_for(user),
    }, status=status.HTTP_201_CREATED)


@extend_schema(
    request=UserLoginSerializer,
    responses={200: AuthResponseSerializer, 401: ErrorResponseSerializer, 403: ErrorResponseSerializer},
    description="Authenticate with email and password to receive JWT tokens.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def login(request):
    """Login with email and password."""
    serializer = UserLoginSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        user = authenticate_subscriber(
            email=serializer.validated_data['email'],
            password=serializer.validated_data['password'],
        )
    except InvalidCredentialsError as e:
        return failure(e, status.HTTP_401_UNAUTHORIZED)
    except InactiveAccountError as e:
        return failure(e, status.HTTP_403_FORBIDDEN)

    return Response({
        'message': 'Login successful',
        'user': UserSerializer(user).data,
        'tokens': _tokens_for(user),
    })


@extend_schema(
    responses={200: UserSerializer},
    description="Get the current authenticated user.",
    tags=['auth'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def get_current_user(request):
    """Get current authenticated user."""
    return Response(UserSerializer(request.user).data)


@extend_schema(
    request=OnboardingSerializer,
    responses={201: UserProfileSerializer, 409: ErrorResponseSerializer},
    description="Create the subscriber profile (dietary flags, distance band).",
    tags=['profile'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def onboarding(request):
    """Complete onboarding."""
    serializer = OnboardingSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        profile = complete_onboarding(user=request.user, **serializer.validated_data)
    except AccountsServiceError as e:
        return failure_for(e, PROFILE_ERROR_STATUS)

    return success(UserProfileSerializer(profile).data, status.HTTP_201_CREATED)


@extend_schema(
    request=ProfileUpdateSerializer,
    responses={200: UserProfileSerializer, 404: ErrorResponseSerializer, 409: ErrorResponseSerializer},
    description="Read (GET) or update (PATCH) the subscriber profile.",
    tags=['profile'],
)
@api_view(['GET', 'PATCH'])
@permission_classes([IsAuthenticated])
def profile(request):
    """Read or update the current user's profile."""
    try:
        if request.method == 'GET':
            instance = get_profile(user=request.user)
        else:
            serializer = ProfileUpdateSerializer(data=request.data, partial=True)
            serializer.is_valid(raise_exception=True)
            instance = update_profile(user=request.user, **serializer.validated_data)
    except AccountsServiceError as e:
        return failure_for(e, PROFILE_ERROR_STATUS)

    return success(UserProfileSerializer(instance).data)


@extend_schema(
    request=OnboardingDetailsSerializer,
    responses={200: UserProfileSerializer},
    description="GET reports whether username/address are missing; POST saves them.",
    tags=['profile'],
)
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def onboarding_details(request):
    """Onboarding modal: check or submit username and address."""
    if request.method == 'GET':
        return success(get_onboarding_check(user=request.user))

    serializer = OnboardingDetailsSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        instance = update_onboarding_details(user=request.user, **serializer.validated_data)
    except AccountsServiceError as e:
        return failure_for(e, PROFILE_ERROR_STATUS)

    return success(UserProfileSerializer(instance).data)
