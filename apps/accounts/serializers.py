from rest_framework import serializers
from django.contrib.auth.password_validation import validate_password

from .models import User, UserProfile, DistanceBand


class UserSerializer(serializers.ModelSerializer):
    """Basic user serializer for the current account."""

    has_profile = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            'id',
            'email',
            'display_name',
            'created_at',
            'last_login',
            'has_profile',
        ]
        read_only_fields = fields

    def get_has_profile(self, obj):
        return UserProfile.objects.filter(user=obj).exists()


class UserRegistrationSerializer(serializers.Serializer):
    """Serializer for user registration."""

    email = serializers.EmailField(required=True)
    display_name = serializers.CharField(max_length=100, required=False, allow_blank=True)
    password = serializers.CharField(
        write_only=True,
        required=True,
        validators=[validate_password],
        style={'input_type': 'password'}
    )
    password_confirm = serializers.CharField(
        write_only=True,
        required=True,
        style={'input_type': 'password'}
    )

    def validate(self, attrs):
        """Validate password confirmation."""
        if attrs['password'] != attrs['password_confirm']:
            raise serializers.ValidationError({
                'password_confirm': 'Passwords do not match'
            })
        return attrs


class UserLoginSerializer(serializers.Serializer):
    """Serializer for user login."""

    email = serializers.EmailField(required=True)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )


class UserProfileSerializer(serializers.ModelSerializer):
    """Subscriber profile as shown on the profile page."""

    market_id = serializers.UUIDField(read_only=True, allow_null=True)

    class Meta:
        model = UserProfile
        fields = [
            'email',
            'full_name',
            'username',
            'phone_number',
            'address',
            'dietary_flags',
            'allergy_flags',
            'distance_band',
            'wants_cocktail_experience',
            'market_id',
            'subscription_status',
            'current_period_end',
        ]
        read_only_fields = fields


class OnboardingSerializer(serializers.Serializer):
    """Input for the first onboarding step."""

    dietary_flags = serializers.ListField(
        child=serializers.CharField(max_length=50, allow_blank=True),
        required=False,
        default=list
    )
    distance_band = serializers.ChoiceField(choices=DistanceBand.choices)
    wants_cocktail_experience = serializers.BooleanField(required=False, default=False)
    market_id = serializers.UUIDField(required=False, allow_null=True)


class ProfileUpdateSerializer(serializers.Serializer):
    """Input for profile edits; every field is optional."""

    full_name = serializers.CharField(max_length=200, required=False, allow_blank=True)
    email = serializers.EmailField(required=False, allow_blank=True)
    username = serializers.CharField(max_length=50, required=False, allow_blank=True, allow_null=True)
    phone_number = serializers.CharField(max_length=30, required=False, allow_blank=True)
    address = serializers.CharField(max_length=300, required=False, allow_blank=True)
    dietary_flags = serializers.ListField(child=serializers.CharField(max_length=50, allow_blank=True), required=False)
    allergy_flags = serializers.ListField(child=serializers.CharField(max_length=50, allow_blank=True), required=False)
    distance_band = serializers.ChoiceField(choices=DistanceBand.choices, required=False)
    market_id = serializers.UUIDField(required=False, allow_null=True)


class OnboardingDetailsSerializer(serializers.Serializer):
    """Username and address from the onboarding modal."""

    username = serializers.CharField(max_length=50, allow_blank=True)
    address = serializers.CharField(max_length=300, allow_blank=True)
