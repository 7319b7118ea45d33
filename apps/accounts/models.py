from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.db import models
import uuid


class UserManager(BaseUserManager):
    """Custom user manager for email-based authentication."""

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError('Email is required')

        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True')

        return self.create_user(email, password, **extra_fields)


class User(AbstractBaseUser, PermissionsMixin):
    """Auth identity. Everything the challenge engine needs lives on UserProfile."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True, max_length=255, db_index=True)
    display_name = models.CharField(max_length=100, blank=True)

    # Permissions
    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    last_login = models.DateTimeField(null=True, blank=True)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []

    class Meta:
        db_table = 'users'
        indexes = [
            models.Index(fields=['created_at'], name='users_created_at_idx'),
        ]

    def __str__(self):
        return self.email

    def get_display_name(self):
        """Return display name or email prefix."""
        return self.display_name or self.email.split('@')[0]


class SubscriptionStatus(models.TextChoices):
    NONE = 'none', 'None'
    ACTIVE = 'active', 'Active'
    PAST_DUE = 'past_due', 'Past due'
    CANCELED = 'canceled', 'Canceled'


class DistanceBand(models.TextChoices):
    MI_5 = '5_mi', '5 miles'
    MI_15 = '15_mi', '15 miles'
    MI_25 = '25_mi', '25 miles'
    MI_40 = '40_mi', '40 miles'


class ProfileRole(models.TextChoices):
    SUBSCRIBER = 'subscriber', 'Subscriber'
    ADMIN = 'admin', 'Admin'


class UserProfile(models.Model):
    """
    Subscriber profile created during onboarding.

    Shares its primary key with the auth user. Dietary and allergy flags
    drive the eligibility filter; subscription_status gates generation.
    """

    user = models.OneToOneField(
        User,
        on_delete=models.CASCADE,
        primary_key=True,
        related_name='profile'
    )
    email = models.EmailField(max_length=255, blank=True)
    full_name = models.CharField(max_length=200, blank=True)
    username = models.CharField(max_length=50, unique=True, null=True, blank=True)
    phone_number = models.CharField(max_length=30, blank=True)
    address = models.CharField(max_length=300, blank=True)

    # Eligibility inputs (lists of strings)
    dietary_flags = models.JSONField(default=list, blank=True)
    allergy_flags = models.JSONField(default=list, blank=True)

    # Onboarding preferences
    distance_band = models.CharField(
        max_length=10,
        choices=DistanceBand.choices,
        default=DistanceBand.MI_15
    )
    wants_cocktail_experience = models.BooleanField(default=False)
    role = models.CharField(
        max_length=20,
        choices=ProfileRole.choices,
        default=ProfileRole.SUBSCRIBER
    )

    # Home market, used when a generation request names none
    market = models.ForeignKey(
        'restaurants.Market',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='subscribers'
    )

    # Billing (written back by payment provider webhooks)
    subscription_status = models.CharField(
        max_length=20,
        choices=SubscriptionStatus.choices,
        default=SubscriptionStatus.NONE,
        db_index=True
    )
    stripe_customer_id = models.CharField(max_length=100, blank=True, db_index=True)
    current_period_end = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'user_profiles'

    def __str__(self):
        return f"Profile of {self.user.email}"

    @property
    def has_active_subscription(self):
        return self.subscription_status == SubscriptionStatus.ACTIVE

    @property
    def needs_onboarding_details(self):
        """Username and address are collected after the first onboarding step."""
        return not (self.username or '').strip() or not self.address.strip()
