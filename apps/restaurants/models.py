from django.contrib.auth.hashers import make_password, check_password
from django.core.validators import MinValueValidator
from django.db import models
import uuid


class MarketStatus(models.TextChoices):
    ACTIVE = 'active', 'Active'
    INACTIVE = 'inactive', 'Inactive'


class RestaurantStatus(models.TextChoices):
    ACTIVE = 'active', 'Active'
    INACTIVE = 'inactive', 'Inactive'


def normalize_cuisine_tags(tags):
    """Lowercase, trim and de-duplicate cuisine tags, keeping order."""
    cleaned = []
    for tag in tags or []:
        value = str(tag).strip().lower()
        if value and value not in cleaned:
            cleaned.append(value)
    return cleaned


class Market(models.Model):
    """A city or region restaurants and subscribers belong to."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100, unique=True)
    timezone = models.CharField(max_length=64, default='UTC')
    status = models.CharField(
        max_length=20,
        choices=MarketStatus.choices,
        default=MarketStatus.ACTIVE
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'markets'
        ordering = ['name']

    def __str__(self):
        return self.name


class RestaurantOrg(models.Model):
    """Owning organisation; one org may run several locations."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    market = models.ForeignKey(Market, on_delete=models.CASCADE, related_name='orgs')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'restaurant_orgs'

    def __str__(self):
        return self.name


class Restaurant(models.Model):
    """
    A partner location that can be assigned in a monthly challenge.

    Restaurants are never deleted once referenced by challenge history;
    retire them by setting status to inactive.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200, db_index=True)
    market = models.ForeignKey(Market, on_delete=models.PROTECT, related_name='restaurants')
    org = models.ForeignKey(
        RestaurantOrg,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='restaurants'
    )
    cuisine_tags = models.JSONField(default=list, blank=True)
    address = models.CharField(max_length=300, blank=True)
    neighborhood = models.CharField(max_length=100, blank=True)
    price_range = models.CharField(max_length=10, blank=True)
    description = models.TextField(blank=True)
    image_url = models.URLField(max_length=500, blank=True)
    lat = models.FloatField(null=True, blank=True)
    lng = models.FloatField(null=True, blank=True)
    status = models.CharField(
        max_length=20,
        choices=RestaurantStatus.choices,
        default=RestaurantStatus.ACTIVE,
        db_index=True
    )

    # Partner staff login
    pin_hash = models.CharField(max_length=128, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'restaurants'
        ordering = ['name']
        indexes = [
            models.Index(fields=['market', 'status'], name='restaurants_market_status_idx'),
        ]

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        self.cuisine_tags = normalize_cuisine_tags(self.cuisine_tags)
        super().save(*args, **kwargs)

    def set_pin(self, raw_pin):
        self.pin_hash = make_password(raw_pin.strip()) if raw_pin else ''

    def check_pin(self, raw_pin):
        if not self.pin_hash or not raw_pin:
            return False
        return check_password(raw_pin.strip(), self.pin_hash)


class RestaurantOffer(models.Model):
    """Discount terms; only restaurants with an active offer are assignable."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    restaurant = models.ForeignKey(Restaurant, on_delete=models.CASCADE, related_name='offers')
    discount_amount_cents = models.PositiveIntegerField(default=1000)
    min_spend_cents = models.PositiveIntegerField(default=4000)
    max_redemptions_per_month = models.PositiveIntegerField(
        default=50,
        validators=[MinValueValidator(1)]
    )
    active = models.BooleanField(default=True, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'restaurant_offers'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.restaurant.name}: ${self.discount_amount_cents / 100:.0f} off ${self.min_spend_cents / 100:.0f}"
