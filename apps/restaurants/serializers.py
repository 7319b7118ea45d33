from rest_framework import serializers

from .models import Market, Restaurant, RestaurantOffer


class MarketSerializer(serializers.ModelSerializer):

    class Meta:
        model = Market
        fields = ['id', 'name', 'timezone']
        read_only_fields = fields


class OfferSerializer(serializers.ModelSerializer):

    class Meta:
        model = RestaurantOffer
        fields = [
            'id',
            'discount_amount_cents',
            'min_spend_cents',
            'max_redemptions_per_month',
        ]
        read_only_fields = fields


class RestaurantSerializer(serializers.ModelSerializer):
    """Restaurant card as shown on challenge and locations pages."""

    market_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = Restaurant
        fields = [
            'id',
            'name',
            'market_id',
            'cuisine_tags',
            'address',
            'neighborhood',
            'price_range',
            'description',
            'image_url',
            'lat',
            'lng',
        ]
        read_only_fields = fields


class RestaurantListSerializer(RestaurantSerializer):
    """Catalog listing; expects ``active_offer`` set by the catalog service."""

    offer = OfferSerializer(source='active_offer', read_only=True)

    class Meta(RestaurantSerializer.Meta):
        fields = RestaurantSerializer.Meta.fields + ['offer']
        read_only_fields = fields


class PartnerRestaurantSerializer(serializers.ModelSerializer):
    """Minimal entry for the partner login picker."""

    class Meta:
        model = Restaurant
        fields = ['id', 'name']
        read_only_fields = fields


class PartnerLoginSerializer(serializers.Serializer):
    restaurant_id = serializers.UUIDField()
    pin = serializers.CharField(max_length=32, trim_whitespace=True)
