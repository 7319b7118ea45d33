from rest_framework import serializers

from apps.restaurants.serializers import RestaurantSerializer
from .models import ChallengeCycle, ChallengeItem


class ChallengeCycleSerializer(serializers.ModelSerializer):

    swaps_remaining = serializers.IntegerField(read_only=True)

    class Meta:
        model = ChallengeCycle
        fields = [
            'id',
            'cycle_month',
            'status',
            'swap_count_used',
            'swaps_remaining',
            'created_at',
        ]
        read_only_fields = fields


class ChallengeItemSerializer(serializers.ModelSerializer):

    cycle_id = serializers.UUIDField(read_only=True)
    restaurant_id = serializers.UUIDField(read_only=True)
    swapped_from_item_id = serializers.UUIDField(read_only=True, allow_null=True)

    class Meta:
        model = ChallengeItem
        fields = [
            'id',
            'cycle_id',
            'restaurant_id',
            'slot_number',
            'status',
            'swapped_from_item_id',
            'created_at',
        ]
        read_only_fields = fields


class OfferTermsSerializer(serializers.Serializer):
    discount_amount_cents = serializers.IntegerField()
    min_spend_cents = serializers.IntegerField()


class ChallengeItemViewSerializer(serializers.Serializer):
    """One slot of the dashboard: item, restaurant card, offer, token."""

    challenge_item = ChallengeItemSerializer()
    restaurant = RestaurantSerializer()
    offer = OfferTermsSerializer()
    redemption_token = serializers.CharField(allow_null=True)
    redemption_status = serializers.CharField(allow_null=True)


class ChallengeViewSerializer(serializers.Serializer):
    cycle = ChallengeCycleSerializer()
    items = ChallengeItemViewSerializer(many=True)


class SwapResultSerializer(serializers.Serializer):
    challenge_item = ChallengeItemSerializer()
    replaced_item = ChallengeItemSerializer()
    restaurant = RestaurantSerializer()
    offer = OfferTermsSerializer()


class GenerateChallengeSerializer(serializers.Serializer):
    market_id = serializers.UUIDField(required=False, allow_null=True)
