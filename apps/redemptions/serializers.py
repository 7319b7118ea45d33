from rest_framework import serializers

from .models import Redemption, Badge


class IssuedRedemptionSerializer(serializers.ModelSerializer):
    """What the subscriber shows at the table."""

    redeemed_at = serializers.DateTimeField(source='created_at', read_only=True)
    challenge_item_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = Redemption
        fields = ['id', 'token', 'status', 'redeemed_at', 'challenge_item_id']
        read_only_fields = fields


class VerifyTokenSerializer(serializers.Serializer):
    token = serializers.CharField(max_length=32, allow_blank=True)


class VerificationResultSerializer(serializers.Serializer):
    email = serializers.EmailField(allow_null=True)
    restaurant_name = serializers.CharField()
    verified_at = serializers.DateTimeField()
    new_badges = serializers.ListField(child=serializers.CharField())


class BadgeProgressSerializer(serializers.Serializer):
    id = serializers.CharField()
    name = serializers.CharField()
    description = serializers.CharField()
    icon = serializers.CharField()
    is_earned = serializers.BooleanField()
    awarded_at = serializers.DateTimeField(allow_null=True)


class HistoryEntrySerializer(serializers.Serializer):
    restaurant_name = serializers.CharField()
    date = serializers.DateField(allow_null=True)


class UserStatsSerializer(serializers.Serializer):
    xp = serializers.IntegerField()
    level = serializers.IntegerField()
    current_level_name = serializers.CharField()
    next_level_xp = serializers.IntegerField(allow_null=True)
    progress_percent = serializers.IntegerField()
    redemption_count = serializers.IntegerField()
    history = HistoryEntrySerializer(many=True)
    badges = BadgeProgressSerializer(many=True)


class PartnerStatsSerializer(serializers.Serializer):
    total_redemptions_this_month = serializers.IntegerField()


class BadgeSerializer(serializers.ModelSerializer):

    class Meta:
        model = Badge
        fields = ['slug', 'name', 'description', 'icon', 'threshold']
        read_only_fields = fields
