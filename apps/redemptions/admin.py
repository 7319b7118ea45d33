from django.contrib import admin

from apps.redemptions.models import Redemption, Badge, UserBadge


@admin.register(Redemption)
class RedemptionAdmin(admin.ModelAdmin):
    """Admin interface for issued and verified codes."""

    list_display = ['token', 'user', 'restaurant', 'status', 'created_at', 'verified_at']
    list_filter = ['status', 'restaurant', 'created_at']
    search_fields = ['token', 'user__email', 'restaurant__name']
    raw_id_fields = ['user', 'restaurant', 'challenge_item']
    readonly_fields = ['token', 'created_at']
    date_hierarchy = 'created_at'
    list_select_related = ['user', 'restaurant']


@admin.register(Badge)
class BadgeAdmin(admin.ModelAdmin):
    list_display = ['slug', 'name', 'threshold', 'icon']
    ordering = ['threshold', 'slug']


@admin.register(UserBadge)
class UserBadgeAdmin(admin.ModelAdmin):
    list_display = ['user', 'badge', 'awarded_at']
    list_filter = ['badge']
    search_fields = ['user__email']
    raw_id_fields = ['user']
    readonly_fields = ['awarded_at']
