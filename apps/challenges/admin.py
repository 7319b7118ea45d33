from django.contrib import admin

from apps.challenges.models import ChallengeCycle, ChallengeItem


class ChallengeItemInline(admin.TabularInline):
    model = ChallengeItem
    fk_name = 'cycle'
    extra = 0
    fields = ['slot_number', 'restaurant', 'status', 'swapped_from_item', 'swapped_out_at', 'created_at']
    readonly_fields = ['created_at']
    raw_id_fields = ['restaurant', 'swapped_from_item']


@admin.register(ChallengeCycle)
class ChallengeCycleAdmin(admin.ModelAdmin):
    """Admin interface for monthly cycles."""

    list_display = ['user', 'cycle_month', 'status', 'swap_count_used', 'created_at']
    list_filter = ['status', 'cycle_month']
    search_fields = ['user__email']
    raw_id_fields = ['user']
    readonly_fields = ['created_at']
    date_hierarchy = 'cycle_month'
    inlines = [ChallengeItemInline]


@admin.register(ChallengeItem)
class ChallengeItemAdmin(admin.ModelAdmin):
    list_display = ['cycle', 'slot_number', 'restaurant', 'status', 'created_at']
    list_filter = ['status']
    search_fields = ['restaurant__name', 'cycle__user__email']
    raw_id_fields = ['cycle', 'restaurant', 'swapped_from_item']
    list_select_related = ['cycle__user', 'restaurant']
