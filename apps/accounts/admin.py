from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.html import format_html

from .models import User, UserProfile, SubscriptionStatus


SUBSCRIPTION_COLORS = {
    SubscriptionStatus.ACTIVE: '#6B8E5E',
    SubscriptionStatus.PAST_DUE: '#E5C49A',
    SubscriptionStatus.CANCELED: '#B85C5C',
    SubscriptionStatus.NONE: '#ccc',
}


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Admin for auth identities (email login, no username)."""

    list_display = [
        'email',
        'display_name',
        'is_active_badge',
        'is_staff',
        'created_at',
        'last_login',
    ]
    list_filter = ['is_active', 'is_staff', 'is_superuser', 'created_at']
    search_fields = ['email', 'display_name']
    ordering = ['-created_at']
    date_hierarchy = 'created_at'

    fieldsets = (
        ('Basic Information', {
            'fields': ('email', 'display_name', 'password')
        }),
        ('Permissions', {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'last_login'),
            'classes': ('collapse',),
        }),
    )

    add_fieldsets = (
        ('Create User', {
            'classes': ('wide',),
            'fields': ('email', 'display_name', 'password1', 'password2'),
        }),
    )

    readonly_fields = ['created_at', 'last_login']
    filter_horizontal = ['groups', 'user_permissions']
    actions = ['activate_users', 'deactivate_users']

    def is_active_badge(self, obj):
        """Display active status as colored badge."""
        color, label = ('#6B8E5E', 'Active') if obj.is_active else ('#B85C5C', 'Inactive')
        return format_html(
            '<span style="background: {}; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            color, label
        )
    is_active_badge.short_description = 'Status'
    is_active_badge.admin_order_field = 'is_active'

    @admin.action(description='Activate selected users')
    def activate_users(self, request, queryset):
        count = queryset.update(is_active=True)
        self.message_user(request, f'Activated {count} user(s).')

    @admin.action(description='Deactivate selected users')
    def deactivate_users(self, request, queryset):
        """Deactivate selected users, skipping superusers."""
        safe_queryset = queryset.filter(is_superuser=False)
        count = safe_queryset.update(is_active=False)
        skipped = queryset.count() - count
        msg = f'Deactivated {count} user(s).'
        if skipped:
            msg += f' Skipped {skipped} superuser(s).'
        self.message_user(request, msg)


@admin.register(UserProfile)
class UserProfileAdmin(admin.ModelAdmin):
    """Subscriber profiles with dietary/allergy flags and billing state."""

    list_display = [
        'email',
        'username',
        'market',
        'distance_band',
        'subscription_badge',
        'current_period_end',
        'created_at',
    ]
    list_filter = ['subscription_status', 'distance_band', 'role', 'market']
    search_fields = ['email', 'username', 'full_name', 'user__email', 'stripe_customer_id']
    raw_id_fields = ['user']
    readonly_fields = ['created_at', 'updated_at', 'stripe_customer_id']
    list_select_related = ['user', 'market']

    fieldsets = (
        ('Identity', {
            'fields': ('user', 'email', 'full_name', 'username', 'phone_number', 'address'),
        }),
        ('Eligibility', {
            'fields': ('market', 'dietary_flags', 'allergy_flags', 'distance_band', 'wants_cocktail_experience'),
        }),
        ('Billing', {
            'fields': ('subscription_status', 'stripe_customer_id', 'current_period_end'),
        }),
        ('Meta', {
            'fields': ('role', 'created_at', 'updated_at'),
            'classes': ('collapse',),
        }),
    )

    def subscription_badge(self, obj):
        return format_html(
            '<span style="background: {}; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            SUBSCRIPTION_COLORS.get(obj.subscription_status, '#ccc'),
            obj.get_subscription_status_display()
        )
    subscription_badge.short_description = 'Subscription'
    subscription_badge.admin_order_field = 'subscription_status'
