from django import forms
from django.contrib import admin

from apps.restaurants.models import Market, RestaurantOrg, Restaurant, RestaurantOffer, RestaurantStatus
from apps.restaurants.services import parse_cuisine_tags


class RestaurantOfferInline(admin.TabularInline):
    """Inline admin for offers."""
    model = RestaurantOffer
    extra = 0
    fields = [
        'discount_amount_cents',
        'min_spend_cents',
        'max_redemptions_per_month',
        'active',
    ]


class RestaurantAdminForm(forms.ModelForm):
    """Cuisine tags as free text and a write-only partner PIN."""

    cuisine = forms.CharField(
        required=False,
        help_text='Comma or semicolon separated, e.g. "thai; noodles, spicy".'
    )
    new_pin = forms.CharField(
        required=False,
        label='Partner PIN',
        help_text='Leave blank to keep the current PIN.'
    )

    class Meta:
        model = Restaurant
        exclude = ['cuisine_tags', 'pin_hash']

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        if self.instance.pk:
            self.fields['cuisine'].initial = ', '.join(self.instance.cuisine_tags or [])

    def save(self, commit=True):
        restaurant = super().save(commit=False)
        restaurant.cuisine_tags = parse_cuisine_tags(self.cleaned_data.get('cuisine'))
        if self.cleaned_data.get('new_pin'):
            restaurant.set_pin(self.cleaned_data['new_pin'])
        if commit:
            restaurant.save()
        return restaurant


@admin.register(Market)
class MarketAdmin(admin.ModelAdmin):
    list_display = ['name', 'timezone', 'status', 'created_at']
    list_filter = ['status']
    search_fields = ['name']


@admin.register(RestaurantOrg)
class RestaurantOrgAdmin(admin.ModelAdmin):
    list_display = ['name', 'market', 'created_at']
    list_filter = ['market']
    search_fields = ['name']


@admin.register(Restaurant)
class RestaurantAdmin(admin.ModelAdmin):
    """Admin interface for partner restaurants."""

    form = RestaurantAdminForm
    inlines = [RestaurantOfferInline]

    list_display = [
        'name',
        'market',
        'tags_display',
        'neighborhood',
        'status',
        'has_pin',
        'created_at',
    ]
    list_filter = ['status', 'market']
    search_fields = ['name', 'address', 'neighborhood']
    readonly_fields = ['created_at', 'updated_at']
    actions = ['retire_restaurants']

    def tags_display(self, obj):
        return ', '.join(obj.cuisine_tags or [])
    tags_display.short_description = 'Cuisine'

    def has_pin(self, obj):
        return bool(obj.pin_hash)
    has_pin.boolean = True
    has_pin.short_description = 'PIN set'

    @admin.action(description='Retire selected restaurants (deactivate offers)')
    def retire_restaurants(self, request, queryset):
        count = queryset.update(status=RestaurantStatus.INACTIVE)
        RestaurantOffer.objects.filter(restaurant__in=queryset, active=True).update(active=False)
        self.message_user(request, f'Retired {count} restaurant(s).')


@admin.register(RestaurantOffer)
class RestaurantOfferAdmin(admin.ModelAdmin):
    list_display = [
        'restaurant',
        'discount_amount_cents',
        'min_spend_cents',
        'max_redemptions_per_month',
        'active',
    ]
    list_filter = ['active']
    search_fields = ['restaurant__name']
    list_select_related = ['restaurant']
