"""
Management command to seed a demo market with partner restaurants.

Usage:
    python manage.py seed_market
    python manage.py seed_market --pin 4321 --clear

This creates:
- The McKinney, TX market
- Partner restaurants with cuisine tags and coordinates
- One active offer per restaurant (50 redemptions/month)
- A partner PIN on every restaurant
"""

from django.core.management.base import BaseCommand
from django.db import transaction

from apps.restaurants.models import Market, RestaurantOrg, Restaurant, RestaurantOffer


MARKET = {'name': 'McKinney, TX', 'timezone': 'America/Chicago'}

RESTAURANTS = [
    {
        'name': 'Hutchins BBQ',
        'tags': ['bbq', 'meat', 'casual'],
        'address': '1301 N Tennessee St, McKinney, TX 75069',
        'lat': 33.2113, 'lng': -96.6124,
        'discount': 1000, 'min_spend': 4000,
    },
    {
        'name': 'Ricks Chophouse',
        'tags': ['steakhouse', 'fine-dining', 'date-night'],
        'address': '107 N Kentucky St, McKinney, TX 75069',
        'lat': 33.1972, 'lng': -96.6156,
        'discount': 1500, 'min_spend': 7500,
    },
    {
        'name': 'The Yard',
        'tags': ['american', 'burgers', 'patio', 'social'],
        'address': '107 S Church St, McKinney, TX 75069',
        'lat': 33.1966, 'lng': -96.6163,
        'discount': 1000, 'min_spend': 3500,
    },
    {
        'name': 'Local Yocal BBQ & Grill',
        'tags': ['bbq', 'american', 'worth-trip'],
        'address': '350 E Louisiana St, McKinney, TX 75069',
        'lat': 33.1981, 'lng': -96.6111,
        'discount': 1000, 'min_spend': 5000,
    },
    {
        'name': 'Harvest Seasonal Kitchen',
        'tags': ['farm-to-table', 'vegetarian-friendly', 'patio'],
        'address': '200 W Virginia St, McKinney, TX 75069',
        'lat': 33.1976, 'lng': -96.6170,
        'discount': 1000, 'min_spend': 4000,
    },
    {
        'name': 'Sauce on the Square',
        'tags': ['italian', 'pasta', 'wine'],
        'address': '111 N Tennessee St, McKinney, TX 75069',
        'lat': 33.1979, 'lng': -96.6157,
        'discount': 1000, 'min_spend': 4000,
    },
]


class Command(BaseCommand):
    help = 'Seed a demo market with partner restaurants and offers'

    def add_arguments(self, parser):
        parser.add_argument(
            '--pin',
            default='1234',
            help='Partner PIN set on every seeded restaurant',
        )
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Delete the demo market and its restaurants first',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['clear']:
            self.stdout.write('Clearing demo market...')
            Restaurant.objects.filter(market__name=MARKET['name']).delete()
            Market.objects.filter(name=MARKET['name']).delete()

        market, created = Market.objects.get_or_create(
            name=MARKET['name'],
            defaults={'timezone': MARKET['timezone']},
        )
        if not created:
            self.stdout.write(f'Market {market.name} already exists, adding missing restaurants.')

        added = 0
        for data in RESTAURANTS:
            if Restaurant.objects.filter(market=market, name=data['name']).exists():
                continue

            org = RestaurantOrg.objects.create(name=data['name'], market=market)
            restaurant = Restaurant(
                name=data['name'],
                market=market,
                org=org,
                cuisine_tags=data['tags'],
                address=data['address'],
                lat=data['lat'],
                lng=data['lng'],
            )
            restaurant.set_pin(options['pin'])
            restaurant.save()

            RestaurantOffer.objects.create(
                restaurant=restaurant,
                discount_amount_cents=data['discount'],
                min_spend_cents=data['min_spend'],
                max_redemptions_per_month=50,
                active=True,
            )
            added += 1
            self.stdout.write(f'  Added {restaurant.name}')

        self.stdout.write(self.style.SUCCESS(f'Seed complete: {added} restaurant(s) added to {market.name}.'))
