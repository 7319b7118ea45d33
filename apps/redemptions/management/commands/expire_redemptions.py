"""
Expire redemption codes left unverified from earlier months.

Usage:
    python manage.py expire_redemptions

Meant to run from a scheduler shortly after the start of each month.
"""

from django.core.management.base import BaseCommand

from apps.redemptions.services import expire_stale_redemptions


class Command(BaseCommand):
    help = 'Mark issued redemptions from previous months as expired'

    def handle(self, *args, **options):
        count = expire_stale_redemptions()
        self.stdout.write(self.style.SUCCESS(f'Expired {count} redemption(s).'))
