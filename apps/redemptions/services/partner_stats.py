"""Restaurant-side counters shown on the partner dashboard."""

from django.utils import timezone

from apps.challenges.periods import current_cycle_month, month_window
from apps.challenges.services.store import store_errors
from apps.redemptions.models import Redemption, RedemptionStatus


def get_partner_monthly_stats(*, restaurant_id, now=None) -> dict:
    """Verified redemptions at the restaurant since the start of this month."""
    month_start, _ = month_window(current_cycle_month(now or timezone.now()))
    with store_errors("Loading partner stats"):
        total = Redemption.objects.filter(
            restaurant_id=restaurant_id,
            status=RedemptionStatus.VERIFIED,
            verified_at__gte=month_start,
        ).count()
    return {'total_redemptions_this_month': total}
