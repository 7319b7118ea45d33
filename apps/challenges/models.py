from django.core.validators import MaxValueValidator
from django.db import models
from django.db.models import Q
import uuid


MAX_SWAPS_PER_CYCLE = 1


class CycleStatus(models.TextChoices):
    ACTIVE = 'active', 'Active'
    COMPLETED = 'completed', 'Completed'
    CANCELED = 'canceled', 'Canceled'


class ItemStatus(models.TextChoices):
    ASSIGNED = 'assigned', 'Assigned'
    REDEEMED = 'redeemed', 'Redeemed'
    SWAPPED_OUT = 'swapped_out', 'Swapped out'


class ChallengeCycle(models.Model):
    """
    One subscriber's challenge for one calendar month.

    At most one active cycle may exist per (user, cycle_month); the partial
    unique constraint is what makes monthly generation idempotent.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='challenge_cycles'
    )
    cycle_month = models.DateField(help_text='First day of the month')
    status = models.CharField(
        max_length=20,
        choices=CycleStatus.choices,
        default=CycleStatus.ACTIVE
    )
    swap_count_used = models.PositiveSmallIntegerField(
        default=0,
        validators=[MaxValueValidator(MAX_SWAPS_PER_CYCLE)]
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'challenge_cycles'
        ordering = ['-cycle_month']
        constraints = [
            models.UniqueConstraint(
                fields=['user', 'cycle_month'],
                condition=Q(status='active'),
                name='unique_active_cycle_per_user_month'
            ),
        ]
        indexes = [
            models.Index(fields=['user', 'cycle_month'], name='chl_cycle_user_month_idx'),
        ]

    def __str__(self):
        return f"{self.user} - {self.cycle_month:%Y-%m}"

    @property
    def swaps_remaining(self):
        return max(MAX_SWAPS_PER_CYCLE - self.swap_count_used, 0)


class ChallengeItem(models.Model):
    """One restaurant slot within a cycle; a swap retires it and adds a replacement."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    cycle = models.ForeignKey(ChallengeCycle, on_delete=models.CASCADE, related_name='items')
    restaurant = models.ForeignKey(
        'restaurants.Restaurant',
        on_delete=models.PROTECT,
        related_name='challenge_items'
    )
    slot_number = models.PositiveSmallIntegerField()
    status = models.CharField(
        max_length=20,
        choices=ItemStatus.choices,
        default=ItemStatus.ASSIGNED
    )
    swapped_from_item = models.ForeignKey(
        'self',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='replacements'
    )
    swapped_out_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'challenge_items'
        ordering = ['slot_number', 'created_at']
        indexes = [
            models.Index(fields=['cycle', 'status'], name='chl_item_cycle_status_idx'),
            models.Index(fields=['restaurant', 'status'], name='chl_item_rest_status_idx'),
        ]

    def __str__(self):
        return f"Slot {self.slot_number}: {self.restaurant_id} ({self.status})"

    @property
    def is_current(self):
        return self.status != ItemStatus.SWAPPED_OUT
