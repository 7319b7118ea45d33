from django.db import models
import uuid


class RedemptionStatus(models.TextChoices):
    ISSUED = 'issued', 'Issued'
    VERIFIED = 'verified', 'Verified'
    EXPIRED = 'expired', 'Expired'


class Redemption(models.Model):
    """
    Single-use token issued when a subscriber redeems a challenge item.

    A token moves issued -> verified exactly once (partner action) or
    issued -> expired. The row outlives its challenge item for history.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='redemptions'
    )
    restaurant = models.ForeignKey(
        'restaurants.Restaurant',
        on_delete=models.PROTECT,
        related_name='redemptions'
    )
    challenge_item = models.ForeignKey(
        'challenges.ChallengeItem',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='redemptions'
    )
    token = models.CharField(max_length=16, unique=True)
    status = models.CharField(
        max_length=20,
        choices=RedemptionStatus.choices,
        default=RedemptionStatus.ISSUED,
        db_index=True
    )
    verified_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        db_table = 'redemptions'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', 'status'], name='redemption_user_status_idx'),
            models.Index(fields=['restaurant', 'status', 'created_at'], name='redemption_rest_month_idx'),
        ]

    def __str__(self):
        return f"{self.token} ({self.status})"

    @property
    def effective_date(self):
        """When the visit counts as having happened."""
        return self.verified_at or self.created_at


class Badge(models.Model):
    """Achievement unlocked at a verified-redemption count."""

    slug = models.SlugField(max_length=50, primary_key=True)
    name = models.CharField(max_length=100)
    description = models.CharField(max_length=255, blank=True)
    icon = models.CharField(max_length=50, blank=True)
    threshold = models.PositiveIntegerField()

    class Meta:
        db_table = 'badges'
        ordering = ['threshold', 'slug']

    def __str__(self):
        return self.name


class UserBadge(models.Model):
    """Write-once award of a badge to a user."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='badges')
    badge = models.ForeignKey(Badge, on_delete=models.CASCADE, related_name='awards')
    awarded_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'user_badges'
        constraints = [
            models.UniqueConstraint(fields=['user', 'badge'], name='unique_user_badge'),
        ]

    def __str__(self):
        return f"{self.user} - {self.badge_id}"
