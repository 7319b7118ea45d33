# Generated manually for the initial challenge tables

import uuid
from django.conf import settings
from django.core.validators import MaxValueValidator
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('restaurants', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='ChallengeCycle',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('cycle_month', models.DateField(help_text='First day of the month')),
                ('status', models.CharField(choices=[('active', 'Active'), ('completed', 'Completed'), ('canceled', 'Canceled')], default='active', max_length=20)),
                ('swap_count_used', models.PositiveSmallIntegerField(default=0, validators=[MaxValueValidator(1)])),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='challenge_cycles', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'challenge_cycles',
                'ordering': ['-cycle_month'],
                'indexes': [models.Index(fields=['user', 'cycle_month'], name='chl_cycle_user_month_idx')],
                'constraints': [
                    models.UniqueConstraint(
                        condition=models.Q(status='active'),
                        fields=('user', 'cycle_month'),
                        name='unique_active_cycle_per_user_month',
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name='ChallengeItem',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('slot_number', models.PositiveSmallIntegerField()),
                ('status', models.CharField(choices=[('assigned', 'Assigned'), ('redeemed', 'Redeemed'), ('swapped_out', 'Swapped out')], default='assigned', max_length=20)),
                ('swapped_out_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('cycle', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='items', to='challenges.challengecycle')),
                ('restaurant', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='challenge_items', to='restaurants.restaurant')),
                ('swapped_from_item', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='replacements', to='challenges.challengeitem')),
            ],
            options={
                'db_table': 'challenge_items',
                'ordering': ['slot_number', 'created_at'],
                'indexes': [
                    models.Index(fields=['cycle', 'status'], name='chl_item_cycle_status_idx'),
                    models.Index(fields=['restaurant', 'status'], name='chl_item_rest_status_idx'),
                ],
            },
        ),
    ]
