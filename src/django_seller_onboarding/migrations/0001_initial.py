import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models

import django_seller_onboarding.validators


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="SellerProfile",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "seller_type",
                    models.CharField(
                        blank=True,
                        default="",
                        max_length=50,
                        validators=[django_seller_onboarding.validators.SellerTypeValidator()],
                        verbose_name="seller type",
                    ),
                ),
                ("onboarding_completed", models.BooleanField(default=False, verbose_name="onboarding completed")),
                ("onboarding_version", models.PositiveIntegerField(default=0, verbose_name="onboarding version")),
                ("completed_steps", models.JSONField(blank=True, default=list, verbose_name="completed steps")),
                ("step_answers", models.JSONField(blank=True, default=dict, verbose_name="step answers")),
                ("onboarding_data", models.JSONField(blank=True, default=dict, verbose_name="onboarding data")),
                (
                    "category_specific_data",
                    models.JSONField(blank=True, default=dict, verbose_name="category specific data"),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
                (
                    "user",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="seller_profile",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="user",
                    ),
                ),
            ],
            options={
                "verbose_name": "seller profile",
                "verbose_name_plural": "seller profiles",
            },
        ),
        migrations.CreateModel(
            name="SellerSubscription",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "plan",
                    models.CharField(help_text="e.g. subscription_professional", max_length=100, verbose_name="plan"),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("active", "Active"),
                            ("pending", "Pending"),
                            ("cancelled", "Cancelled"),
                            ("expired", "Expired"),
                        ],
                        default="pending",
                        max_length=20,
                        verbose_name="status",
                    ),
                ),
                ("started_at", models.DateTimeField(default=django.utils.timezone.now, verbose_name="started at")),
                ("expires_at", models.DateTimeField(blank=True, null=True, verbose_name="expires at")),
                (
                    "seller",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="seller_subscriptions",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="seller",
                    ),
                ),
            ],
            options={
                "verbose_name": "seller subscription",
                "verbose_name_plural": "seller subscriptions",
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(("status", "active")),
                        fields=("seller",),
                        name="unique_active_subscription_per_seller",
                    )
                ],
            },
        ),
    ]
