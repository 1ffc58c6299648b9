from django.conf import settings
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from .seller_types import SellerTypeRegistry
from .types import parse_plan
from .validators import SellerTypeValidator


class SellerProfile(models.Model):
    """Onboarding state of one seller.

    ``onboarding_completed`` is only ever set true by
    ``StepCompletionWriter.mark_onboarding_complete``.
    """

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="seller_profile",
        verbose_name=_("user"),
    )
    seller_type = models.CharField(
        _("seller type"),
        max_length=50,
        blank=True,
        default="",
        validators=[SellerTypeValidator()],
    )
    onboarding_completed = models.BooleanField(_("onboarding completed"), default=False)
    onboarding_version = models.PositiveIntegerField(_("onboarding version"), default=0)
    completed_steps = models.JSONField(_("completed steps"), default=list, blank=True)
    step_answers = models.JSONField(_("step answers"), default=dict, blank=True)
    onboarding_data = models.JSONField(_("onboarding data"), default=dict, blank=True)
    category_specific_data = models.JSONField(_("category specific data"), default=dict, blank=True)
    created_at = models.DateTimeField(_("created at"), auto_now_add=True)
    updated_at = models.DateTimeField(_("updated at"), auto_now=True)

    class Meta:
        verbose_name = _("seller profile")
        verbose_name_plural = _("seller profiles")

    def __str__(self) -> str:
        return f"SellerProfile({self.user_id}): {self.seller_type or 'unset'}"


class SellerSubscription(models.Model):
    """A seller's pricing plan. At most one row per seller is active."""

    class Status(models.TextChoices):
        ACTIVE = "active", _("Active")
        PENDING = "pending", _("Pending")
        CANCELLED = "cancelled", _("Cancelled")
        EXPIRED = "expired", _("Expired")

    seller = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="seller_subscriptions",
        verbose_name=_("seller"),
    )
    plan = models.CharField(_("plan"), max_length=100, help_text=_("e.g. subscription_professional"))
    status = models.CharField(_("status"), max_length=20, choices=Status.choices, default=Status.PENDING)
    started_at = models.DateTimeField(_("started at"), default=timezone.now)
    expires_at = models.DateTimeField(_("expires at"), null=True, blank=True)

    class Meta:
        verbose_name = _("seller subscription")
        verbose_name_plural = _("seller subscriptions")
        constraints = [
            models.UniqueConstraint(
                fields=["seller"],
                condition=models.Q(status="active"),
                name="unique_active_subscription_per_seller",
            ),
        ]

    def __str__(self) -> str:
        return f"SellerSubscription({self.seller_id}): {self.plan} [{self.status}]"

    @property
    def pricing_model(self) -> str | None:
        return parse_plan(self.plan)[0]

    @property
    def current_plan(self) -> str | None:
        return parse_plan(self.plan)[1]


SellerTypeRegistry.choices_fields.append(("seller_type", SellerProfile))
