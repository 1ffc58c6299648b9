from __future__ import annotations

import logging

from django.contrib import admin, messages
from django.utils.translation import gettext as _
from django.utils.translation import ngettext

from .app_settings import get_current_onboarding_version
from .models import SellerProfile, SellerSubscription
from .seller_types import SellerTypeRegistry
from .writer import StepCompletionWriter

logger = logging.getLogger(__name__)


class SellerTypeListFilter(admin.SimpleListFilter):
    """Filter profiles by seller type, labelled from the seller type registry."""

    title = _("seller type")
    parameter_name = "seller_type"

    def lookups(self, request, model_admin):
        return SellerTypeRegistry.get_choices()

    def queryset(self, request, queryset):
        if self.value():
            return queryset.filter(seller_type=self.value())
        return queryset


@admin.register(SellerProfile)
class SellerProfileAdmin(admin.ModelAdmin):
    list_display = (
        "user",
        "seller_type_name",
        "onboarding_completed",
        "onboarding_version",
        "step_count",
        "updated_at",
    )
    list_filter = (SellerTypeListFilter, "onboarding_completed", "onboarding_version")
    search_fields = ("user__username", "user__email")
    readonly_fields = ("created_at", "updated_at")
    actions = ("reset_onboarding", "force_version_update")

    @admin.display(description=_("seller type"), ordering="seller_type")
    def seller_type_name(self, obj: SellerProfile) -> str:
        if not obj.seller_type:
            return "-"
        seller_type = SellerTypeRegistry.get_or_default(obj.seller_type)
        return SellerTypeRegistry.get_display_name(seller_type) if seller_type else obj.seller_type

    @admin.display(description=_("completed steps"))
    def step_count(self, obj: SellerProfile) -> int:
        return len(obj.completed_steps or [])

    @admin.action(description=_("Reset onboarding"))
    def reset_onboarding(self, request, queryset):
        writer = StepCompletionWriter()
        reason = f"Reset from admin by {request.user}"
        count = sum(
            writer.reset_onboarding(user_id, reason=reason) for user_id in queryset.values_list("user_id", flat=True)
        )
        self.message_user(
            request,
            ngettext("Onboarding reset for %d seller.", "Onboarding reset for %d sellers.", count) % count,
            messages.SUCCESS,
        )

    @admin.action(description=_("Force version update"))
    def force_version_update(self, request, queryset):
        writer = StepCompletionWriter()
        count = sum(
            writer.check_and_force_version_update(user_id) for user_id in queryset.values_list("user_id", flat=True)
        )
        self.message_user(
            request,
            ngettext(
                "%(count)d seller sent back through onboarding (version %(version)d).",
                "%(count)d sellers sent back through onboarding (version %(version)d).",
                count,
            )
            % {"count": count, "version": get_current_onboarding_version()},
            messages.SUCCESS if count else messages.INFO,
        )


@admin.register(SellerSubscription)
class SellerSubscriptionAdmin(admin.ModelAdmin):
    list_display = ("seller", "plan", "pricing_model", "status", "started_at", "expires_at")
    list_filter = ("status",)
    search_fields = ("seller__username", "plan")
