"""Read side of onboarding: where does a seller stand, and should they be sent back in?"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from .app_settings import get_current_onboarding_version, get_onboarding_url, get_seller_role
from .conditions import onboarding_complete, should_show_onboarding
from .exceptions import OnboardingStoreError
from .onboarding_steps import get_ordered_step_ids
from .seller_types import get_optional_steps
from .types import LoginRedirect, OnboardingData, OnboardingStatus, parse_plan

logger = logging.getLogger(__name__)


def get_default_store():
    from .store import DjangoOnboardingStore

    return DjangoOnboardingStore()


class OnboardingStatusResolver:
    """Computes ``OnboardingStatus`` from stored state. Never writes, never caches.

    ``required_version`` defaults to the ``CURRENT_VERSION`` setting at
    construction time; pass it explicitly to evaluate against another version.
    """

    def __init__(self, store=None, required_version: int | None = None):
        self.store = store if store is not None else get_default_store()
        self.required_version = (
            required_version if required_version is not None else get_current_onboarding_version()
        )

    def build_context(self, user_id: Any) -> dict[str, Any]:
        return {
            "has_seller_role": self.store.has_role(user_id, get_seller_role()),
            "profile": self.store.get_profile(user_id),
            "subscription": self.store.get_active_subscription(user_id),
            "required_version": self.required_version,
        }

    def check_status(self, user_id: Any) -> OnboardingStatus:
        try:
            context = self.build_context(user_id)
            return self._compose(context)
        except (OnboardingStoreError, ValueError, TypeError):
            logger.exception("Could not determine onboarding status for user %s", user_id)
            return OnboardingStatus.degraded(self.required_version)

    def _compose(self, context: dict[str, Any]) -> OnboardingStatus:
        profile = context["profile"]
        subscription = context["subscription"]
        data = OnboardingData.from_profile(profile)

        pricing_model, current_plan = parse_plan(subscription.plan if subscription is not None else None)
        seller_type = (profile.seller_type if profile is not None else "") or data.seller_type or None

        required_steps = get_ordered_step_ids(seller_type) if seller_type else []
        missing = data.missing_steps(required_steps)

        return OnboardingStatus(
            is_complete=onboarding_complete().is_met(context),
            seller_type=seller_type,
            has_active_pricing_plan=subscription is not None,
            pricing_model=pricing_model,
            current_plan=current_plan,
            completed_steps=list(data.completed_steps),
            required_steps=required_steps,
            next_step=missing[0] if missing else None,
            should_show_onboarding=should_show_onboarding().is_met(context),
            onboarding_version=(profile.onboarding_version or 0) if profile is not None else 0,
            required_version=self.required_version,
        )

    def should_redirect(self, user_id: Any) -> bool:
        status = self.check_status(user_id)
        if status.is_complete and status.is_version_current:
            return False
        return status.should_show_onboarding

    @staticmethod
    def steps_for_user(status: OnboardingStatus, include_optional: bool = False) -> list[str]:
        """Return the step ids a seller should be shown next, in order.

        Optional steps of the seller type that are not yet completed are
        appended when ``include_optional`` is true.
        """
        if not status.seller_type:
            return ["category"]

        completed = status.completed_steps
        required = status.required_steps
        incomplete = [step_id for step_id in required if step_id not in completed]

        if status.has_active_pricing_plan:
            if "pricing" in completed and "payment" in completed:
                steps = incomplete
            else:
                steps = incomplete or list(required)
        elif "category" in completed:
            steps = incomplete
        else:
            steps = list(required)

        if include_optional:
            steps += [
                step_id
                for step_id in get_optional_steps(status.seller_type)
                if step_id not in completed and step_id not in steps
            ]
        return steps

    def check_after_login(self, user_id: Any, roles: Iterable[str] | None) -> LoginRedirect:
        if roles is None or isinstance(roles, str):
            return LoginRedirect(should_redirect=False)
        if get_seller_role() not in set(roles):
            return LoginRedirect(should_redirect=False)
        if self.should_redirect(user_id):
            return LoginRedirect(should_redirect=True, redirect_path=get_onboarding_url())
        return LoginRedirect(should_redirect=False)


def check_onboarding_status(user_id: Any, store=None) -> OnboardingStatus:
    return OnboardingStatusResolver(store=store).check_status(user_id)


def should_redirect_to_onboarding(user_id: Any, store=None) -> bool:
    return OnboardingStatusResolver(store=store).should_redirect(user_id)


def get_onboarding_steps_for_user(status: OnboardingStatus, include_optional: bool = False) -> list[str]:
    return OnboardingStatusResolver.steps_for_user(status, include_optional=include_optional)


def check_onboarding_after_login(user_id: Any, roles: Iterable[str] | None, store=None) -> LoginRedirect:
    return OnboardingStatusResolver(store=store).check_after_login(user_id, roles)
