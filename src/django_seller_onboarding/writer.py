"""Write side of onboarding.

Every operation returns ``True`` or ``False``; storage failures are logged and
reported as ``False``. ``StepCompletionWriter.mark_onboarding_complete`` is the
only code path that sets ``SellerProfile.onboarding_completed`` to true.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from django.utils import timezone

from .app_settings import get_current_onboarding_version
from .exceptions import OnboardingStoreError
from .onboarding_steps import get_ordered_step_ids
from .signals import onboarding_completed, onboarding_reset, step_completed
from .sources import DEFAULT_SOURCES, SellerTypeSource, StepWrite, resolve_seller_type
from .status import get_default_store
from .types import OnboardingData

logger = logging.getLogger(__name__)

DEFAULT_RESET_REASON = "Manual reset"

STORE_ERRORS = (OnboardingStoreError, ValueError, TypeError)


class StepCompletionWriter:
    def __init__(
        self,
        store=None,
        required_version: int | None = None,
        sources: Sequence[SellerTypeSource] = DEFAULT_SOURCES,
    ):
        self.store = store if store is not None else get_default_store()
        self.required_version = (
            required_version if required_version is not None else get_current_onboarding_version()
        )
        self.sources = sources

    def _is_complete(self, profile) -> bool:
        return bool(
            profile is not None
            and profile.onboarding_completed
            and (profile.onboarding_version or 0) >= self.required_version
        )

    def _notify(self, signal, **kwargs: Any) -> None:
        """Send ``signal`` after a committed write; a failing receiver is logged, never raised."""
        for receiver, response in signal.send_robust(sender=self.__class__, **kwargs):
            if isinstance(response, Exception):
                logger.error(
                    "Receiver %r failed handling onboarding signal for user %s: %s",
                    receiver,
                    kwargs.get("user_id"),
                    response,
                    exc_info=response,
                )

    def mark_step_completed(self, user_id: Any, step_id: str, step_data: Mapping[str, Any] | None = None) -> bool:
        """Record ``step_id`` as completed and store its answers.

        Completing a step twice keeps one entry in ``completed_steps`` but
        overwrites the stored answers with the latest ``step_data``.
        """
        step_data = dict(step_data or {})
        try:
            with self.store.lock(user_id):
                profile = self.store.get_profile(user_id)
                data = OnboardingData.from_profile(profile)
                data.mark_completed(step_id)
                data.set_answers(step_id, step_data)

                seller_type = resolve_seller_type(
                    StepWrite(step_id=step_id, step_data=step_data, stored=data, profile=profile),
                    self.sources,
                )
                fields: dict[str, Any] = {
                    "completed_steps": list(data.completed_steps),
                    "step_answers": data.answers_as_json(),
                }
                if seller_type:
                    data.seller_type = seller_type
                    fields["seller_type"] = seller_type
                fields["onboarding_data"] = data.bookkeeping_as_json()
                if not self._is_complete(profile):
                    fields["onboarding_completed"] = False

                self.store.upsert_profile(user_id, **fields)
        except STORE_ERRORS:
            logger.exception("Error marking step '%s' completed for user %s", step_id, user_id)
            return False

        logger.debug("Step '%s' completed for user %s", step_id, user_id)
        self._notify(step_completed, user_id=user_id, step_id=step_id, seller_type=seller_type)
        return True

    def mark_onboarding_complete(
        self, user_id: Any, seller_type: str, onboarding_data: OnboardingData | None = None
    ) -> bool:
        """Set the completion flag once every required step of ``seller_type`` is done.

        Without ``onboarding_data`` the stored progress is checked. A refused
        completion writes nothing.
        """
        try:
            with self.store.lock(user_id):
                data = onboarding_data
                if data is None:
                    data = OnboardingData.from_profile(self.store.get_profile(user_id))

                missing = data.missing_steps(get_ordered_step_ids(seller_type))
                if missing:
                    logger.warning(
                        "Cannot mark onboarding complete for user %s: required steps not completed: %s",
                        user_id,
                        ", ".join(missing),
                    )
                    return False

                bookkeeping = data.bookkeeping_as_json()
                bookkeeping.update(
                    seller_type=seller_type,
                    completed_at=timezone.now().isoformat(),
                    version=self.required_version,
                )
                self.store.upsert_profile(
                    user_id,
                    seller_type=seller_type,
                    onboarding_completed=True,
                    onboarding_version=self.required_version,
                    completed_steps=list(data.completed_steps),
                    step_answers=data.answers_as_json(),
                    onboarding_data=bookkeeping,
                    category_specific_data=dict(data.category_specific_data),
                )
        except STORE_ERRORS:
            logger.exception("Error marking onboarding complete for user %s", user_id)
            return False

        logger.info("Onboarding marked as complete for user %s (version %s)", user_id, self.required_version)
        self._notify(onboarding_completed, user_id=user_id, seller_type=seller_type, version=self.required_version)
        return True

    def reset_onboarding(self, user_id: Any, reason: str | None = None) -> bool:
        """Send a seller back through onboarding.

        Completed steps and answers are discarded; ``onboarding_data`` keeps only
        the reset marker. The seller type column is left alone.
        """
        reason = reason or DEFAULT_RESET_REASON
        try:
            with self.store.lock(user_id):
                profile = self.store.get_profile(user_id)
                if profile is None:
                    logger.info("No seller profile to reset for user %s", user_id)
                    return False
                previous_steps = list(profile.completed_steps or [])
                now = timezone.now()
                self.store.update_profile(
                    user_id,
                    onboarding_completed=False,
                    completed_steps=[],
                    step_answers={},
                    onboarding_data={"reset_at": now.isoformat(), "reset_reason": reason},
                    updated_at=now,
                )
        except STORE_ERRORS:
            logger.exception("Error resetting onboarding for user %s", user_id)
            return False

        logger.info("Onboarding reset for user %s (%s); discarded steps: %s", user_id, reason, previous_steps)
        self._notify(onboarding_reset, user_id=user_id, reason=reason)
        return True

    def check_and_force_version_update(self, user_id: Any) -> bool:
        """Reset a completed profile whose onboarding version is behind the required one."""
        try:
            profile = self.store.get_profile(user_id)
        except OnboardingStoreError:
            logger.exception("Error reading seller profile for user %s", user_id)
            return False

        if profile is None or not profile.onboarding_completed:
            return False
        version = profile.onboarding_version or 0
        if version >= self.required_version:
            return False
        return self.reset_onboarding(user_id, reason=f"Version update: {version} -> {self.required_version}")


def mark_step_completed(user_id: Any, step_id: str, step_data: Mapping[str, Any] | None = None, store=None) -> bool:
    return StepCompletionWriter(store=store).mark_step_completed(user_id, step_id, step_data)


def mark_onboarding_complete(
    user_id: Any, seller_type: str, onboarding_data: OnboardingData | None = None, store=None
) -> bool:
    return StepCompletionWriter(store=store).mark_onboarding_complete(user_id, seller_type, onboarding_data)


def reset_onboarding(user_id: Any, reason: str | None = None, store=None) -> bool:
    return StepCompletionWriter(store=store).reset_onboarding(user_id, reason)


def check_and_force_version_update(user_id: Any, store=None) -> bool:
    return StepCompletionWriter(store=store).check_and_force_version_update(user_id)
