"""Tests for the step completion writer."""

from __future__ import annotations

from datetime import timedelta

import pytest
from django.utils import timezone

from django_seller_onboarding.exceptions import OnboardingStoreError
from django_seller_onboarding.models import SellerProfile
from django_seller_onboarding.signals import onboarding_completed, onboarding_reset, step_completed
from django_seller_onboarding.status import OnboardingStatusResolver, check_onboarding_status
from django_seller_onboarding.types import OnboardingData
from django_seller_onboarding.writer import (
    StepCompletionWriter,
    check_and_force_version_update,
    mark_onboarding_complete,
    mark_step_completed,
    reset_onboarding,
)

pytestmark = pytest.mark.django_db

INDIVIDUAL_STEPS = ["category", "profile", "pricing", "payment"]


def complete_steps(user, seller_type, steps):
    mark_step_completed(user.pk, "category", {"seller_type": seller_type})
    for step_id in steps:
        if step_id != "category":
            mark_step_completed(user.pk, step_id, {})


class TestMarkStepCompleted:
    """Tests for recording a completed step."""

    def test_creates_profile(self, seller):
        """Test the first step write creates the profile."""
        assert mark_step_completed(seller.pk, "category", {"seller_type": "restaurant"}) is True
        profile = SellerProfile.objects.get(user=seller)
        assert profile.completed_steps == ["category"]
        assert profile.seller_type == "restaurant"
        assert profile.onboarding_data["seller_type"] == "restaurant"
        assert profile.step_answers == {"category": {"seller_type": "restaurant"}}
        assert profile.onboarding_completed is False

    def test_idempotent_step_set(self, seller):
        """Test completing the same step twice records it once but keeps the latest answers."""
        mark_step_completed(seller.pk, "profile", {"business_name": "First"})
        mark_step_completed(seller.pk, "profile", {"business_name": "Second"})
        profile = SellerProfile.objects.get(user=seller)
        assert profile.completed_steps.count("profile") == 1
        assert profile.step_answers["profile"] == {"business_name": "Second"}

    def test_steps_accumulate_in_order(self, seller):
        complete_steps(seller, "individual", INDIVIDUAL_STEPS)
        assert SellerProfile.objects.get(user=seller).completed_steps == INDIVIDUAL_STEPS

    def test_answers_kept_apart_from_bookkeeping(self, seller):
        """Test an answer field named like bookkeeping does not clobber it."""
        mark_step_completed(seller.pk, "category", {"seller_type": "individual"})
        mark_step_completed(seller.pk, "profile", {"completed_steps": "oops"})
        profile = SellerProfile.objects.get(user=seller)
        assert profile.completed_steps == ["category", "profile"]
        assert profile.step_answers["profile"] == {"completed_steps": "oops"}

    def test_later_steps_keep_seller_type(self, seller):
        """Test steps without a seller type preserve the stored one."""
        mark_step_completed(seller.pk, "category", {"seller_type": "writer"})
        mark_step_completed(seller.pk, "writing_info", {"genres": ["poetry"]})
        profile = SellerProfile.objects.get(user=seller)
        assert profile.seller_type == "writer"
        assert profile.onboarding_data["seller_type"] == "writer"

    def test_seller_type_from_profile_row(self, seller, make_profile):
        """Test the profile column is the last seller type source."""
        make_profile(seller, seller_type="artist")
        mark_step_completed(seller.pk, "portfolio", {})
        profile = SellerProfile.objects.get(user=seller)
        assert profile.seller_type == "artist"
        assert profile.onboarding_data["seller_type"] == "artist"

    def test_step_data_overrides_stored_type(self, seller):
        """Test a seller type in any step's data wins over the stored one."""
        mark_step_completed(seller.pk, "category", {"seller_type": "writer"})
        mark_step_completed(seller.pk, "profile", {"seller_type": "artist"})
        assert SellerProfile.objects.get(user=seller).seller_type == "artist"

    def test_without_seller_type(self, seller):
        """Test a step write without any seller type leaves the column empty."""
        mark_step_completed(seller.pk, "profile", None)
        profile = SellerProfile.objects.get(user=seller)
        assert profile.seller_type == ""
        assert "seller_type" not in profile.onboarding_data
        assert profile.step_answers == {"profile": {}}

    def test_resets_flag_when_not_complete(self, seller, make_profile):
        """Test an intermediate write forces the flag false on an incomplete profile."""
        make_profile(seller, seller_type="individual", onboarding_completed=True, onboarding_version=0)
        mark_step_completed(seller.pk, "profile", {})
        assert SellerProfile.objects.get(user=seller).onboarding_completed is False

    def test_keeps_completion_of_complete_profile(self, completed_profile, seller):
        """Test a step write after completion does not undo it."""
        assert mark_step_completed(seller.pk, "verification", {"verification_document": "id.pdf"}) is True
        profile = SellerProfile.objects.get(user=seller)
        assert profile.onboarding_completed is True
        assert "verification" in profile.completed_steps
        assert check_onboarding_status(seller.pk).is_complete is True

    def test_sends_signal(self, seller, mocker):
        handler = mocker.Mock()
        step_completed.connect(handler)
        try:
            mark_step_completed(seller.pk, "category", {"seller_type": "business"})
        finally:
            step_completed.disconnect(handler)
        handler.assert_called_once()
        assert handler.call_args.kwargs["step_id"] == "category"
        assert handler.call_args.kwargs["seller_type"] == "business"

    def test_store_failure_returns_false(self, seller, store, mocker, caplog):
        """Test a failed write is logged and reported as False."""
        mocker.patch.object(store, "upsert_profile", side_effect=OnboardingStoreError("down"))
        handler = mocker.Mock()
        step_completed.connect(handler)
        try:
            assert StepCompletionWriter(store=store).mark_step_completed(seller.pk, "category", {}) is False
        finally:
            step_completed.disconnect(handler)
        handler.assert_not_called()
        assert "Error marking step 'category' completed" in caplog.text

    def test_malformed_row_returns_false(self, seller, make_profile):
        make_profile(seller, completed_steps="category")
        assert mark_step_completed(seller.pk, "profile", {}) is False

    def test_uses_store_lock(self, seller, store, mocker):
        """Test the read-modify-write runs under the per-user lock."""
        spy = mocker.spy(store, "lock")
        StepCompletionWriter(store=store).mark_step_completed(seller.pk, "category", {})
        spy.assert_called_once_with(seller.pk)


class TestMarkOnboardingComplete:
    """Tests for completing onboarding."""

    def test_success(self, seller):
        complete_steps(seller, "individual", INDIVIDUAL_STEPS)
        assert mark_onboarding_complete(seller.pk, "individual") is True

        profile = SellerProfile.objects.get(user=seller)
        assert profile.onboarding_completed is True
        assert profile.onboarding_version == 1
        assert profile.onboarding_data["version"] == 1
        assert "completed_at" in profile.onboarding_data
        assert profile.step_answers["category"] == {"seller_type": "individual"}
        assert check_onboarding_status(seller.pk).is_complete is True

    def test_with_explicit_data(self, seller):
        """Test completion from data passed by the caller."""
        data = OnboardingData(
            completed_steps=list(INDIVIDUAL_STEPS),
            category_specific_data={"craft": "beadwork"},
        )
        assert mark_onboarding_complete(seller.pk, "individual", data) is True
        profile = SellerProfile.objects.get(user=seller)
        assert profile.seller_type == "individual"
        assert profile.category_specific_data == {"craft": "beadwork"}

    def test_refused_when_steps_missing(self, seller, caplog):
        """Test completion is refused, logged and nothing is written."""
        complete_steps(seller, "individual", ["category", "profile", "pricing"])
        before = SellerProfile.objects.get(user=seller)

        assert mark_onboarding_complete(seller.pk, "individual") is False

        after = SellerProfile.objects.get(user=seller)
        assert after.onboarding_completed is False
        assert after.onboarding_data == before.onboarding_data
        assert after.updated_at == before.updated_at
        assert "required steps not completed: payment" in caplog.text

    def test_refused_without_profile(self, seller):
        assert mark_onboarding_complete(seller.pk, "individual") is False
        assert not SellerProfile.objects.filter(user=seller).exists()

    def test_refused_leaves_completed_flag_unchanged(self, completed_profile, seller):
        """Test a refused completion for a longer flow keeps an existing completion."""
        assert mark_onboarding_complete(seller.pk, "restaurant") is False
        assert SellerProfile.objects.get(user=seller).onboarding_completed is True

    def test_unknown_seller_type_uses_fallback_steps(self, seller):
        complete_steps(seller, "other", ["category", "profile", "pricing", "payment"])
        assert mark_onboarding_complete(seller.pk, "florist") is True

    def test_monotonic(self, seller, make_subscription):
        """Test completion survives later step writes and status reads until a reset."""
        complete_steps(seller, "individual", INDIVIDUAL_STEPS)
        mark_onboarding_complete(seller.pk, "individual")

        for step_id in ("verification", "profile", "category"):
            mark_step_completed(seller.pk, step_id, {"seller_type": "individual"})
            assert check_onboarding_status(seller.pk).is_complete is True

        reset_onboarding(seller.pk)
        assert check_onboarding_status(seller.pk).is_complete is False

    def test_uses_required_version(self, seller):
        complete_steps(seller, "individual", INDIVIDUAL_STEPS)
        StepCompletionWriter(required_version=4).mark_onboarding_complete(seller.pk, "individual")
        assert SellerProfile.objects.get(user=seller).onboarding_version == 4

    def test_sends_signal(self, seller, mocker):
        complete_steps(seller, "individual", INDIVIDUAL_STEPS)
        handler = mocker.Mock()
        onboarding_completed.connect(handler)
        try:
            mark_onboarding_complete(seller.pk, "individual")
        finally:
            onboarding_completed.disconnect(handler)
        handler.assert_called_once()
        assert handler.call_args.kwargs["version"] == 1

    def test_store_failure_returns_false(self, seller, store, mocker):
        mocker.patch.object(store, "get_profile", side_effect=OnboardingStoreError("down"))
        assert StepCompletionWriter(store=store).mark_onboarding_complete(seller.pk, "individual") is False


class TestResetOnboarding:
    """Tests for the administrative reset."""

    def test_reset(self, completed_profile, seller):
        assert reset_onboarding(seller.pk, reason="Fraud review") is True
        profile = SellerProfile.objects.get(user=seller)
        assert profile.onboarding_completed is False
        assert profile.completed_steps == []
        assert profile.step_answers == {}
        assert profile.onboarding_data["reset_reason"] == "Fraud review"
        assert "reset_at" in profile.onboarding_data
        assert profile.seller_type == "individual"

    def test_default_reason(self, completed_profile, seller):
        reset_onboarding(seller.pk)
        assert SellerProfile.objects.get(user=seller).onboarding_data["reset_reason"] == "Manual reset"

    def test_no_profile(self, seller):
        assert reset_onboarding(seller.pk) is False

    def test_status_after_reset(self, completed_profile, seller):
        """Test a reset seller resumes at the first required step."""
        reset_onboarding(seller.pk)
        status = check_onboarding_status(seller.pk)
        assert status.should_show_onboarding is True
        assert status.next_step == "category"

    def test_sends_signal(self, completed_profile, seller, mocker):
        handler = mocker.Mock()
        onboarding_reset.connect(handler)
        try:
            reset_onboarding(seller.pk, reason="Testing")
        finally:
            onboarding_reset.disconnect(handler)
        handler.assert_called_once()
        assert handler.call_args.kwargs["reason"] == "Testing"

    def test_touches_updated_at(self, completed_profile, seller):
        """Test the reset refreshes the modification time the admin sorts by."""
        stale = timezone.now() - timedelta(days=30)
        SellerProfile.objects.filter(pk=completed_profile.pk).update(updated_at=stale)
        reset_onboarding(seller.pk)
        assert SellerProfile.objects.get(pk=completed_profile.pk).updated_at > stale

    def test_store_failure_returns_false(self, completed_profile, seller, store, mocker):
        mocker.patch.object(store, "update_profile", side_effect=OnboardingStoreError("down"))
        assert StepCompletionWriter(store=store).reset_onboarding(seller.pk) is False
        assert SellerProfile.objects.get(user=seller).onboarding_completed is True


class TestCheckAndForceVersionUpdate:
    """Tests for version-driven resets."""

    def test_version_bump_resets(self, completed_profile, seller):
        """Test a completed profile behind the required version is sent back."""
        writer = StepCompletionWriter(required_version=2)
        assert writer.check_and_force_version_update(seller.pk) is True

        profile = SellerProfile.objects.get(user=seller)
        assert profile.onboarding_data["reset_reason"] == "Version update: 1 -> 2"
        assert OnboardingStatusResolver(required_version=2).check_status(seller.pk).is_complete is False

    def test_version_bump_from_settings(self, completed_profile, seller, settings):
        settings.SELLER_ONBOARDING = {"CURRENT_VERSION": 2}
        assert check_and_force_version_update(seller.pk) is True
        assert check_onboarding_status(seller.pk).is_complete is False

    def test_current_version_untouched(self, completed_profile, seller):
        assert check_and_force_version_update(seller.pk) is False
        assert SellerProfile.objects.get(user=seller).onboarding_completed is True

    def test_incomplete_profile_untouched(self, seller, make_profile):
        make_profile(seller, seller_type="individual", completed_steps=["category"])
        assert StepCompletionWriter(required_version=2).check_and_force_version_update(seller.pk) is False
        assert SellerProfile.objects.get(user=seller).completed_steps == ["category"]

    def test_no_profile(self, seller):
        assert StepCompletionWriter(required_version=2).check_and_force_version_update(seller.pk) is False

    def test_store_failure_returns_false(self, seller, failing_store):
        assert StepCompletionWriter(store=failing_store).check_and_force_version_update(seller.pk) is False


class TestFailingReceivers:
    """Tests for signal receivers that raise after a write."""

    @pytest.fixture
    def broken_receiver(self):
        connected = []

        def _connect(signal):
            def receiver(sender, **kwargs):
                raise RuntimeError("receiver exploded")

            signal.connect(receiver, weak=False)
            connected.append((signal, receiver))

        yield _connect
        for signal, receiver in connected:
            signal.disconnect(receiver)

    def test_step_completed(self, seller, broken_receiver):
        broken_receiver(step_completed)
        assert mark_step_completed(seller.pk, "category", {"seller_type": "writer"}) is True
        assert SellerProfile.objects.get(user=seller).completed_steps == ["category"]

    def test_onboarding_completed(self, seller, broken_receiver):
        complete_steps(seller, "individual", INDIVIDUAL_STEPS)
        broken_receiver(onboarding_completed)
        assert mark_onboarding_complete(seller.pk, "individual") is True
        assert SellerProfile.objects.get(user=seller).onboarding_completed is True

    def test_onboarding_reset(self, completed_profile, seller, broken_receiver):
        broken_receiver(onboarding_reset)
        assert reset_onboarding(seller.pk) is True

    def test_failure_logged(self, seller, broken_receiver, caplog):
        broken_receiver(step_completed)
        with caplog.at_level("ERROR", logger="django_seller_onboarding.writer"):
            mark_step_completed(seller.pk, "category", {"seller_type": "writer"})
        assert "receiver exploded" in caplog.text
