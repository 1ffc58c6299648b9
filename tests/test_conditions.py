"""Tests for onboarding conditions."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from django_seller_onboarding.conditions import (
    ActivePricingPlanCondition,
    AllConditions,
    AnyCondition,
    CallableCondition,
    CompletedFlagCondition,
    HasSellerRoleCondition,
    NotCondition,
    VersionCurrentCondition,
    onboarding_complete,
    should_show_onboarding,
)


def make_context(*, seller=True, completed=False, version=0, required=1, subscription=False, profile=True):
    return {
        "has_seller_role": seller,
        "profile": SimpleNamespace(onboarding_completed=completed, onboarding_version=version) if profile else None,
        "subscription": SimpleNamespace(plan="subscription_basic") if subscription else None,
        "required_version": required,
    }


class TestLeafConditions:
    """Tests for the conditions over a single piece of state."""

    def test_has_seller_role(self):
        assert HasSellerRoleCondition().is_met(make_context(seller=True))
        assert not HasSellerRoleCondition().is_met(make_context(seller=False))

    def test_completed_flag(self):
        assert CompletedFlagCondition().is_met(make_context(completed=True))
        assert not CompletedFlagCondition().is_met(make_context(completed=False))
        assert not CompletedFlagCondition().is_met(make_context(profile=False))

    @pytest.mark.parametrize(
        ("version", "required", "expected"),
        [(1, 1, True), (2, 1, True), (1, 2, False), (0, 1, False)],
    )
    def test_version_current(self, version, required, expected):
        assert VersionCurrentCondition().is_met(make_context(version=version, required=required)) is expected

    def test_version_current_without_profile(self):
        """Test a missing profile counts as version 0."""
        assert not VersionCurrentCondition().is_met(make_context(profile=False, required=1))

    def test_active_pricing_plan(self):
        assert ActivePricingPlanCondition().is_met(make_context(subscription=True))
        assert not ActivePricingPlanCondition().is_met(make_context(subscription=False))


class TestComposition:
    """Tests for the &, | and ~ operators."""

    def test_operators_build_compound_conditions(self):
        condition = HasSellerRoleCondition() & ~CompletedFlagCondition() | ActivePricingPlanCondition()
        assert isinstance(condition, AnyCondition)
        assert isinstance(condition.conditions[0], AllConditions)
        assert isinstance(condition.conditions[0].conditions[1], NotCondition)

    def test_explain(self):
        condition = HasSellerRoleCondition() & ~ActivePricingPlanCondition()
        assert condition.explain() == "(HasSellerRole AND NOT(ActivePricingPlan))"

    def test_check_with_details(self):
        """Test the detailed check reports each branch."""
        result, explanation = onboarding_complete().check_with_details(make_context(completed=True, version=0))
        assert result is False
        assert "CompletedFlag -> passed" in explanation
        assert "VersionCurrent -> failed" in explanation

    def test_callable_condition(self):
        condition = CallableCondition(lambda context: context["required_version"] > 1)
        assert condition.is_met(make_context(required=2))
        assert not condition.is_met(make_context(required=1))
        assert condition.explain() == "Callable(<lambda>)"


class TestOnboardingGates:
    """Tests for the composed onboarding gates."""

    def test_complete_requires_flag_and_version(self):
        assert onboarding_complete().is_met(make_context(completed=True, version=1))
        assert not onboarding_complete().is_met(make_context(completed=True, version=0))
        assert not onboarding_complete().is_met(make_context(completed=False, version=1))

    def test_non_seller_never_sees_onboarding(self):
        assert not should_show_onboarding().is_met(make_context(seller=False))

    def test_new_seller_sees_onboarding(self):
        assert should_show_onboarding().is_met(make_context(profile=False))

    def test_complete_seller_does_not_see_onboarding(self):
        """Test completion closes the gate even without an active plan."""
        context = make_context(completed=True, version=1, subscription=False)
        assert not should_show_onboarding().is_met(context)

    @pytest.mark.parametrize(
        ("completed", "version", "subscription"),
        [
            (False, 1, True),  # flag not set
            (True, 0, True),  # version outdated
            (False, 0, False),  # nothing done
        ],
    )
    def test_any_open_reason_shows_onboarding(self, completed, version, subscription):
        context = make_context(completed=completed, version=version, subscription=subscription)
        assert should_show_onboarding().is_met(context)
