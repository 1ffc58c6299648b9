"""Tests for the onboarding system checks."""

from __future__ import annotations

import pytest

from django_seller_onboarding.checks import check_onboarding_registries
from django_seller_onboarding.onboarding_steps import Step
from django_seller_onboarding.seller_types import SellerType


def check_ids(errors):
    return [error.id for error in errors]


class TestCheckOnboardingRegistries:
    """Tests for check_onboarding_registries."""

    def test_builtin_catalog_is_consistent(self):
        assert check_onboarding_registries(None) == []

    def test_unknown_step_reference(self):
        class Florist(SellerType):
            slug = "florist"
            required_steps = ("category", "bouquets")

        errors = check_onboarding_registries(None)
        assert check_ids(errors) == ["django_seller_onboarding.E001"]
        assert "'bouquets'" in errors[0].msg
        assert errors[0].obj is Florist

    def test_category_must_come_first(self):
        class Florist(SellerType):
            slug = "florist"
            required_steps = ("profile", "category", "payment")

        assert check_ids(check_onboarding_registries(None)) == ["django_seller_onboarding.E002"]

    def test_empty_required_steps(self):
        class Florist(SellerType):
            slug = "florist"

        assert check_ids(check_onboarding_registries(None)) == ["django_seller_onboarding.E002"]

    def test_required_and_optional_overlap(self):
        class Florist(SellerType):
            slug = "florist"
            required_steps = ("category", "profile", "payment")
            optional_steps = ("profile", "location")

        errors = check_onboarding_registries(None)
        assert check_ids(errors) == ["django_seller_onboarding.E003"]
        assert "'profile'" in errors[0].msg

    @pytest.mark.parametrize("version", [0, -1, "2", True, None])
    def test_invalid_version(self, settings, version):
        settings.SELLER_ONBOARDING = {"CURRENT_VERSION": version}
        assert check_ids(check_onboarding_registries(None)) == ["django_seller_onboarding.E004"]

    def test_orphan_step_warns(self):
        class ArrangementsStep(Step):
            slug = "arrangements"
            title = "Arrangements"

        errors = check_onboarding_registries(None)
        assert check_ids(errors) == ["django_seller_onboarding.W001"]
        assert "'arrangements'" in errors[0].msg
