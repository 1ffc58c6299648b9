"""Tests for the seller type registry."""

from __future__ import annotations

import pytest

from django_seller_onboarding.exceptions import SellerTypeNotFound
from django_seller_onboarding.onboarding_steps import StepRegistry
from django_seller_onboarding.seller_types import (
    FALLBACK_SELLER_TYPE,
    SellerType,
    SellerTypeRegistry,
    get_all_steps,
    get_config,
    get_default_fields,
    get_optional_steps,
    get_required_steps,
    is_step_required,
)

BUILT_IN_SELLER_TYPES = [
    "individual",
    "business",
    "artist",
    "content_creator",
    "online_teacher",
    "musician",
    "photographer",
    "writer",
    "restaurant",
    "event_organizer",
    "service_provider",
    "other",
]


class TestSellerTypeRegistry:
    """Tests for the built-in seller type catalog."""

    def test_all_built_in_types_registered(self):
        """Test every built-in seller type is registered, in declaration order."""
        assert SellerTypeRegistry.slugs() == BUILT_IN_SELLER_TYPES

    def test_membership_by_slug_and_class(self):
        """Test `in` accepts slugs and registered classes."""
        restaurant = SellerTypeRegistry.get("restaurant")
        assert "restaurant" in SellerTypeRegistry
        assert restaurant in SellerTypeRegistry
        assert "florist" not in SellerTypeRegistry

    def test_strict_get_raises(self):
        """Test the strict lookup raises SellerTypeNotFound for unknown slugs."""
        with pytest.raises(SellerTypeNotFound) as exc_info:
            SellerTypeRegistry.get("florist")
        assert exc_info.value.seller_type == "florist"

    def test_choices_use_names(self):
        """Test choices are labelled with the seller type's name."""
        choices = dict(SellerTypeRegistry.get_choices())
        assert choices["individual"] == "Individual Seller"
        assert len(choices) == len(BUILT_IN_SELLER_TYPES)

    @pytest.mark.parametrize("slug", BUILT_IN_SELLER_TYPES)
    def test_required_steps_start_with_category(self, slug):
        """Test every seller type starts its onboarding with the category step."""
        assert get_required_steps(slug)[0] == "category"

    @pytest.mark.parametrize("slug", BUILT_IN_SELLER_TYPES)
    def test_required_and_optional_do_not_overlap(self, slug):
        """Test no step is both required and optional."""
        assert not set(get_required_steps(slug)) & set(get_optional_steps(slug))

    @pytest.mark.parametrize("slug", BUILT_IN_SELLER_TYPES)
    def test_referenced_steps_are_registered(self, slug):
        """Test every step a seller type references exists in the step registry."""
        for step_id in get_all_steps(slug):
            assert step_id in StepRegistry, f"{slug} references unknown step {step_id}"

    def test_subclass_with_slug_auto_registers(self):
        """Test defining a SellerType subclass with a slug registers it."""

        class Florist(SellerType):
            slug = "florist"
            name = "Florist"
            required_steps = ("category", "profile", "pricing", "payment")

        assert SellerTypeRegistry.get("florist") is Florist
        assert get_required_steps("florist") == ["category", "profile", "pricing", "payment"]

    def test_subclass_without_slug_is_not_registered(self):
        """Test intermediate base classes are skipped."""
        count = len(SellerTypeRegistry)

        class CraftSeller(SellerType):
            category = "product"

        assert len(SellerTypeRegistry) == count


class TestGetConfig:
    """Tests for the total seller type lookup."""

    def test_known_type(self):
        """Test a known slug returns its own definition."""
        assert get_config("musician").slug == "musician"

    @pytest.mark.parametrize("value", ["florist", "", None, "RESTAURANT"])
    def test_unknown_type_falls_back_to_other(self, value):
        """Test unknown, empty and missing types resolve to the fallback definition."""
        assert get_config(value).slug == FALLBACK_SELLER_TYPE

    def test_missing_fallback_raises(self):
        """Test the lookup fails loudly if the fallback itself was unregistered."""
        SellerTypeRegistry.unregister(FALLBACK_SELLER_TYPE)
        with pytest.raises(SellerTypeNotFound):
            get_config("florist")


class TestProjections:
    """Tests for the helpers derived from a seller type definition."""

    def test_get_all_steps(self):
        """Test all steps lists required steps before optional ones."""
        assert get_all_steps("individual") == ["category", "profile", "pricing", "payment", "verification"]

    def test_is_step_required(self):
        """Test required and optional steps are told apart."""
        assert is_step_required("restaurant", "menu_info")
        assert not is_step_required("restaurant", "hours")
        assert not is_step_required("restaurant", "portfolio")

    def test_musician_optional_steps(self):
        """Test musicians can add social media and upcoming shows."""
        assert get_optional_steps("musician") == ["social_media", "upcoming_shows"]

    def test_default_fields_are_copies(self):
        """Test mutating the returned defaults leaves the definition untouched."""
        fields = get_default_fields("individual")
        fields["business_name"] = "Changed"
        assert get_default_fields("individual")["business_name"] != "Changed"

    def test_default_fields_of_unknown_type(self):
        """Test unknown types get the fallback defaults."""
        assert get_default_fields("florist") == get_default_fields(FALLBACK_SELLER_TYPE)
