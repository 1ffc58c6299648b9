"""Pytest configuration for django_seller_onboarding tests."""

import os

import pytest


def pytest_configure(config):
    """Configure pytest to use test settings."""
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "tests.settings")


@pytest.fixture(autouse=True)
def _clean_onboarding_registries():
    """Prevent test-local SellerType and Step subclasses from polluting the registries."""
    from django_seller_onboarding.registry import onboarding_registries

    original_registries = list(onboarding_registries)
    original_definitions = {reg: dict(reg.definitions) for reg in onboarding_registries}
    yield
    onboarding_registries.clear()
    onboarding_registries.extend(original_registries)
    for reg, definitions in original_definitions.items():
        reg.definitions.clear()
        reg.definitions.update(definitions)
        reg.clear_cache()


@pytest.fixture
def seller_group(db):
    """Return the auth group that marks sellers."""
    from django.contrib.auth.models import Group

    group, _ = Group.objects.get_or_create(name="seller")
    return group


@pytest.fixture
def buyer(db):
    """Return a user without the seller role."""
    from django.contrib.auth import get_user_model

    return get_user_model().objects.create_user(username="buyer", password="pass")


@pytest.fixture
def seller(db, seller_group):
    """Return a user holding the seller role."""
    from django.contrib.auth import get_user_model

    user = get_user_model().objects.create_user(username="seller", password="pass")
    user.groups.add(seller_group)
    return user


@pytest.fixture
def make_profile():
    """Return a factory creating a SellerProfile for a user."""
    from django_seller_onboarding.models import SellerProfile

    def _make_profile(user, **fields):
        return SellerProfile.objects.create(user=user, **fields)

    return _make_profile


@pytest.fixture
def completed_profile(seller, make_profile):
    """Return a profile that finished onboarding as an individual seller at version 1."""
    return make_profile(
        seller,
        seller_type="individual",
        onboarding_completed=True,
        onboarding_version=1,
        completed_steps=["category", "profile", "pricing", "payment"],
        onboarding_data={"seller_type": "individual", "version": 1},
    )


@pytest.fixture
def make_subscription():
    """Return a factory creating an active SellerSubscription for a user."""
    from django_seller_onboarding.models import SellerSubscription

    def _make_subscription(user, plan="subscription_professional", status=SellerSubscription.Status.ACTIVE):
        return SellerSubscription.objects.create(seller=user, plan=plan, status=status)

    return _make_subscription


@pytest.fixture
def store():
    """Return the ORM-backed store."""
    from django_seller_onboarding.store import DjangoOnboardingStore

    return DjangoOnboardingStore()


@pytest.fixture
def failing_store(mocker, store):
    """Return a store whose reads raise OnboardingStoreError."""
    from django_seller_onboarding.exceptions import OnboardingStoreError

    error = OnboardingStoreError("database unavailable")
    mocker.patch.object(store, "get_profile", side_effect=error)
    mocker.patch.object(store, "get_active_subscription", side_effect=error)
    return store
