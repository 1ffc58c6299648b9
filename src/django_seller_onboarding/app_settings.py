"""Settings for the django-seller-onboarding package."""

import logging

from django.conf import settings

logger = logging.getLogger(__name__)


def _get_settings() -> dict:
    return getattr(settings, "SELLER_ONBOARDING", {})


def get_current_onboarding_version() -> int:
    """Return the onboarding version sellers must have completed, read from settings at call time."""
    return _get_settings().get("CURRENT_VERSION", 1)


def get_seller_role() -> str:
    """Return the name of the auth group that marks a user as a seller."""
    return _get_settings().get("SELLER_ROLE", "seller")


def get_onboarding_url() -> str:
    """Return the path sellers are redirected to when onboarding is required."""
    return _get_settings().get("ONBOARDING_URL", "/onboarding/")


def get_cache_timeout() -> int:
    """Return the cache timeout in seconds for registry choices."""
    return _get_settings().get("CACHE_TIMEOUT", 300)
