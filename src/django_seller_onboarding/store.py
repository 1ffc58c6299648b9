"""Persistence of onboarding state.

The engine talks to storage only through the ``OnboardingStore`` protocol;
``DjangoOnboardingStore`` is the ORM-backed implementation used by default.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Protocol

from django.contrib.auth import get_user_model
from django.contrib.auth.models import Group
from django.db import DatabaseError, transaction

from .exceptions import OnboardingStoreError
from .models import SellerProfile, SellerSubscription

logger = logging.getLogger(__name__)


class OnboardingStore(Protocol):
    """What the resolver and writer need from storage.

    ``upsert_profile`` has partial-field semantics: fields not passed are left
    unchanged on an existing row.
    """

    def get_profile(self, user_id: Any) -> SellerProfile | None: ...

    def get_active_subscription(self, user_id: Any) -> SellerSubscription | None: ...

    def has_role(self, user_id: Any, role: str) -> bool: ...

    def upsert_profile(self, user_id: Any, **fields: Any) -> SellerProfile: ...

    def update_profile(self, user_id: Any, **fields: Any) -> int: ...

    def lock(self, user_id: Any): ...


class DjangoOnboardingStore:
    """ORM-backed store. Database errors surface as ``OnboardingStoreError``."""

    def get_profile(self, user_id: Any) -> SellerProfile | None:
        try:
            return SellerProfile.objects.filter(user_id=user_id).first()
        except DatabaseError as exc:
            raise OnboardingStoreError(f"Could not read seller profile for user {user_id}") from exc

    def get_active_subscription(self, user_id: Any) -> SellerSubscription | None:
        try:
            return (
                SellerSubscription.objects.filter(seller_id=user_id, status=SellerSubscription.Status.ACTIVE)
                .order_by("-started_at")
                .first()
            )
        except DatabaseError as exc:
            raise OnboardingStoreError(f"Could not read active subscription for user {user_id}") from exc

    def has_role(self, user_id: Any, role: str) -> bool:
        try:
            return Group.objects.filter(name=role, user__pk=user_id).exists()
        except DatabaseError as exc:
            raise OnboardingStoreError(f"Could not read roles for user {user_id}") from exc

    def upsert_profile(self, user_id: Any, **fields: Any) -> SellerProfile:
        try:
            profile, created = SellerProfile.objects.update_or_create(user_id=user_id, defaults=fields)
        except DatabaseError as exc:
            raise OnboardingStoreError(f"Could not save seller profile for user {user_id}") from exc
        logger.debug("%s seller profile for user %s: %s", "Created" if created else "Updated", user_id, sorted(fields))
        return profile

    def update_profile(self, user_id: Any, **fields: Any) -> int:
        """Update an existing profile only; returns the number of rows changed."""
        try:
            return SellerProfile.objects.filter(user_id=user_id).update(**fields)
        except DatabaseError as exc:
            raise OnboardingStoreError(f"Could not update seller profile for user {user_id}") from exc

    @contextmanager
    def lock(self, user_id: Any) -> Iterator[None]:
        """Serialize read-modify-write sequences on one user's profile.

        Holds a row lock on the user, which exists before the profile does, for
        the duration of the block. On databases without ``SELECT ... FOR UPDATE``
        the block is still atomic.
        """
        try:
            with transaction.atomic():
                list(get_user_model().objects.select_for_update().filter(pk=user_id).values_list("pk", flat=True))
                yield
        except DatabaseError as exc:
            raise OnboardingStoreError(f"Could not lock seller profile for user {user_id}") from exc
