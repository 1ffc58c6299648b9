"""Where a step write takes the seller type from.

Sources are tried in order and the first one that yields a value wins, so the
category step can set the type while every later step only carries it forward.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .models import SellerProfile
    from .types import OnboardingData

logger = logging.getLogger(__name__)

SELLER_TYPE_KEY = "seller_type"


@dataclass(frozen=True)
class StepWrite:
    """Everything a source may look at while a step is being recorded."""

    step_id: str
    step_data: Mapping[str, Any]
    stored: OnboardingData
    profile: SellerProfile | None


class SellerTypeSource(ABC):
    name: str

    @abstractmethod
    def resolve(self, write: StepWrite) -> str | None:
        """Return a seller type, or ``None`` to defer to the next source."""


class CategoryStepSource(SellerTypeSource):
    name = "category_step"

    def resolve(self, write: StepWrite) -> str | None:
        if write.step_id == "category":
            return write.step_data.get(SELLER_TYPE_KEY) or None
        return None


class StepDataSource(SellerTypeSource):
    name = "step_data"

    def resolve(self, write: StepWrite) -> str | None:
        return write.step_data.get(SELLER_TYPE_KEY) or None


class StoredOnboardingDataSource(SellerTypeSource):
    name = "stored_onboarding_data"

    def resolve(self, write: StepWrite) -> str | None:
        return write.stored.seller_type or None


class ProfileRowSource(SellerTypeSource):
    name = "profile_row"

    def resolve(self, write: StepWrite) -> str | None:
        if write.profile is None:
            return None
        return write.profile.seller_type or None


DEFAULT_SOURCES: tuple[SellerTypeSource, ...] = (
    CategoryStepSource(),
    StepDataSource(),
    StoredOnboardingDataSource(),
    ProfileRowSource(),
)


def resolve_seller_type(write: StepWrite, sources: Sequence[SellerTypeSource] = DEFAULT_SOURCES) -> str | None:
    for source in sources:
        seller_type = source.resolve(write)
        if seller_type:
            logger.debug("Seller type '%s' for step '%s' taken from %s", seller_type, write.step_id, source.name)
            return seller_type
    return None
