from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from django.db import models
from django.utils.translation import gettext_lazy as _

from .utils import unique

if TYPE_CHECKING:
    from .models import SellerProfile


class PricingModel(models.TextChoices):
    SUBSCRIPTION = "subscription", _("Subscription")
    PERCENTAGE = "percentage", _("Percentage")


def parse_plan(plan: str | None) -> tuple[str | None, str | None]:
    """Split a stored plan string such as ``"subscription_professional"`` into model and plan.

    Plans without a known ``subscription_`` or ``percentage_`` prefix yield ``(None, None)``.
    """
    if not plan:
        return None, None
    for pricing_model in PricingModel.values:
        prefix = f"{pricing_model}_"
        if plan.startswith(prefix):
            return pricing_model, plan[len(prefix) :]
    return None, None


def _step_list(value: Any) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, (list, tuple)) or not all(isinstance(item, str) for item in value):
        raise ValueError(f"Expected a list of step ids, got {value!r}")
    return unique(value)


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    errors: list[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.valid


@dataclass(frozen=True)
class StepAnswers:
    """Answers submitted for one step, tagged with the step they belong to."""

    step_id: str
    values: dict[str, Any] = field(default_factory=dict)


@dataclass
class OnboardingData:
    """Progress of one seller through onboarding.

    ``completed_steps`` is kept apart from the per-step answers so that the
    bookkeeping never mixes with what the seller typed in.
    """

    completed_steps: list[str] = field(default_factory=list)
    answers: dict[str, StepAnswers] = field(default_factory=dict)
    seller_type: str | None = None
    category_specific_data: dict[str, Any] = field(default_factory=dict)
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_profile(cls, profile: SellerProfile | None) -> OnboardingData:
        """Build from a stored profile; a missing profile gives empty data.

        Raises ``ValueError`` or ``TypeError`` if the stored columns are malformed.
        """
        if profile is None:
            return cls()
        raw_answers = profile.step_answers or {}
        if not isinstance(raw_answers, dict):
            raise TypeError(f"Expected step answers to be an object, got {type(raw_answers).__name__}")
        extra = dict(profile.onboarding_data or {})
        return cls(
            completed_steps=_step_list(profile.completed_steps),
            answers={step_id: StepAnswers(step_id, dict(values or {})) for step_id, values in raw_answers.items()},
            seller_type=extra.get("seller_type") or None,
            category_specific_data=dict(profile.category_specific_data or {}),
            extra=extra,
        )

    def is_step_completed(self, step_id: str) -> bool:
        return step_id in self.completed_steps

    def mark_completed(self, step_id: str) -> None:
        if step_id not in self.completed_steps:
            self.completed_steps.append(step_id)

    def set_answers(self, step_id: str, values: dict[str, Any] | None) -> None:
        self.answers[step_id] = StepAnswers(step_id, dict(values or {}))

    def missing_steps(self, required_steps) -> list[str]:
        """Return the required steps not yet completed, in their given order."""
        return [step_id for step_id in required_steps if step_id not in self.completed_steps]

    def answers_as_json(self) -> dict[str, dict[str, Any]]:
        return {step_id: dict(answer.values) for step_id, answer in self.answers.items()}

    def bookkeeping_as_json(self) -> dict[str, Any]:
        data = dict(self.extra)
        if self.seller_type:
            data["seller_type"] = self.seller_type
        return data


@dataclass(frozen=True)
class OnboardingStatus:
    """Where a user stands in onboarding, recomputed on every query."""

    is_complete: bool
    seller_type: str | None
    has_active_pricing_plan: bool
    pricing_model: str | None
    current_plan: str | None
    completed_steps: list[str]
    required_steps: list[str]
    next_step: str | None
    should_show_onboarding: bool
    onboarding_version: int
    required_version: int

    @classmethod
    def degraded(cls, required_version: int) -> OnboardingStatus:
        """The status reported when the stored state cannot be read.

        Nothing is complete and nothing forces onboarding, so a seller with a
        working account is never trapped behind a failed read.
        """
        return cls(
            is_complete=False,
            seller_type=None,
            has_active_pricing_plan=False,
            pricing_model=None,
            current_plan=None,
            completed_steps=[],
            required_steps=[],
            next_step=None,
            should_show_onboarding=False,
            onboarding_version=0,
            required_version=required_version,
        )

    @property
    def is_version_current(self) -> bool:
        return self.onboarding_version >= self.required_version

    def to_dict(self) -> dict[str, Any]:
        return dataclasses.asdict(self)


@dataclass(frozen=True)
class LoginRedirect:
    should_redirect: bool
    redirect_path: str | None = None
