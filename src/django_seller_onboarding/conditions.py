"""Composable conditions over a seller's onboarding state.

Conditions are evaluated against a context dict built by the status resolver:

- ``has_seller_role``: bool
- ``profile``: the ``SellerProfile`` or ``None``
- ``subscription``: the active ``SellerSubscription`` or ``None``
- ``required_version``: int
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)


class Condition(ABC):
    """Base class for onboarding conditions."""

    @abstractmethod
    def is_met(self, context: dict[str, Any]) -> bool:
        """Check if the condition is met given the context."""

    def explain(self) -> str:
        """Return a human-readable description of this condition."""
        return f"{type(self).__name__}"

    def check_with_details(self, context: dict[str, Any]) -> tuple[bool, str]:
        """Check the condition and return (result, explanation).

        Useful for debugging why a seller is or is not sent to onboarding.
        """
        result = self.is_met(context)
        status = "passed" if result else "failed"
        explanation = f"{self.explain()} -> {status}"
        logger.debug("Condition check: %s", explanation)
        return result, explanation

    def __and__(self, other: "Condition") -> "CompoundCondition":
        return AllConditions([self, other])

    def __or__(self, other: "Condition") -> "CompoundCondition":
        return AnyCondition([self, other])

    def __invert__(self) -> "NotCondition":
        return NotCondition(self)


class CompoundCondition(Condition):
    """Base class for compound conditions."""

    def __init__(self, conditions: list[Condition]):
        self.conditions = conditions

    def is_met(self, context: dict[str, Any]) -> bool:
        raise NotImplementedError("Subclasses must implement this method.")


class AllConditions(CompoundCondition):
    """All conditions must be met."""

    def is_met(self, context: dict[str, Any]) -> bool:
        return all(cond.is_met(context) for cond in self.conditions)

    def explain(self) -> str:
        parts = " AND ".join(c.explain() for c in self.conditions)
        return f"({parts})"

    def check_with_details(self, context: dict[str, Any]) -> tuple[bool, str]:
        details = []
        all_met = True
        for cond in self.conditions:
            result, detail = cond.check_with_details(context)
            details.append(detail)
            if not result:
                all_met = False
        explanation = f"AllConditions({'passed' if all_met else 'failed'}): [{', '.join(details)}]"
        logger.debug("Condition check: %s", explanation)
        return all_met, explanation


class AnyCondition(CompoundCondition):
    """At least one condition must be met."""

    def is_met(self, context: dict[str, Any]) -> bool:
        return any(cond.is_met(context) for cond in self.conditions)

    def explain(self) -> str:
        parts = " OR ".join(c.explain() for c in self.conditions)
        return f"({parts})"

    def check_with_details(self, context: dict[str, Any]) -> tuple[bool, str]:
        details = []
        any_met = False
        for cond in self.conditions:
            result, detail = cond.check_with_details(context)
            details.append(detail)
            if result:
                any_met = True
        explanation = f"AnyCondition({'passed' if any_met else 'failed'}): [{', '.join(details)}]"
        logger.debug("Condition check: %s", explanation)
        return any_met, explanation


class NotCondition(Condition):
    """Negates a condition."""

    def __init__(self, condition: Condition):
        self.condition = condition

    def is_met(self, context: dict[str, Any]) -> bool:
        return not self.condition.is_met(context)

    def explain(self) -> str:
        return f"NOT({self.condition.explain()})"

    def check_with_details(self, context: dict[str, Any]) -> tuple[bool, str]:
        inner_result, inner_detail = self.condition.check_with_details(context)
        result = not inner_result
        explanation = f"NotCondition({'passed' if result else 'failed'}): [{inner_detail}]"
        logger.debug("Condition check: %s", explanation)
        return result, explanation


class CallableCondition(Condition):
    """Use a custom callable for condition checking."""

    def __init__(self, check_func: Callable[[dict[str, Any]], bool]):
        self.check_func = check_func

    def explain(self) -> str:
        name = getattr(self.check_func, "__name__", repr(self.check_func))
        return f"Callable({name})"

    def is_met(self, context: dict[str, Any]) -> bool:
        return self.check_func(context)


# --- Onboarding state conditions ---


class HasSellerRoleCondition(Condition):
    """The user holds the seller role."""

    def explain(self) -> str:
        return "HasSellerRole"

    def is_met(self, context: dict[str, Any]) -> bool:
        return bool(context.get("has_seller_role"))


class CompletedFlagCondition(Condition):
    """The profile's ``onboarding_completed`` flag is set."""

    def explain(self) -> str:
        return "CompletedFlag"

    def is_met(self, context: dict[str, Any]) -> bool:
        profile = context.get("profile")
        return bool(profile is not None and profile.onboarding_completed)


class VersionCurrentCondition(Condition):
    """The profile completed onboarding at the required version or later."""

    def explain(self) -> str:
        return "VersionCurrent"

    def is_met(self, context: dict[str, Any]) -> bool:
        profile = context.get("profile")
        version = (profile.onboarding_version or 0) if profile is not None else 0
        return version >= context.get("required_version", 0)


class ActivePricingPlanCondition(Condition):
    """The seller has an active subscription row."""

    def explain(self) -> str:
        return "ActivePricingPlan"

    def is_met(self, context: dict[str, Any]) -> bool:
        return context.get("subscription") is not None


def onboarding_complete() -> Condition:
    """Completed flag set at a current version: the one state that never re-triggers onboarding."""
    return CompletedFlagCondition() & VersionCurrentCondition()


def should_show_onboarding() -> Condition:
    """A seller sees onboarding unless it is complete; any of three open reasons reopens it."""
    reopen = ~ActivePricingPlanCondition() | ~VersionCurrentCondition() | ~CompletedFlagCondition()
    return HasSellerRoleCondition() & ~onboarding_complete() & reopen
