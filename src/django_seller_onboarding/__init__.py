from django_seller_onboarding.conditions import (
    ActivePricingPlanCondition,
    AllConditions,
    AnyCondition,
    CallableCondition,
    CompletedFlagCondition,
    Condition,
    HasSellerRoleCondition,
    NotCondition,
    VersionCurrentCondition,
    onboarding_complete,
    should_show_onboarding,
)
from django_seller_onboarding.exceptions import OnboardingStoreError, SellerTypeNotFound, StepNotFound
from django_seller_onboarding.interfaces import Definition
from django_seller_onboarding.onboarding_steps import (
    Step,
    StepField,
    StepRegistry,
    get_ordered_step_ids,
    get_ordered_steps,
    get_step_config,
    validate_step,
)
from django_seller_onboarding.registry import Registry, discover_registries, onboarding_registries, register
from django_seller_onboarding.seller_types import (
    SellerType,
    SellerTypeRegistry,
    get_all_steps,
    get_config,
    get_default_fields,
    get_optional_steps,
    get_required_steps,
    is_step_required,
)
from django_seller_onboarding.types import (
    LoginRedirect,
    OnboardingData,
    OnboardingStatus,
    PricingModel,
    StepAnswers,
    ValidationResult,
)

__all__ = [
    # Registries
    "Registry",
    "SellerTypeRegistry",
    "StepRegistry",
    # Definitions
    "Definition",
    "SellerType",
    "Step",
    "StepField",
    # Conditions
    "Condition",
    "AllConditions",
    "AnyCondition",
    "NotCondition",
    "CallableCondition",
    "HasSellerRoleCondition",
    "CompletedFlagCondition",
    "VersionCurrentCondition",
    "ActivePricingPlanCondition",
    "onboarding_complete",
    "should_show_onboarding",
    # Value types
    "LoginRedirect",
    "OnboardingData",
    "OnboardingStatus",
    "PricingModel",
    "StepAnswers",
    "ValidationResult",
    # Exceptions
    "StepNotFound",
    "SellerTypeNotFound",
    "OnboardingStoreError",
    # Functions
    "discover_registries",
    "register",
    "get_config",
    "get_required_steps",
    "get_optional_steps",
    "get_all_steps",
    "is_step_required",
    "get_default_fields",
    "get_step_config",
    "get_ordered_steps",
    "get_ordered_step_ids",
    "validate_step",
    # Registry tracking
    "onboarding_registries",
]
