import logging

from django.core.checks import Error, Warning, register

logger = logging.getLogger(__name__)


@register("django_seller_onboarding")
def check_onboarding_registries(app_configs, **kwargs):
    """Validate that seller types and steps refer to each other consistently."""
    from .app_settings import get_current_onboarding_version
    from .onboarding_steps import StepRegistry
    from .seller_types import SellerTypeRegistry

    errors = []
    referenced: set[str] = set()

    for slug, seller_type in SellerTypeRegistry.get_items():
        required = list(seller_type.required_steps)
        optional = list(seller_type.optional_steps)
        referenced.update(required, optional)

        for step_id in [*required, *optional]:
            if step_id not in StepRegistry:
                errors.append(
                    Error(
                        f"Seller type '{slug}' references unknown step '{step_id}'",
                        hint="Define a Step subclass with this slug or remove it from the seller type.",
                        obj=seller_type,
                        id="django_seller_onboarding.E001",
                    )
                )

        if not required or required[0] != "category":
            errors.append(
                Error(
                    f"Seller type '{slug}' does not start with the 'category' step",
                    hint="List 'category' first in required_steps.",
                    obj=seller_type,
                    id="django_seller_onboarding.E002",
                )
            )

        for step_id in sorted(set(required) & set(optional)):
            errors.append(
                Error(
                    f"Seller type '{slug}' lists step '{step_id}' as both required and optional",
                    obj=seller_type,
                    id="django_seller_onboarding.E003",
                )
            )

    version = get_current_onboarding_version()
    if isinstance(version, bool) or not isinstance(version, int) or version < 1:
        errors.append(
            Error(
                f"SELLER_ONBOARDING['CURRENT_VERSION'] must be a positive integer, got {version!r}",
                id="django_seller_onboarding.E004",
            )
        )

    for step_id in StepRegistry.slugs():
        if step_id not in referenced:
            errors.append(
                Warning(
                    f"Step '{step_id}' is not used by any seller type",
                    hint="Reference it from a seller type or remove the Step subclass.",
                    id="django_seller_onboarding.W001",
                )
            )

    if errors:
        logger.debug("Onboarding registry checks found %d problem(s)", len(errors))
    return errors
