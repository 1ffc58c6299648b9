import logging
from typing import TYPE_CHECKING, Any

from django.core.exceptions import ValidationError
from django.core.validators import (
    BaseValidator,
    EmailValidator,
    MaxLengthValidator,
    MaxValueValidator,
    MinLengthValidator,
    MinValueValidator,
    RegexValidator,
    URLValidator,
)
from django.utils.deconstruct import deconstructible
from django.utils.translation import gettext_lazy as _

if TYPE_CHECKING:
    from .onboarding_steps import StepField

logger = logging.getLogger(__name__)

NUMERIC_FIELD_TYPES = {"number"}
TEXT_FIELD_TYPES = {"text", "textarea", "email", "phone", "url"}


@deconstructible
class SellerTypeValidator(BaseValidator):
    """Validates that a value is a registered seller type."""

    message = _("Unknown seller type `%(show_value)s`")
    code = "seller_type"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(None, message)

    def __call__(self, value: Any) -> None:
        from .seller_types import SellerTypeRegistry

        if value in (None, ""):
            return
        if not SellerTypeRegistry.is_valid(value):
            raise ValidationError(self.message, code=self.code, params={"show_value": value})


def get_field_validators(step_field: "StepField") -> list:
    """Return Django validators enforcing a step field's declared constraints."""
    validators: list = []
    if step_field.type in NUMERIC_FIELD_TYPES:
        if step_field.min is not None:
            validators.append(MinValueValidator(step_field.min))
        if step_field.max is not None:
            validators.append(MaxValueValidator(step_field.max))
    elif step_field.type in TEXT_FIELD_TYPES:
        if step_field.min is not None:
            validators.append(MinLengthValidator(step_field.min))
        if step_field.max is not None:
            validators.append(MaxLengthValidator(step_field.max))

    if step_field.type == "email":
        validators.append(EmailValidator())
    elif step_field.type == "url":
        validators.append(URLValidator())

    if step_field.pattern:
        validators.append(RegexValidator(step_field.pattern, message=step_field.message))
    return validators


def validate_field_value(step_field: "StepField", value: Any) -> list[str]:
    """Run a field's validators against a present value and return error messages."""
    if step_field.type in NUMERIC_FIELD_TYPES and isinstance(value, str):
        try:
            value = float(value)
        except ValueError:
            return [f"{step_field.label}: {_('Enter a number.')}"]

    errors = []
    for validator in get_field_validators(step_field):
        try:
            validator(value)
        except ValidationError as exc:
            errors.extend(f"{step_field.label}: {message}" for message in exc.messages)
        except TypeError:
            logger.debug("Skipping %s for field '%s': unsupported value %r", validator, step_field.id, value)
    return errors
