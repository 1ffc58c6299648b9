from __future__ import annotations

import logging
from typing import Any

from rest_framework import serializers

from ..exceptions import StepNotFound
from ..onboarding_steps import validate_step
from ..seller_types import SellerTypeRegistry

logger = logging.getLogger(__name__)


class StepFieldSerializer(serializers.Serializer):
    id = serializers.CharField()
    label = serializers.CharField()
    type = serializers.CharField()
    required = serializers.BooleanField()
    placeholder = serializers.CharField()
    options = serializers.SerializerMethodField()
    min = serializers.IntegerField(allow_null=True)
    max = serializers.IntegerField(allow_null=True)
    pattern = serializers.CharField(allow_null=True)
    help_text = serializers.CharField()

    def get_options(self, obj) -> list[dict[str, str]]:
        return [{"value": value, "label": label} for value, label in obj.options]


class StepDefinitionSerializer(serializers.Serializer):
    """Read-only shape of a ``Step`` class."""

    id = serializers.CharField(source="slug")
    title = serializers.CharField()
    description = serializers.CharField()
    component = serializers.CharField()
    order = serializers.IntegerField()
    can_skip = serializers.BooleanField()
    form_fields = StepFieldSerializer(source="fields", many=True)


class OnboardingStatusSerializer(serializers.Serializer):
    is_complete = serializers.BooleanField()
    seller_type = serializers.CharField(allow_null=True)
    has_active_pricing_plan = serializers.BooleanField()
    pricing_model = serializers.CharField(allow_null=True)
    current_plan = serializers.CharField(allow_null=True)
    completed_steps = serializers.ListField(child=serializers.CharField())
    required_steps = serializers.ListField(child=serializers.CharField())
    next_step = serializers.CharField(allow_null=True)
    should_show_onboarding = serializers.BooleanField()
    onboarding_version = serializers.IntegerField()
    required_version = serializers.IntegerField()


class StepSubmissionSerializer(serializers.Serializer):
    """Answers for one step. The step id is passed in the serializer context."""

    answers = serializers.DictField(required=False, default=dict)

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:
        step_id = self.context["step_id"]
        try:
            result = validate_step(step_id, attrs["answers"])
        except StepNotFound as exc:
            raise serializers.ValidationError({"step_id": str(exc)}) from exc
        if not result.valid:
            raise serializers.ValidationError({"answers": result.errors})
        return attrs


class CompletionSerializer(serializers.Serializer):
    seller_type = serializers.ChoiceField(choices=(), required=False)

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.fields["seller_type"].choices = SellerTypeRegistry.get_choices()
