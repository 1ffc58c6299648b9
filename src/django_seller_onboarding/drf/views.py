from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from django.http import JsonResponse
from django.views.generic import View

from ..onboarding_steps import get_ordered_step_ids, get_step_config
from ..status import OnboardingStatusResolver
from ..writer import StepCompletionWriter
from .serializers import (
    CompletionSerializer,
    OnboardingStatusSerializer,
    StepDefinitionSerializer,
    StepSubmissionSerializer,
)

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from django.http import HttpRequest


def _load_json(request: HttpRequest) -> Any:
    if not request.body:
        return {}
    return json.loads(request.body)


class OnboardingAPIView(View):
    """Base view: every endpoint acts on the authenticated user."""

    def dispatch(self, request: HttpRequest, *args, **kwargs):
        user = getattr(request, "user", None)
        if user is None or not user.is_authenticated:
            return JsonResponse({"error": "Authentication required"}, status=401)
        return super().dispatch(request, *args, **kwargs)


class OnboardingStatusAPIView(OnboardingAPIView):
    def get(self, request: HttpRequest) -> JsonResponse:
        status = OnboardingStatusResolver().check_status(request.user.pk)
        return JsonResponse(OnboardingStatusSerializer(status).data)


class OnboardingStepsAPIView(OnboardingAPIView):
    """The steps the user should see next, with their form definitions."""

    def get(self, request: HttpRequest) -> JsonResponse:
        include_optional = request.GET.get("include_optional", "").lower() in ("1", "true", "yes")
        status = OnboardingStatusResolver().check_status(request.user.pk)
        step_ids = OnboardingStatusResolver.steps_for_user(status, include_optional=include_optional)
        steps = [get_step_config(step_id) for step_id in step_ids]
        return JsonResponse(
            {
                "seller_type": status.seller_type,
                "next_step": status.next_step,
                "steps": StepDefinitionSerializer(steps, many=True).data,
            }
        )


class CompleteStepAPIView(OnboardingAPIView):
    def post(self, request: HttpRequest, step_id: str) -> JsonResponse:
        try:
            payload = _load_json(request)
        except ValueError:
            return JsonResponse({"error": "Invalid JSON body"}, status=400)

        serializer = StepSubmissionSerializer(data=payload, context={"step_id": step_id})
        if not serializer.is_valid():
            status_code = 404 if "step_id" in serializer.errors else 400
            return JsonResponse({"valid": False, "errors": serializer.errors}, status=status_code)

        answers = serializer.validated_data["answers"]
        if not StepCompletionWriter().mark_step_completed(request.user.pk, step_id, answers):
            return JsonResponse({"error": "Could not save step"}, status=503)

        status = OnboardingStatusResolver().check_status(request.user.pk)
        return JsonResponse({"valid": True, "status": OnboardingStatusSerializer(status).data})


class CompleteOnboardingAPIView(OnboardingAPIView):
    def post(self, request: HttpRequest) -> JsonResponse:
        try:
            payload = _load_json(request)
        except ValueError:
            return JsonResponse({"error": "Invalid JSON body"}, status=400)

        serializer = CompletionSerializer(data=payload)
        if not serializer.is_valid():
            return JsonResponse({"completed": False, "errors": serializer.errors}, status=400)

        resolver = OnboardingStatusResolver()
        status = resolver.check_status(request.user.pk)
        seller_type = serializer.validated_data.get("seller_type") or status.seller_type
        if not seller_type:
            errors = {"seller_type": ["No seller type selected"]}
            return JsonResponse({"completed": False, "errors": errors}, status=400)

        if not StepCompletionWriter().mark_onboarding_complete(request.user.pk, seller_type):
            missing = [
                step_id for step_id in get_ordered_step_ids(seller_type) if step_id not in status.completed_steps
            ]
            if not missing:
                return JsonResponse({"error": "Could not complete onboarding"}, status=503)
            return JsonResponse({"completed": False, "missing_steps": missing}, status=409)

        status = resolver.check_status(request.user.pk)
        return JsonResponse({"completed": True, "status": OnboardingStatusSerializer(status).data})
