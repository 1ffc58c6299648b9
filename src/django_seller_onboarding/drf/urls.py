from django.urls import path

from .views import CompleteOnboardingAPIView, CompleteStepAPIView, OnboardingStatusAPIView, OnboardingStepsAPIView

app_name = "seller_onboarding"

urlpatterns = [
    path("status/", OnboardingStatusAPIView.as_view(), name="status"),
    path("steps/", OnboardingStepsAPIView.as_view(), name="steps"),
    path("steps/<slug:step_id>/complete/", CompleteStepAPIView.as_view(), name="complete-step"),
    path("complete/", CompleteOnboardingAPIView.as_view(), name="complete"),
]
