from django.apps import AppConfig

from .utils import is_running_migrations


class DjangoSellerOnboardingAppConfig(AppConfig):
    """Configuration for the django_seller_onboarding app."""

    default_auto_field = "django.db.models.BigAutoField"  # type: ignore[assignment]
    name = "django_seller_onboarding"
    verbose_name = "Seller Onboarding"

    def ready(self) -> None:
        """Discover seller types and steps contributed by installed apps, and refresh field choices."""

        if is_running_migrations():
            return

        # Import admin to register model admins, and checks to register system checks
        from django_seller_onboarding import admin, checks  # noqa: F401

        from .registry import discover_registries, update_choices_fields

        discover_registries()
        update_choices_fields()
