"""Tests for the app configuration."""

from django.apps import apps

from django_seller_onboarding.apps import DjangoSellerOnboardingAppConfig


class TestAppConfig:
    """Tests for DjangoSellerOnboardingAppConfig."""

    def test_installed(self):
        config = apps.get_app_config("django_seller_onboarding")
        assert isinstance(config, DjangoSellerOnboardingAppConfig)
        assert config.verbose_name == "Seller Onboarding"

    def test_ready_discovers_and_updates_choices(self, mocker):
        discover = mocker.patch("django_seller_onboarding.registry.discover_registries")
        update = mocker.patch("django_seller_onboarding.registry.update_choices_fields")
        mocker.patch("django_seller_onboarding.apps.is_running_migrations", return_value=False)

        apps.get_app_config("django_seller_onboarding").ready()

        discover.assert_called_once_with()
        update.assert_called_once_with()

    def test_ready_skipped_during_migrations(self, mocker):
        discover = mocker.patch("django_seller_onboarding.registry.discover_registries")
        mocker.patch("django_seller_onboarding.apps.is_running_migrations", return_value=True)

        apps.get_app_config("django_seller_onboarding").ready()

        discover.assert_not_called()
