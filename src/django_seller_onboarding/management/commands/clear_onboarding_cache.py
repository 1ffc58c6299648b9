from django.core.management.base import BaseCommand

from django_seller_onboarding.registry import Registry


class Command(BaseCommand):
    help = "Clears the cached choices of the seller type and step registries."

    def handle(self, *args, **options):
        Registry.clear_all_cache()
        self.stdout.write(self.style.SUCCESS("Onboarding registry caches cleared."))  # type: ignore[attr-defined]
