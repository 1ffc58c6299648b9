import json
from textwrap import indent

from django.core.management.base import BaseCommand

from django_seller_onboarding.onboarding_steps import get_ordered_step_ids
from django_seller_onboarding.seller_types import SellerTypeRegistry


class Command(BaseCommand):
    help = "Lists all registered seller types with the steps they go through."

    def add_arguments(self, parser):
        parser.add_argument(
            "--format",
            choices=["text", "json"],
            default="text",
            help="Output format (default: text)",
        )

    def handle(self, *args, **kwargs):
        output_format = kwargs.get("format", "text")

        if not len(SellerTypeRegistry):
            if output_format == "json":
                self.stdout.write(json.dumps({"seller_types": []}))
            else:
                self.stdout.write(self.style.WARNING("No seller types have been registered."))  # type: ignore[attr-defined]
            return

        if output_format == "json":
            self._handle_json()
        else:
            self._handle_text()

    def _get_seller_type_data(self, slug, seller_type):
        return {
            "slug": slug,
            "name": SellerTypeRegistry.get_display_name(seller_type),
            "class": seller_type.__name__,
            "module": seller_type.__module__,
            "description": seller_type.description,
            "icon": seller_type.icon,
            "category": seller_type.category,
            "required_steps": get_ordered_step_ids(slug),
            "optional_steps": list(seller_type.optional_steps),
            "default_fields": sorted(seller_type.default_fields),
        }

    def _handle_json(self):
        seller_types = [self._get_seller_type_data(slug, klass) for slug, klass in SellerTypeRegistry.get_items()]
        self.stdout.write(json.dumps({"seller_types": seller_types}, indent=2))

    def _handle_text(self):
        for slug, klass in SellerTypeRegistry.get_items():
            data = self._get_seller_type_data(slug, klass)

            self.stdout.write(self.style.SUCCESS(f"{data['name']} ({data['slug']}) [{data['category']}]"))  # type: ignore[attr-defined]
            if data["description"]:
                self.stdout.write(indent(f"# {data['description']}", "  "))
            self.stdout.write(indent(f"Required: {' -> '.join(data['required_steps'])}", "  "))
            if data["optional_steps"]:
                self.stdout.write(indent(f"Optional: {', '.join(data['optional_steps'])}", "  "))
            if data["default_fields"]:
                self.stdout.write(indent(f"Default fields: {', '.join(data['default_fields'])}", "  "))
            self.stdout.write("")
