from django.core.management.base import BaseCommand

from django_seller_onboarding.models import SellerProfile
from django_seller_onboarding.writer import StepCompletionWriter


class Command(BaseCommand):
    help = (
        "Sends sellers who completed an older onboarding version back through onboarding. "
        "Checks every completed profile when no user id is given."
    )

    def add_arguments(self, parser):
        parser.add_argument("user_ids", nargs="*", help="Primary keys of the users to check")

    def handle(self, *args, **options):
        writer = StepCompletionWriter()
        user_ids = options["user_ids"] or list(
            SellerProfile.objects.filter(onboarding_completed=True, onboarding_version__lt=writer.required_version)
            .order_by("pk")
            .values_list("user_id", flat=True)
        )

        reset = [user_id for user_id in user_ids if writer.check_and_force_version_update(user_id)]

        if options["verbosity"] >= 2:
            for user_id in reset:
                self.stdout.write(f"  - user {user_id}")
        self.stdout.write(
            self.style.SUCCESS(  # type: ignore[attr-defined]
                f"{len(reset)} of {len(user_ids)} seller(s) sent back through onboarding "
                f"(version {writer.required_version})"
            )
        )
