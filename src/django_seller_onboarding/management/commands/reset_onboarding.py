from django.core.management.base import BaseCommand, CommandError

from django_seller_onboarding.writer import DEFAULT_RESET_REASON, StepCompletionWriter


class Command(BaseCommand):
    help = "Sends the given sellers back through onboarding."

    def add_arguments(self, parser):
        parser.add_argument("user_ids", nargs="+", help="Primary keys of the users to reset")
        parser.add_argument(
            "--reason",
            default=DEFAULT_RESET_REASON,
            help=f"Reason stored with the reset marker (default: {DEFAULT_RESET_REASON!r})",
        )

    def handle(self, *args, **options):
        writer = StepCompletionWriter()
        failed = []

        for user_id in options["user_ids"]:
            if writer.reset_onboarding(user_id, reason=options["reason"]):
                self.stdout.write(self.style.SUCCESS(f"Reset onboarding for user {user_id}"))  # type: ignore[attr-defined]
            else:
                failed.append(user_id)
                self.stderr.write(self.style.WARNING(f"Could not reset onboarding for user {user_id}"))  # type: ignore[attr-defined]

        if failed and len(failed) == len(options["user_ids"]):
            raise CommandError("No seller profile was reset.")
