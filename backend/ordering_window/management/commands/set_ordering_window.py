from django.core.exceptions import ValidationError
from django.core.management.base import BaseCommand, CommandError

from ordering_window.services import OrderingWindowService


class Command(BaseCommand):
    help = "Set the daily ordering window (24-hour HH:MM times)"

    def add_arguments(self, parser):
        parser.add_argument("start", help="Window opening time, e.g. 08:00")
        parser.add_argument("end", help="Window closing time, e.g. 10:30")
        parser.add_argument(
            "--timezone",
            dest="tz_name",
            default=None,
            help="IANA timezone name the times are expressed in",
        )

    def handle(self, *args, **options):
        service = OrderingWindowService()
        try:
            window = service.set_window(
                options["start"], options["end"], tz_name=options["tz_name"]
            )
        except ValidationError as exc:
            raise CommandError("; ".join(exc.messages))

        self.stdout.write(
            self.style.SUCCESS(
                f"Ordering window set to {window.start_label}-{window.end_label} ({window.timezone})"
            )
        )
