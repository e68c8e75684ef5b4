import json
import sys

from django.core.management.base import BaseCommand

from notificationsapp.engine import run_scan_now


class Command(BaseCommand):
    help = "Run the notification trigger scan once, right now (same pipeline as the hourly run)."

    def add_arguments(self, parser):
        parser.add_argument(
            "--json", action="store_true", help="Output the scan report as JSON"
        )

    def handle(self, *args, **opts):
        ok, report = run_scan_now()
        data = report.as_dict()

        if opts.get("json"):
            self.stdout.write(json.dumps(data, indent=2))
        elif report.skipped:
            self.stdout.write(self.style.WARNING("Another scan is running; nothing done."))
        else:
            self.stdout.write(
                f"Scanned {data['accounts_scanned']} account(s): "
                f"{data['created']} created, {data['suppressed']} suppressed\n"
            )
            for owner_id in data["accounts_failed"]:
                self.stdout.write(self.style.ERROR(f"Error processing account {owner_id}"))

        if ok:
            self.stdout.write(self.style.SUCCESS("Notification check completed"))
        else:
            self.stdout.write(self.style.ERROR("Notification check finished with failures"))
            sys.exit(1)
