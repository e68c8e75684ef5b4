from django.core.management.base import BaseCommand

from notificationsapp.scheduler import ScanScheduler


class Command(BaseCommand):
    help = "Run the trigger scan now and then every interval, in the foreground (for hosts without Celery beat)."

    def add_arguments(self, parser):
        parser.add_argument(
            "--interval", type=int, default=None,
            help="Seconds between scans (defaults to NOTIFICATIONS['SCAN_INTERVAL_SECONDS'])",
        )

    def handle(self, *args, **opts):
        scheduler = ScanScheduler(interval_seconds=opts.get("interval"))
        self.stdout.write(f"Notification scheduler started (checking every {scheduler.interval} seconds)")
        scheduler.start(daemon=False)
        try:
            scheduler.wait()
        except KeyboardInterrupt:
            scheduler.stop()
            self.stdout.write(self.style.SUCCESS("Notification scheduler stopped"))
