import logging

from celery import shared_task

from .engine import run_scan_now

logger = logging.getLogger(__name__)


@shared_task(name="notificationsapp.tasks.scan_notification_triggers", ignore_result=False)
def scan_notification_triggers():
    """
    Hourly trigger scan (celery beat) and the one queued when a worker boots.
    Never retried: a failed run is simply picked up again on the next tick.
    """
    ok, report = run_scan_now()
    if not ok:
        logger.error("Trigger scan finished with failures: %s", report.as_dict())
    return report.as_dict()
