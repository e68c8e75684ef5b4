import os

from celery import Celery
from celery.signals import worker_ready
from django.conf import settings

# Set the default Django settings module for the 'celery' program.
# This should match your project's settings path.
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "ordertrack_backend.settings.dev")

app = Celery("ordertrack_backend")

# Using a string here means the worker doesn't have to serialize
# the configuration object to child processes.
app.config_from_object("django.conf:settings", namespace="CELERY")

# Load task modules from all registered Django app configs.
app.autodiscover_tasks(lambda: settings.INSTALLED_APPS)


@worker_ready.connect
def scan_triggers_on_startup(sender=None, **kwargs):
    # beat only fires after the first interval; scan once right away
    if getattr(settings, "NOTIFICATIONS_SCAN_ON_STARTUP", True):
        sender.app.send_task("notificationsapp.tasks.scan_notification_triggers")
