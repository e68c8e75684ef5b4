from .base import *

DEBUG = False
SECRET_KEY = "test-secret"
SIMPLE_JWT["SIGNING_KEY"] = SECRET_KEY

DATABASES = {"default": {"ENGINE": "django.db.backends.sqlite3", "NAME": ":memory:"}}
CACHES = {"default": {"BACKEND": "django.core.cache.backends.locmem.LocMemCache", "LOCATION": "ordertrack-tests"}}
PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

REST_FRAMEWORK = {
    **REST_FRAMEWORK,
    "DEFAULT_RENDERER_CLASSES": ["rest_framework.renderers.JSONRenderer"],
    "DEFAULT_THROTTLE_CLASSES": [],
}

CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True
CELERY_BROKER_URL = "memory://"
NOTIFICATIONS_SCAN_ON_STARTUP = False

LOGGING["loggers"]["notificationsapp"]["level"] = "WARNING"
LOGGING["loggers"]["ordertrack.request"]["level"] = "WARNING"
