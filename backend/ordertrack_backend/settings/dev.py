# backend/ordertrack_backend/settings/dev.py
from .base import *

DEBUG = True

ALLOWED_HOSTS = ["*", "localhost", "127.0.0.1"]

# Local admin/dashboard dev servers
CORS_ALLOW_ALL_ORIGINS = False
CORS_ALLOWED_ORIGINS = [
    s.strip() for s in os.getenv(
        "CORS_ALLOWED_ORIGINS", "http://localhost:3000,http://localhost:5173"
    ).split(",") if s.strip()
]

DATABASES = {
    "default": {"ENGINE": "django.db.backends.sqlite3", "NAME": str(BASE_DIR / "db.sqlite3")}
}

# Run Celery tasks inline unless a broker is configured
CELERY_TASK_ALWAYS_EAGER = not os.getenv("CELERY_BROKER_URL")

LOGGING["loggers"]["notificationsapp"]["level"] = "DEBUG"
