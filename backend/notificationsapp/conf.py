from django.conf import settings

DEFAULTS = {
    "SCAN_INTERVAL_SECONDS": 3600,
    "DEDUP_WINDOW_HOURS": 24,
    "SCAN_LOCK_KEY": "notificationsapp:trigger-scan",
    "SCAN_LOCK_TIMEOUT": 900,
    # en-IN style grouping: 1,00,000
    "NUMBER_GROUPING": (3, 2, 0),
    "THOUSAND_SEPARATOR": ",",
    "DATE_FORMAT": "j/n/Y",
}


def notification_setting(name: str):
    overrides = getattr(settings, "NOTIFICATIONS", None) or {}
    if name in overrides:
        return overrides[name]
    return DEFAULTS[name]
