from django.conf import settings
from django.db import models
from django.utils import timezone
from common.models import BaseModel

from .triggers import Policy, Trigger


NOTIFICATION_TYPES = (
    ("info", "Info"),
    ("warning", "Warning"),
    ("error", "Error"),
    ("success", "Success"),
)


class NotificationPolicy(BaseModel):
    """
    One per owner account. ``triggers`` holds the ordered trigger list as JSON
    and is always replaced as a whole; triggers are not rows of their own.
    """
    owner = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="notification_policy")
    triggers = models.JSONField(default=list, blank=True)

    def __str__(self):
        return f"Policy<{self.owner_id}> ({len(self.triggers or [])} triggers)"

    def to_policy(self) -> Policy:
        return Policy(
            owner_id=str(self.owner_id),
            triggers=[Trigger.from_dict(t) for t in (self.triggers or []) if isinstance(t, dict)],
        )


class Notification(models.Model):
    """In-app notification for one user, created by a trigger scan or by hand."""
    id = models.BigAutoField(primary_key=True)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="notifications")
    type = models.CharField(max_length=16, choices=NOTIFICATION_TYPES, default="info")
    title = models.CharField(max_length=255)
    message = models.TextField()
    trigger_id = models.CharField(max_length=120, blank=True, null=True)  # null for manual notifications
    read = models.BooleanField(default=False)
    # not auto_now_add: scans stamp rows with their own clock
    created_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        ordering = ("-created_at",)
        indexes = [
            models.Index(fields=["user", "read", "-created_at"], name="notif_user_read_created_idx"),
            models.Index(fields=["user", "trigger_id", "title", "created_at"], name="notif_dedup_lookup_idx"),
        ]

    def __str__(self):
        return f"[{self.type}] {self.title}"

    def mark_read(self):
        if not self.read:
            self.read = True
            self.save(update_fields=["read"])
