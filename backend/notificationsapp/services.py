from typing import Any, Dict, Iterable, List, Optional

from django.contrib.auth import get_user_model
from django.db import transaction
from django.utils import timezone

from .models import Notification, NotificationPolicy
from .recipients import resolve_recipients
from .triggers import default_triggers


def get_or_create_policy(owner) -> NotificationPolicy:
    """Return the owner's policy, creating it with the default trigger set on first read."""
    policy, _ = NotificationPolicy.objects.get_or_create(
        owner=owner,
        defaults={"triggers": default_triggers()},
    )
    return policy


def replace_policy_triggers(owner, triggers: List[Dict[str, Any]]) -> NotificationPolicy:
    policy, created = NotificationPolicy.objects.get_or_create(owner=owner, defaults={"triggers": triggers})
    if not created:
        policy.triggers = triggers
        policy.save(update_fields=["triggers", "updated_at"])
    return policy


def create_notification(user, title, message, *, type="info", trigger_id=None, created_at=None) -> Notification:
    return Notification.objects.create(
        user=user,
        type=type,
        title=title,
        message=message,
        trigger_id=trigger_id,
        read=False,
        created_at=created_at or timezone.now(),
    )


def send_manual_notification(
    title: str,
    message: str,
    type: str = "info",
    recipients: Optional[Iterable[str]] = None,
) -> List[Notification]:
    """
    Operator-authored notification. Recipients are resolved like trigger
    recipients, but nothing is evaluated, rendered or de-duplicated.
    """
    User = get_user_model()
    active_users = list(User.objects.filter(is_active=True).order_by("date_joined"))
    targets = resolve_recipients(list(recipients) if recipients is not None else ["all"], active_users)

    now = timezone.now()
    with transaction.atomic():
        return [
            create_notification(user, title, message, type=type, created_at=now)
            for user in targets
        ]


def mark_all_read(user) -> int:
    return Notification.objects.filter(user=user, read=False).update(read=True)


def unread_count(user) -> int:
    return Notification.objects.filter(user=user, read=False).count()
