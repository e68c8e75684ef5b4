from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, List, Optional

from django.contrib.auth import get_user_model

from .records import OrderRecord, UserRecord
from .triggers import Policy


@dataclass
class NotificationDraft:
    user_id: str
    type: str
    title: str
    message: str
    trigger_id: Optional[str]
    created_at: datetime


# --- Interfaces ---------------------------------------------------------------

class PolicyStore:
    def get_policy(self, owner_id: str) -> Optional[Policy]:
        raise NotImplementedError

    def save_policy(self, policy: Policy) -> Policy:
        raise NotImplementedError


class RecordProvider:
    def list_active_users(self) -> List[UserRecord]:
        raise NotImplementedError

    def list_orders(self) -> List[OrderRecord]:
        raise NotImplementedError


class NotificationSink:
    def exists(self, user_id: str, trigger_id: str, title: str, since: datetime) -> bool:
        raise NotImplementedError

    def create(self, draft: NotificationDraft) -> Any:
        raise NotImplementedError


# --- ORM-backed implementations -------------------------------------------------

class DjangoPolicyStore(PolicyStore):
    def get_policy(self, owner_id: str) -> Optional[Policy]:
        from .models import NotificationPolicy
        row = NotificationPolicy.objects.filter(owner_id=owner_id).first()
        return row.to_policy() if row else None

    def save_policy(self, policy: Policy) -> Policy:
        from .models import NotificationPolicy
        row, _ = NotificationPolicy.objects.update_or_create(
            owner_id=policy.owner_id,
            defaults={"triggers": [t.to_dict() for t in policy.triggers]},
        )
        return row.to_policy()


class DjangoRecordProvider(RecordProvider):
    def list_active_users(self) -> List[UserRecord]:
        User = get_user_model()
        rows = User.objects.filter(is_active=True).order_by("date_joined").values("id", "role", "email")
        return [UserRecord(id=str(r["id"]), role=r["role"], is_active=True, email=r["email"]) for r in rows]

    def list_orders(self) -> List[OrderRecord]:
        from commerce.models import Order
        return [
            OrderRecord(
                id=str(o.id),
                customer_name=o.customer_name,
                item=o.item,
                quantity=o.quantity,
                total_amount=o.total_amount,
                advance_amount=o.advance_amount,
                remaining_balance=o.remaining_balance,
                delivery_date=o.delivery_date,
                delivery_status=o.delivery_status,
                address=o.address,
                mobile_no=o.mobile_no,
            )
            for o in Order.objects.all()
        ]


class DjangoNotificationSink(NotificationSink):
    def exists(self, user_id: str, trigger_id: str, title: str, since: datetime) -> bool:
        from .models import Notification
        return Notification.objects.filter(
            user_id=user_id,
            trigger_id=trigger_id,
            title=title,
            created_at__gte=since,
        ).exists()

    def create(self, draft: NotificationDraft):
        from .models import Notification
        return Notification.objects.create(
            user_id=draft.user_id,
            type=draft.type,
            title=draft.title,
            message=draft.message,
            trigger_id=draft.trigger_id,
            read=False,
            created_at=draft.created_at,
        )
