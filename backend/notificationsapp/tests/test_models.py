from datetime import date, timedelta
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from django.core.cache import cache
from django.core.management import call_command
from django.utils import timezone

from commerce.models import Order
from notificationsapp.adapters import DjangoNotificationSink, DjangoPolicyStore, DjangoRecordProvider, NotificationDraft
from notificationsapp.engine import build_engine, run_scan_now
from notificationsapp.models import Notification, NotificationPolicy
from notificationsapp.services import get_or_create_policy, send_manual_notification
from notificationsapp.tasks import scan_notification_triggers
from notificationsapp.triggers import Policy, Trigger, default_triggers

pytestmark = pytest.mark.django_db

User = get_user_model()


@pytest.fixture(autouse=True)
def _clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def owner():
    return User.objects.create_user("owner@example.com", "pw", full_name="Meera", role="owner")


@pytest.fixture
def employee():
    return User.objects.create_user("staff@example.com", "pw", full_name="Ravi", role="employee")


def make_order(**kw):
    today = timezone.localdate()
    data = dict(
        customer_name="Asha", address="12 MG Road", mobile_no="9800000000",
        item="Teak chair", quantity=4, order_date=today - timedelta(days=7),
        delivery_date=today + timedelta(days=5), total_amount=Decimal("60000"),
        advance_amount=Decimal("10000"),
    )
    data.update(kw)
    return Order.objects.create(**data)


def test_default_policy_is_created_lazily(owner):
    assert not NotificationPolicy.objects.exists()
    policy = get_or_create_policy(owner)
    assert [t["id"] for t in policy.triggers] == [t["id"] for t in default_triggers()]
    assert get_or_create_policy(owner).pk == policy.pk


def test_default_triggers_shape():
    triggers = {t["id"]: t for t in default_triggers()}
    assert len(triggers) == 6
    assert triggers["largeQuantityOrder"]["enabled"] is False
    assert all(t["recipients"] == ["all"] for t in triggers.values())


def test_policy_store_round_trip(owner):
    store = DjangoPolicyStore()
    assert store.get_policy(str(owner.id)) is None
    trigger = Trigger.from_dict({"id": "t1", "name": "T", "field": "quantity", "operator": ">", "threshold": 1,
                                 "title_template": "x", "message_template": "y"})
    store.save_policy(Policy(owner_id=str(owner.id), triggers=[trigger]))
    loaded = store.get_policy(str(owner.id))
    assert loaded.triggers == [trigger]


def test_record_provider_snapshots(owner, employee):
    User.objects.create_user("gone@example.com", "pw", is_active=False)
    make_order()
    records = DjangoRecordProvider()
    assert [u.id for u in records.list_active_users()] == [str(owner.id), str(employee.id)]
    [order] = records.list_orders()
    assert order.remaining_balance == Decimal("50000")
    assert order.is_pending


def test_sink_window_lower_bound_is_inclusive(owner):
    sink = DjangoNotificationSink()
    at = timezone.now()
    sink.create(NotificationDraft(str(owner.id), "info", "Title", "Body", "t1", at))
    assert sink.exists(str(owner.id), "t1", "Title", since=at)
    assert not sink.exists(str(owner.id), "t1", "Title", since=at + timedelta(microseconds=1))
    assert not sink.exists(str(owner.id), "t2", "Title", since=at - timedelta(hours=1))


def test_full_scan_against_the_database(owner, employee):
    get_or_create_policy(owner)
    make_order()  # 60,000 -> high value order
    make_order(customer_name="Kiran", delivery_date=timezone.localdate(), total_amount=Decimal("900"),
               advance_amount=Decimal("0"))

    ok, report = run_scan_now()

    assert ok
    titles = sorted(Notification.objects.filter(user=employee).values_list("title", flat=True))
    assert titles == ["Delivery Due Today", "High Value Order", "Upcoming Delivery"]
    high = Notification.objects.get(user=owner, trigger_id="highValueOrder")
    assert high.type == "success"
    assert high.message == "New high-value order from Asha for ₹60,000 (Teak chair, 4 units)."

    ok, second = run_scan_now()
    assert ok
    assert second.created == 0
    assert Notification.objects.count() == 6


def test_scan_after_window_creates_again(owner):
    get_or_create_policy(owner)
    make_order()
    start = timezone.now()
    build_engine(clock=lambda: start).run_scan()
    later = build_engine(clock=lambda: start + timedelta(hours=25)).run_scan()
    assert later.created == 1
    assert Notification.objects.filter(trigger_id="highValueOrder").count() == 2


def test_payment_pending_after_delivery(owner):
    get_or_create_policy(owner)
    make_order(total_amount=Decimal("1500"), advance_amount=Decimal("1000"), delivery_status="Delivered",
               delivery_date=date(2024, 12, 1))
    run_scan_now()
    n = Notification.objects.get(trigger_id="paymentPendingAfterDelivery")
    assert n.title == "Payment Pending"
    assert "₹500" in n.message and "Total: ₹1,500" in n.message


def test_manual_notification_bypasses_dedup(owner, employee):
    first = send_manual_notification("Stock take", "Count the warehouse", recipients=["employees"])
    second = send_manual_notification("Stock take", "Count the warehouse", recipients=["employees"])
    assert [n.user_id for n in first + second] == [employee.id, employee.id]
    assert all(n.trigger_id is None for n in first + second)


def test_celery_task_runs_the_same_pipeline(owner):
    get_or_create_policy(owner)
    make_order()
    result = scan_notification_triggers.delay().get()
    assert result["created"] == 1
    assert result["accounts_failed"] == []


def test_scan_triggers_command(owner, capsys):
    get_or_create_policy(owner)
    make_order()
    call_command("scan_triggers")
    out = capsys.readouterr().out
    assert "1 created" in out
    assert "Notification check completed" in out


def test_mark_read_only_touches_the_row(owner):
    n = Notification.objects.create(user=owner, title="t", message="m")
    n.mark_read()
    n.refresh_from_db()
    assert n.read
