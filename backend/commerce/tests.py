from datetime import date
from decimal import Decimal

import pytest

from commerce.models import Order

pytestmark = pytest.mark.django_db


def make_order(**kw):
    data = dict(
        customer_name="Asha", address="12 MG Road", mobile_no="9800000000", item="Teak chair",
        quantity=2, order_date=date(2025, 1, 1), delivery_date=date(2025, 1, 15),
        total_amount=Decimal("12000"), advance_amount=Decimal("2000"),
    )
    data.update(kw)
    return Order.objects.create(**data)


def test_remaining_balance_set_on_create():
    order = make_order()
    order.refresh_from_db()
    assert order.remaining_balance == Decimal("10000")
    assert order.delivery_status == Order.DeliveryStatus.PENDING


def test_remaining_balance_follows_amount_changes():
    order = make_order()
    order.advance_amount = Decimal("12000")
    order.save(update_fields=["advance_amount"])
    order.refresh_from_db()
    assert order.remaining_balance == Decimal("0")


def test_unrelated_save_keeps_balance():
    order = make_order()
    Order.objects.filter(pk=order.pk).update(remaining_balance=Decimal("1"))
    fresh = Order.objects.get(pk=order.pk)
    fresh.delivery_status = Order.DeliveryStatus.DELIVERED
    fresh.save()
    fresh.refresh_from_db()
    assert fresh.remaining_balance == Decimal("1")


def test_newest_orders_first():
    make_order(customer_name="old", order_date=date(2024, 12, 1))
    make_order(customer_name="new", order_date=date(2025, 2, 1))
    assert [o.customer_name for o in Order.objects.all()] == ["new", "old"]
