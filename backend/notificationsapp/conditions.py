from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, Dict, Optional

from .records import OrderRecord
from .triggers import Field, Trigger, to_decimal


@dataclass
class Observation:
    value: Any
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass
class Evaluation:
    matches: bool
    template_data: Dict[str, Any]


Observer = Callable[[OrderRecord, date], Optional[Observation]]


def _observe_delivery_in_days(order: OrderRecord, today: date) -> Optional[Observation]:
    if not order.is_pending:
        return None
    days = (order.delivery_date - today).days
    return Observation(days, {"days": abs(days), "deliveryDate": order.delivery_date})


def _observe_remaining_balance(order: OrderRecord, today: date) -> Optional[Observation]:
    # payment chasing only starts once the goods are delivered
    if not order.is_delivered:
        return None
    return Observation(order.remaining_balance)


def _observe_total_amount(order: OrderRecord, today: date) -> Optional[Observation]:
    return Observation(order.total_amount)


def _observe_quantity(order: OrderRecord, today: date) -> Optional[Observation]:
    return Observation(order.quantity)


OBSERVERS: Dict[Field, Observer] = {
    Field.DELIVERY_IN_DAYS: _observe_delivery_in_days,
    Field.REMAINING_BALANCE: _observe_remaining_balance,
    Field.TOTAL_AMOUNT: _observe_total_amount,
    Field.QUANTITY: _observe_quantity,
}


def compare(value, operator, threshold) -> bool:
    """Exact comparison of ``value`` against ``threshold``; unknown operators never match."""
    left, right = to_decimal(value), to_decimal(threshold)
    if operator is None or left is None or right is None:
        return False
    return operator.compare(left, right)


def evaluate(trigger: Trigger, order: OrderRecord, today: date) -> Evaluation:
    data = order.display_data()
    kind = trigger.field_kind
    if kind is None:
        return Evaluation(False, data)

    observation = OBSERVERS[kind](order, today)
    if observation is None:
        return Evaluation(False, data)

    data.update(observation.extra)
    return Evaluation(compare(observation.value, trigger.operator_kind, trigger.threshold), data)
