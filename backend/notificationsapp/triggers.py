from __future__ import annotations

from dataclasses import asdict, dataclass, field as dc_field
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Dict, List, Optional


class RecordType(str, Enum):
    ORDER = "order"
    CUSTOMER = "customer"
    STOCK = "stock"


# order and customer triggers both scan orders (the order carries the customer)
ORDER_RECORD_TYPES = (RecordType.ORDER, RecordType.CUSTOMER)


class Field(str, Enum):
    DELIVERY_IN_DAYS = "deliveryInDays"
    REMAINING_BALANCE = "remainingBalance"
    TOTAL_AMOUNT = "totalAmount"
    QUANTITY = "quantity"

    @classmethod
    def parse(cls, name: Optional[str]) -> Optional["Field"]:
        if not name:
            return None
        try:
            return cls(name)
        except ValueError:
            return FIELD_ALIASES.get(name)


FIELD_ALIASES = {
    "days-until-delivery": Field.DELIVERY_IN_DAYS,
    "daysUntilDelivery": Field.DELIVERY_IN_DAYS,
    "remaining-balance": Field.REMAINING_BALANCE,
    "total-amount": Field.TOTAL_AMOUNT,
}


class Operator(str, Enum):
    LTE = "<="
    LT = "<"
    GTE = ">="
    GT = ">"
    EQ = "==="
    NE = "!=="

    @classmethod
    def parse(cls, symbol: Optional[str]) -> Optional["Operator"]:
        if not symbol:
            return None
        symbol = OPERATOR_ALIASES.get(symbol, symbol)
        try:
            return cls(symbol)
        except ValueError:
            return None

    def compare(self, value, threshold) -> bool:
        if self is Operator.LTE:
            return value <= threshold
        if self is Operator.LT:
            return value < threshold
        if self is Operator.GTE:
            return value >= threshold
        if self is Operator.GT:
            return value > threshold
        if self is Operator.EQ:
            return value == threshold
        return value != threshold


OPERATOR_ALIASES = {"==": "===", "!=": "!==", "≤": "<=", "≥": ">=", "≠": "!=="}


class Severity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    SUCCESS = "success"


RESERVED_RECIPIENTS = ("all", "owner", "employees")


def to_decimal(value) -> Optional[Decimal]:
    """Exact decimal for comparisons; floats go through ``str`` so 0.1 stays 0.1."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value
    try:
        result = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    return None if result.is_nan() else result


@dataclass
class Trigger:
    """One configured rule inside a policy.

    ``field`` and ``operator`` are kept as the raw strings the owner saved, so
    an unsupported name survives a round trip and simply never matches.
    """

    id: str
    name: str
    field: str
    operator: str
    threshold: Any
    title_template: str
    message_template: str
    enabled: bool = True
    record_type: str = RecordType.ORDER.value
    severity: str = Severity.INFO.value
    recipients: List[str] = dc_field(default_factory=lambda: ["all"])

    @property
    def field_kind(self) -> Optional[Field]:
        return Field.parse(self.field)

    @property
    def operator_kind(self) -> Optional[Operator]:
        return Operator.parse(self.operator)

    @property
    def scans_orders(self) -> bool:
        return self.record_type in {t.value for t in ORDER_RECORD_TYPES}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Trigger":
        recipients = data.get("recipients")
        return cls(
            id=str(data.get("id") or ""),
            name=data.get("name") or "",
            enabled=bool(data.get("enabled", True)),
            record_type=data.get("record_type") or RecordType.ORDER.value,
            field=data.get("field") or "",
            operator=data.get("operator") or "",
            threshold=data.get("threshold"),
            severity=data.get("severity") or Severity.INFO.value,
            title_template=data.get("title_template") or "",
            message_template=data.get("message_template") or "",
            recipients=["all"] if recipients is None else [str(r) for r in recipients],
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Policy:
    owner_id: str
    triggers: List[Trigger] = dc_field(default_factory=list)

    def enabled_triggers(self) -> List[Trigger]:
        return [t for t in self.triggers if t.enabled]


def default_triggers() -> List[Dict[str, Any]]:
    return [
        {
            "id": "deliveryReminder2Days",
            "name": "Delivery Reminder",
            "enabled": True,
            "record_type": "order",
            "field": "deliveryInDays",
            "threshold": 2,
            "operator": "<=",
            "severity": "info",
            "title_template": "Upcoming Delivery",
            "message_template": "Order for {customerName} ({item}) is scheduled for delivery on {deliveryDate}. Contact: {mobileNo}",
            "recipients": ["all"],
        },
        {
            "id": "deliveryDeadline",
            "name": "Delivery Deadline Today",
            "enabled": True,
            "record_type": "order",
            "field": "deliveryInDays",
            "threshold": 0,
            "operator": "===",
            "severity": "warning",
            "title_template": "Delivery Due Today",
            "message_template": "Order for {customerName} ({item}, {quantity} units) must be delivered today. Address: {address}",
            "recipients": ["all"],
        },
        {
            "id": "deliveryOverdue",
            "name": "Delivery Overdue",
            "enabled": True,
            "record_type": "order",
            "field": "deliveryInDays",
            "threshold": 0,
            "operator": "<",
            "severity": "error",
            "title_template": "Delivery Overdue",
            "message_template": "Order for {customerName} ({item}) was due {days} day(s) ago. Immediate action required!",
            "recipients": ["all"],
        },
        {
            "id": "paymentPendingAfterDelivery",
            "name": "Payment Pending After Delivery",
            "enabled": True,
            "record_type": "order",
            "field": "remainingBalance",
            "threshold": 0,
            "operator": ">",
            "severity": "warning",
            "title_template": "Payment Pending",
            "message_template": "{customerName} has pending payment of ₹{remainingBalance} (Total: ₹{totalAmount}, Advance: ₹{advanceAmount}). Contact: {mobileNo}",
            "recipients": ["all"],
        },
        {
            "id": "highValueOrder",
            "name": "High Value Order",
            "enabled": True,
            "record_type": "order",
            "field": "totalAmount",
            "threshold": 50000,
            "operator": ">=",
            "severity": "success",
            "title_template": "High Value Order",
            "message_template": "New high-value order from {customerName} for ₹{totalAmount} ({item}, {quantity} units).",
            "recipients": ["all"],
        },
        {
            "id": "largeQuantityOrder",
            "name": "Large Quantity Order",
            "enabled": False,
            "record_type": "order",
            "field": "quantity",
            "threshold": 100,
            "operator": ">=",
            "severity": "info",
            "title_template": "Large Quantity Order",
            "message_template": "Order from {customerName} includes {quantity} units of {item}.",
            "recipients": ["all"],
        },
    ]
