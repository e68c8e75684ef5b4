"""
Plain snapshots of the rows a scan reads. Adapters build them from the ORM so
the evaluator and resolver stay free of database access.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

ROLE_OWNER = "owner"
ROLE_EMPLOYEE = "employee"

STATUS_PENDING = "Pending"
STATUS_DELIVERED = "Delivered"


@dataclass(frozen=True)
class UserRecord:
    id: str
    role: str
    is_active: bool = True
    email: Optional[str] = None

    @property
    def is_owner(self) -> bool:
        return self.role == ROLE_OWNER

    @property
    def is_employee(self) -> bool:
        return self.role == ROLE_EMPLOYEE


@dataclass(frozen=True)
class OrderRecord:
    id: str
    customer_name: str
    item: str
    quantity: int
    total_amount: Decimal
    advance_amount: Decimal
    remaining_balance: Decimal
    delivery_date: date
    delivery_status: str = STATUS_PENDING
    address: str = ""
    mobile_no: str = ""

    @property
    def is_pending(self) -> bool:
        return self.delivery_status == STATUS_PENDING

    @property
    def is_delivered(self) -> bool:
        return self.delivery_status == STATUS_DELIVERED

    def display_data(self) -> dict:
        return {
            "id": self.id,
            "customerName": self.customer_name,
            "item": self.item,
            "quantity": self.quantity,
            "totalAmount": self.total_amount,
            "advanceAmount": self.advance_amount,
            "remainingBalance": self.remaining_balance,
            "address": self.address,
            "mobileNo": self.mobile_no,
        }
