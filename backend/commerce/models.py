from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _
from common.models import BaseModel


class Order(BaseModel):
    """
    A customer order. ``remaining_balance`` is derived from the two amounts and
    refreshed whenever either of them changes.
    """

    class DeliveryStatus(models.TextChoices):
        PENDING = "Pending", _("Pending")
        DELIVERED = "Delivered", _("Delivered")

    customer_name = models.CharField(max_length=160)
    address       = models.CharField(max_length=255)
    mobile_no     = models.CharField(max_length=32)
    item          = models.CharField(max_length=200)
    quantity      = models.PositiveIntegerField(validators=[MinValueValidator(1)])

    order_date    = models.DateField()
    delivery_date = models.DateField()

    advance_amount    = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0"), validators=[MinValueValidator(0)])
    total_amount      = models.DecimalField(max_digits=14, decimal_places=2, validators=[MinValueValidator(0)])
    remaining_balance = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0"))

    delivery_status = models.CharField(max_length=16, choices=DeliveryStatus.choices, default=DeliveryStatus.PENDING)
    notes = models.TextField(blank=True, default="")
    created_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name="orders")

    class Meta:
        ordering = ("-order_date",)
        indexes = [
            models.Index(fields=["-order_date"], name="order_order_date_idx"),
            models.Index(fields=["delivery_date"], name="order_delivery_date_idx"),
            models.Index(fields=["delivery_status"], name="order_delivery_status_idx"),
        ]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # read from __dict__ so deferred fields are not fetched here
        self._amounts_snapshot = (self.__dict__.get("total_amount"), self.__dict__.get("advance_amount"))

    def save(self, *args, **kwargs):
        amounts = (self.total_amount, self.advance_amount)
        if self._state.adding or amounts != self._amounts_snapshot:
            self.remaining_balance = Decimal(self.total_amount or 0) - Decimal(self.advance_amount or 0)
            update_fields = kwargs.get("update_fields")
            if update_fields is not None:
                kwargs["update_fields"] = set(update_fields) | {"remaining_balance"}
        super().save(*args, **kwargs)
        self._amounts_snapshot = (self.total_amount, self.advance_amount)

    def __str__(self):
        return f"{self.customer_name} – {self.item}"
