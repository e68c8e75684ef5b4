import uuid
from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Order",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("customer_name", models.CharField(max_length=160)),
                ("address", models.CharField(max_length=255)),
                ("mobile_no", models.CharField(max_length=32)),
                ("item", models.CharField(max_length=200)),
                ("quantity", models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1)])),
                ("order_date", models.DateField()),
                ("delivery_date", models.DateField()),
                ("advance_amount", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=14, validators=[django.core.validators.MinValueValidator(0)])),
                ("total_amount", models.DecimalField(decimal_places=2, max_digits=14, validators=[django.core.validators.MinValueValidator(0)])),
                ("remaining_balance", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=14)),
                ("delivery_status", models.CharField(choices=[("Pending", "Pending"), ("Delivered", "Delivered")], default="Pending", max_length=16)),
                ("notes", models.TextField(blank=True, default="")),
                ("created_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="orders", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ("-order_date",),
                "indexes": [
                    models.Index(fields=["-order_date"], name="order_order_date_idx"),
                    models.Index(fields=["delivery_date"], name="order_delivery_date_idx"),
                    models.Index(fields=["delivery_status"], name="order_delivery_status_idx"),
                ],
            },
        ),
    ]
