from django.contrib import admin

from .models import Order


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ("customer_name", "item", "quantity", "total_amount", "remaining_balance", "delivery_date", "delivery_status")
    list_filter = ("delivery_status",)
    search_fields = ("customer_name", "item", "mobile_no")
    readonly_fields = ("remaining_balance",)
    date_hierarchy = "delivery_date"
