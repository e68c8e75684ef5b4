from django.contrib import admin

from .models import Notification, NotificationPolicy


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ("title", "user", "type", "trigger_id", "read", "created_at")
    list_filter = ("type", "read", "trigger_id")
    search_fields = ("title", "message", "user__email")
    date_hierarchy = "created_at"


@admin.register(NotificationPolicy)
class NotificationPolicyAdmin(admin.ModelAdmin):
    list_display = ("owner", "updated_at")
    search_fields = ("owner__email",)
