import uuid

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="NotificationPolicy",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("triggers", models.JSONField(blank=True, default=list)),
                ("owner", models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name="notification_policy", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="Notification",
            fields=[
                ("id", models.BigAutoField(primary_key=True, serialize=False)),
                ("type", models.CharField(choices=[("info", "Info"), ("warning", "Warning"), ("error", "Error"), ("success", "Success")], default="info", max_length=16)),
                ("title", models.CharField(max_length=255)),
                ("message", models.TextField()),
                ("trigger_id", models.CharField(blank=True, max_length=120, null=True)),
                ("read", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="notifications", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ("-created_at",),
                "indexes": [
                    models.Index(fields=["user", "read", "-created_at"], name="notif_user_read_created_idx"),
                    models.Index(fields=["user", "trigger_id", "title", "created_at"], name="notif_dedup_lookup_idx"),
                ],
            },
        ),
    ]
