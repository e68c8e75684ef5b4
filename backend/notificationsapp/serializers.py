from rest_framework import serializers

from .models import Notification, NotificationPolicy, NOTIFICATION_TYPES
from .triggers import OPERATOR_ALIASES, Operator, RecordType, Severity

OPERATOR_CHOICES = [o.value for o in Operator] + list(OPERATOR_ALIASES)


class NotificationSerializer(serializers.ModelSerializer):
    class Meta:
        model = Notification
        fields = ("id", "user", "type", "title", "message", "trigger_id", "read", "created_at")
        read_only_fields = fields


class TriggerSerializer(serializers.Serializer):
    id = serializers.CharField(max_length=120)
    name = serializers.CharField(max_length=160)
    enabled = serializers.BooleanField(default=True)
    record_type = serializers.ChoiceField(choices=[t.value for t in RecordType], default=RecordType.ORDER.value)
    # free text: unsupported fields are kept and simply never match
    field = serializers.CharField(max_length=64)
    operator = serializers.ChoiceField(choices=OPERATOR_CHOICES)
    threshold = serializers.DecimalField(max_digits=18, decimal_places=2, coerce_to_string=False)
    severity = serializers.ChoiceField(choices=[s.value for s in Severity], default=Severity.INFO.value)
    title_template = serializers.CharField()
    message_template = serializers.CharField()
    recipients = serializers.ListField(child=serializers.CharField(max_length=64), default=lambda: ["all"])

    def to_internal_value(self, data):
        value = super().to_internal_value(data)
        threshold = value["threshold"]
        # keep JSON-friendly numbers in the stored policy
        value["threshold"] = int(threshold) if threshold == threshold.to_integral_value() else float(threshold)
        return value


class PolicySerializer(serializers.ModelSerializer):
    owner_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = NotificationPolicy
        fields = ("id", "owner_id", "triggers", "created_at", "updated_at")
        read_only_fields = fields


class PolicyUpdateSerializer(serializers.Serializer):
    triggers = TriggerSerializer(many=True)

    def validate_triggers(self, triggers):
        ids = [t["id"] for t in triggers]
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            raise serializers.ValidationError(f"Trigger ids must be unique: {', '.join(duplicates)}")
        return triggers


class ManualNotificationSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=255)
    message = serializers.CharField()
    type = serializers.ChoiceField(choices=[t for t, _ in NOTIFICATION_TYPES], default="info")
    recipients = serializers.ListField(child=serializers.CharField(max_length=64), default=lambda: ["all"])
