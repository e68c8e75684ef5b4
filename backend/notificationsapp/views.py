from django.contrib.auth import get_user_model
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import mixins, permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.views import APIView

from common.permissions import IsBusinessOwner, IsOwnerOrReadOnly
from .engine import run_scan_now
from .models import Notification
from .serializers import (
    ManualNotificationSerializer, NotificationSerializer, PolicySerializer, PolicyUpdateSerializer,
)
from .services import (
    get_or_create_policy, mark_all_read, replace_policy_triggers, send_manual_notification, unread_count,
)

DEFAULT_LIMIT = 50
MAX_LIMIT = 500


def _parse_limit(value):
    try:
        limit = int(value)
    except (TypeError, ValueError):
        return DEFAULT_LIMIT
    return max(1, min(limit, MAX_LIMIT))


class NotificationViewSet(mixins.ListModelMixin,
                          mixins.DestroyModelMixin,
                          viewsets.GenericViewSet):
    """
    The caller's notification inbox.

    GET    /notifications/?read=false&type=warning&limit=50
    GET    /notifications/unread-count/
    PATCH  /notifications/{id}/read/
    PATCH  /notifications/read-all/
    DELETE /notifications/{id}/
    POST   /notifications/manual/          (owner)
    POST   /notifications/test-triggers/   (owner)
    """
    serializer_class = NotificationSerializer
    permission_classes = [permissions.IsAuthenticated]
    pagination_class = None
    filter_backends = [DjangoFilterBackend]
    filterset_fields = {"read": ["exact"], "type": ["exact"], "trigger_id": ["exact"]}

    def get_queryset(self):
        if getattr(self, "swagger_fake_view", False):
            return Notification.objects.none()
        return Notification.objects.filter(user=self.request.user).order_by("-created_at")

    def list(self, request, *args, **kwargs):
        qs = self.filter_queryset(self.get_queryset())
        qs = qs[:_parse_limit(request.query_params.get("limit"))]
        return Response(self.get_serializer(qs, many=True).data)

    @action(detail=True, methods=["patch"], url_path="read")
    def mark_read(self, request, pk=None):
        notification = self.get_object()
        notification.mark_read()
        return Response(self.get_serializer(notification).data)

    @action(detail=False, methods=["patch"], url_path="read-all")
    def read_all(self, request):
        updated = mark_all_read(request.user)
        return Response({"message": "All notifications marked as read", "updated": updated})

    @action(detail=False, methods=["get"], url_path="unread-count")
    def count_unread(self, request):
        return Response({"count": unread_count(request.user)})

    @action(detail=False, methods=["post"], url_path="manual", permission_classes=[IsBusinessOwner])
    def manual(self, request):
        ser = ManualNotificationSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        created = send_manual_notification(**ser.validated_data)
        return Response({
            "message": f"Notification sent to {len(created)} user(s)",
            "count": len(created),
            "notifications": self.get_serializer(created, many=True).data,
        }, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=["post"], url_path="test-triggers", permission_classes=[IsBusinessOwner])
    def test_triggers(self, request):
        ok, report = run_scan_now()
        if not ok:
            return Response({"error": "Notification check failed", "report": report.as_dict()},
                            status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        if report.skipped:
            return Response({"error": "A notification check is already running; nothing was scanned",
                             "report": report.as_dict()}, status=status.HTTP_409_CONFLICT)
        return Response({"message": "Notification check triggered successfully", "report": report.as_dict()})


class PolicyView(APIView):
    """
    GET /policies/  -> the owner's policy (created with the default triggers on first read);
                   employees get the earliest active owner's policy
    PUT /policies/  -> owner replaces the whole trigger list
    """
    permission_classes = [IsOwnerOrReadOnly]

    def get(self, request):
        owner = request.user
        if not IsBusinessOwner().has_permission(request, self):
            # employees see the business owner's rules, read-only
            owner = get_user_model().objects.active_owners().order_by("date_joined").first()
            if owner is None:
                return Response({"detail": "No active owner account."}, status=status.HTTP_404_NOT_FOUND)
        policy = get_or_create_policy(owner)
        return Response(PolicySerializer(policy).data)

    def put(self, request):
        ser = PolicyUpdateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        policy = replace_policy_triggers(request.user, ser.validated_data["triggers"])
        return Response(PolicySerializer(policy).data)
