from django.conf import settings
from django.core.cache import cache
from django.db import connection
from django.http import JsonResponse
from django.utils import timezone

from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView


def healthz(_request):
    return JsonResponse({"ok": True})


class WhoAmIView(APIView):
    permission_classes = [AllowAny]

    def get(self, request):
        if not request.user.is_authenticated:
            return Response({"is_authenticated": False})
        return Response({
            "is_authenticated": True,
            "user_id": str(request.user.id),
            "email": request.user.email,
            "full_name": request.user.full_name,
            "role": request.user.role,
        })


class DeepHealthView(APIView):
    """
    GET /api/v1/core/deep-health/?db=1&cache=1

    The cache check matters here: the trigger scan lock lives in the cache.
    """
    permission_classes = [AllowAny]

    def get(self, request):
        out = {"ok": True, "time": timezone.now().isoformat(), "debug": bool(settings.DEBUG)}

        if request.query_params.get("db") == "1":
            try:
                with connection.cursor() as cur:
                    cur.execute("SELECT 1;")
                    cur.fetchone()
                out["db"] = {"ok": True}
            except Exception as e:
                out["ok"] = False
                out["db"] = {"ok": False, "error": str(e)}

        if request.query_params.get("cache") == "1":
            try:
                cache.set("core_healthz_probe", "1", timeout=10)
                hit = cache.get("core_healthz_probe") == "1"
                out["cache"] = {"ok": hit}
                out["ok"] = out["ok"] and hit
            except Exception as e:
                out["ok"] = False
                out["cache"] = {"ok": False, "error": str(e)}

        return Response(out, status=200 if out["ok"] else 503)
