import logging
import time
import uuid

logger = logging.getLogger("ordertrack.request")


class RequestIDMiddleware:
    """
    Adds/propagates a request id and logs one line per API request with its
    status and duration.
    """
    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        rid = request.META.get("HTTP_X_REQUEST_ID") or uuid.uuid4().hex
        request.request_id = rid
        t0 = time.perf_counter()
        response = self.get_response(request)
        elapsed_ms = int((time.perf_counter() - t0) * 1000)
        response["X-Request-ID"] = rid
        response["X-Response-Time-ms"] = str(elapsed_ms)
        if request.path.startswith("/api/"):
            logger.info(
                "%s %s -> %s in %sms [%s]",
                request.method, request.path, response.status_code, elapsed_ms, rid,
            )
        return response
