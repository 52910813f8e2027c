"""Custom middleware for the application."""

import logging
import time
import uuid

from django.utils.deprecation import MiddlewareMixin

logger = logging.getLogger(__name__)

SKIP_PATHS = ("/static/", "/favicon.ico", "/health/")
# Query parameters of the listing are safe to log; anything else is dropped.
LOGGED_PARAMS = (
    "columns",
    "columns[]",
    "offset",
    "limit",
    "sort_column",
    "sort_direction",
    "filter_column",
    "filter_value",
    "include_totals",
    "id",
)


class RequestLoggingMiddleware(MiddlewareMixin):
    """Middleware logging one structured record per request.

    Logs the method, path, status code, duration and a short request id.
    The request id is also returned in the ``X-Request-ID`` header.
    """

    def process_request(self, request):
        """Stamp the request with a start time and request id."""
        request.start_time = time.monotonic()
        request.request_id = uuid.uuid4().hex[:8]
        return None

    def process_response(self, request, response):
        """Log request completion and expose the request id."""
        if not hasattr(request, "start_time"):
            return response

        response["X-Request-ID"] = request.request_id

        if request.path.startswith(SKIP_PATHS):
            return response

        duration_ms = round((time.monotonic() - request.start_time) * 1000, 2)
        log_data = {
            "request_id": request.request_id,
            "method": request.method,
            "path": request.path,
            "status_code": response.status_code,
            "duration_ms": duration_ms,
        }
        params = {
            key: request.GET.getlist(key) for key in LOGGED_PARAMS if key in request.GET
        }
        if params:
            log_data["query_params"] = params

        if response.status_code >= 500:
            level = logging.ERROR
        elif response.status_code >= 400:
            level = logging.WARNING
        else:
            level = logging.INFO
        logger.log(level, "Request completed", extra=log_data)

        return response
