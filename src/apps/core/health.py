"""
Health check utilities for application monitoring.

Checks the two collaborators the authors listing depends on: the database
and the cache holding the author column catalog.
"""

import logging
import time
from typing import Any, Callable

from django.conf import settings
from django.core.cache import cache
from django.db import connection
from django.http import JsonResponse
from django.utils import timezone
from django.views.decorators.cache import never_cache
from django.views.decorators.http import require_http_methods

from authors.columns import AuthorColumnCatalog

logger = logging.getLogger(__name__)

SLOW_DATABASE_MS = 1000
SLOW_CACHE_MS = 500


class HealthCheckStatus:
    """Health check status constants."""

    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"
    DEGRADED = "degraded"


def _elapsed_ms(started: float) -> float:
    return round((time.monotonic() - started) * 1000, 2)


class HealthChecker:
    """Runs the component checks and folds them into an overall status."""

    def __init__(self) -> None:
        self.checks: dict[str, Callable[[], dict[str, Any]]] = {
            "database": self._check_database,
            "cache": self._check_cache,
            "author_columns": self._check_author_columns,
        }

    def run_all_checks(self) -> dict[str, Any]:
        """Run all health checks and return status."""
        results = {}
        overall_status = HealthCheckStatus.HEALTHY

        for check_name, check_func in self.checks.items():
            try:
                check_result = check_func()
            except Exception as e:
                logger.error(f"Health check '{check_name}' failed: {e}")
                check_result = {
                    "status": HealthCheckStatus.UNHEALTHY,
                    "message": f"Check failed: {e}",
                }
            results[check_name] = check_result

            if check_result["status"] == HealthCheckStatus.UNHEALTHY:
                overall_status = HealthCheckStatus.UNHEALTHY
            elif (
                check_result["status"] == HealthCheckStatus.DEGRADED
                and overall_status == HealthCheckStatus.HEALTHY
            ):
                overall_status = HealthCheckStatus.DEGRADED

        return {
            "status": overall_status,
            "timestamp": timezone.now().isoformat(),
            "version": getattr(settings, "VERSION", "1.0.0"),
            "environment": getattr(settings, "ENVIRONMENT", "unknown"),
            "checks": results,
        }

    def _check_database(self) -> dict[str, Any]:
        """Check database connectivity and response time."""
        started = time.monotonic()
        try:
            with connection.cursor() as cursor:
                cursor.execute("SELECT 1")
                cursor.fetchone()
        except Exception as e:
            return {
                "status": HealthCheckStatus.UNHEALTHY,
                "message": f"Database connection failed: {e}",
            }

        response_time = _elapsed_ms(started)
        if response_time > SLOW_DATABASE_MS:
            status = HealthCheckStatus.DEGRADED
            message = f"Slow database response: {response_time:.2f}ms"
        else:
            status = HealthCheckStatus.HEALTHY
            message = f"Database responsive: {response_time:.2f}ms"
        return {"status": status, "message": message, "response_time_ms": response_time}

    def _check_cache(self) -> dict[str, Any]:
        """Check the cache with a write/read/delete round trip."""
        test_key = "health_check_test"
        started = time.monotonic()
        try:
            cache.set(test_key, "ok", timeout=30)
            cached_value = cache.get(test_key)
            cache.delete(test_key)
        except Exception as e:
            # The listing still works without a cache, only slower.
            return {
                "status": HealthCheckStatus.DEGRADED,
                "message": f"Cache connection failed: {e}",
            }

        if cached_value != "ok":
            return {
                "status": HealthCheckStatus.UNHEALTHY,
                "message": "Cache read/write test failed",
            }

        response_time = _elapsed_ms(started)
        if response_time > SLOW_CACHE_MS:
            status = HealthCheckStatus.DEGRADED
            message = f"Slow cache response: {response_time:.2f}ms"
        else:
            status = HealthCheckStatus.HEALTHY
            message = f"Cache responsive: {response_time:.2f}ms"
        return {"status": status, "message": message, "response_time_ms": response_time}

    def _check_author_columns(self) -> dict[str, Any]:
        """Check that the author column catalog resolves and knows ``id``."""
        columns = AuthorColumnCatalog().existing_columns()
        if "id" not in columns:
            return {
                "status": HealthCheckStatus.UNHEALTHY,
                "message": "Author table has no id column",
            }
        return {
            "status": HealthCheckStatus.HEALTHY,
            "message": f"{len(columns)} author columns available",
        }


health_checker = HealthChecker()


@never_cache
@require_http_methods(["GET", "HEAD"])
def health_check_view(request: Any) -> JsonResponse:
    """Health check endpoint for monitoring systems."""
    health_status = health_checker.run_all_checks()
    status_code = 503 if health_status["status"] == HealthCheckStatus.UNHEALTHY else 200
    return JsonResponse(health_status, status=status_code)


@never_cache
@require_http_methods(["GET"])
def readiness_check_view(request: Any) -> JsonResponse:
    """Readiness check: the database must answer."""
    db_check = health_checker._check_database()
    if db_check["status"] == HealthCheckStatus.UNHEALTHY:
        return JsonResponse(
            {"status": "not_ready", "message": "Database not available"}, status=503
        )
    return JsonResponse({"status": "ready", "timestamp": timezone.now().isoformat()})


@never_cache
@require_http_methods(["GET"])
def liveness_check_view(request: Any) -> JsonResponse:
    """Liveness check: the process is serving requests."""
    return JsonResponse(
        {
            "status": "alive",
            "timestamp": timezone.now().isoformat(),
            "version": getattr(settings, "VERSION", "1.0.0"),
        }
    )
