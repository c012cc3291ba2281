"""
Infrastructure endpoints that sit outside the chat domain.
"""

import logging

from django.core.cache import cache
from django.db import DatabaseError, connection
from django.http import JsonResponse

logger = logging.getLogger(__name__)


def health_check(request):
    """
    Liveness/readiness probe.

    Returns 200 when the database answers, 503 otherwise. The cache is
    reported but never fails the check.

    Example Response:
        {"status": "healthy", "checks": {"database": "connected", "cache": "connected"}}
    """
    checks = {"database": "unknown", "cache": "unknown"}
    is_healthy = True

    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
        checks["database"] = "connected"
    except DatabaseError:
        logger.exception("Health check: database unreachable")
        checks["database"] = "disconnected"
        is_healthy = False

    try:
        cache.set("health_check", "ok", timeout=1)
        checks["cache"] = (
            "connected" if cache.get("health_check") == "ok" else "disconnected"
        )
    except Exception:
        logger.warning("Health check: cache unreachable", exc_info=True)
        checks["cache"] = "disconnected"

    return JsonResponse(
        {"status": "healthy" if is_healthy else "unhealthy", "checks": checks},
        status=200 if is_healthy else 503,
    )
