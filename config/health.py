"""Liveness check for the API and its backing services.

``GET /health/`` answers 200 only when every component responds; otherwise
503 with ``degraded`` (some up) or ``down`` (none up).
"""

from __future__ import annotations

import time
from typing import Any

import redis
from django.conf import settings
from django.db import connection
from django.http import JsonResponse
from django.views.decorators.http import require_GET

from club_access.common import clock


def _timed(check) -> dict[str, Any]:
    started = time.perf_counter()
    try:
        check()
    except Exception as exc:  # noqa: BLE001 - health must degrade, not crash
        return {"ok": False, "error": str(exc)}
    return {"ok": True, "latency_ms": round((time.perf_counter() - started) * 1000, 1)}


def _ping_db() -> None:
    with connection.cursor() as cursor:
        cursor.execute("SELECT 1;")
        cursor.fetchone()


def _ping_redis() -> None:
    client = redis.Redis.from_url(
        settings.REDIS_URL,
        socket_timeout=0.5,
        socket_connect_timeout=0.5,
    )
    client.ping()


def check_db() -> dict[str, Any]:
    return _timed(_ping_db)


def check_redis() -> dict[str, Any]:
    if not getattr(settings, "REDIS_URL", None):
        return {"ok": False, "error": "REDIS_URL not configured"}
    return _timed(_ping_redis)


@require_GET
def health(request):
    components = {"db": check_db(), "redis": check_redis()}
    up = [c["ok"] for c in components.values()]

    if all(up):
        state = "ok"
    elif any(up):
        state = "degraded"
    else:
        state = "down"

    return JsonResponse(
        {
            "status": state,
            "checked_at": clock.now().isoformat(),
            "components": components,
        },
        status=200 if state == "ok" else 503,
    )
