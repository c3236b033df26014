from __future__ import annotations

from typing import Any

import redis
from django.conf import settings
from django.db import connection
from django.db import transaction
from django.http import JsonResponse
from django.utils import timezone

from audioroad.realtime.broadcaster import get_broadcaster


def check_db() -> dict[str, Any]:
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1;")
            cursor.fetchone()
    except Exception as exc:  # noqa: BLE001 - health must degrade, not crash
        return {"ok": False, "error": str(exc)}
    else:
        return {"ok": True}


def check_redis() -> dict[str, Any]:
    url = getattr(settings, "REDIS_URL", None)
    try:
        client = redis.Redis.from_url(
            url,
            socket_timeout=0.5,
            socket_connect_timeout=0.5,
        )
        client.ping()
    except Exception as exc:  # noqa: BLE001 - health must degrade, not crash
        return {"ok": False, "error": str(exc)}
    else:
        return {"ok": True}


# check_db must be the first thing to touch the database, so no ATOMIC_REQUESTS.
@transaction.non_atomic_requests
def health(request):
    components = {"db": check_db()}
    # Redis is only part of the deployment when Socket.IO fans out through it.
    if getattr(settings, "REDIS_URL", None):
        components["redis"] = check_redis()

    all_ok = all(v.get("ok", False) for v in components.values())
    http_status = 200 if all_ok else 503

    return JsonResponse(
        {
            "status": "healthy" if all_ok else "degraded",
            "timestamp": timezone.now().isoformat(),
            "environment": settings.ENVIRONMENT,
            "socket_connections": get_broadcaster().connection_count(),
            "components": components,
        },
        status=http_status,
    )
