"""Global Socket.IO server for the screener and host dashboards.

Frontend convention:
- URL base: ws://<host>:<port>
- Socket.IO path: /socket.io (the library default)
- No auth: any client may connect and receives every unscoped event.

Clients emit ``join:role`` with ``"screener"``/``"host"`` (or
``{"role": "host", "show": "Morning Drive"}``) to join their channel rooms.
Rooms are advisory unless ``settings.REALTIME_EVENT_ROLES`` scopes an event.
"""

from __future__ import annotations

import logging
from typing import Any

import socketio
from django.conf import settings

logger = logging.getLogger(__name__)

KNOWN_ROLES = ("screener", "host")


def _client_manager() -> socketio.AsyncManager | None:
    # A shared redis manager lets several ASGI workers reach each other's sockets.
    url = getattr(settings, "REDIS_URL", "")
    if not url:
        return None
    return socketio.AsyncRedisManager(url)


def _cors_allowed_origins() -> str | list[str]:
    origins = getattr(settings, "SOCKETIO_CORS_ALLOWED_ORIGINS", "*")
    # engine.io only treats the bare string "*" as a wildcard.
    if origins == "*" or "*" in origins:
        return "*"
    return list(origins)


sio = socketio.AsyncServer(
    async_mode="asgi",
    cors_allowed_origins=_cors_allowed_origins(),
    client_manager=_client_manager(),
    logger=False,
    engineio_logger=False,
)


def _normalize_room_suffix(value: str) -> str:
    return "_".join(value.strip().lower().split())


def room_for_role(role: str) -> str:
    return f"role_{_normalize_room_suffix(role)}"


def room_for_show(show: str) -> str:
    return f"show_{_normalize_room_suffix(show)}"


def _parse_join(data: Any) -> tuple[str, str | None]:
    """Accept ``"host"`` or ``{"role": "host", "show": "..."}``."""

    if isinstance(data, dict):
        role = data.get("role")
        show = data.get("show")
    else:
        role, show = data, None
    role = role.strip().lower() if isinstance(role, str) else ""
    show = show if isinstance(show, str) and show.strip() else None
    return role, show


def _rooms_for(role: str, show: str | None) -> list[str]:
    rooms = [room_for_role(role)]
    if show is not None:
        rooms.append(room_for_show(show))
    return rooms


@sio.event
async def connect(sid: str, environ: dict[str, Any], auth: Any | None = None):
    logger.info("Client connected: %s", sid)


@sio.event
async def disconnect(sid: str, reason: Any | None = None):
    # Rooms/session are cleaned up automatically.
    logger.info("Client disconnected: %s", sid)


@sio.on("join:role")
async def join_role(sid: str, data: Any):
    role, show = _parse_join(data)
    if role not in KNOWN_ROLES:
        logger.warning("Socket %s asked for unknown role %r", sid, data)
        return {"ok": False, "error": "unknown_role"}

    rooms = _rooms_for(role, show)
    for room in rooms:
        await sio.enter_room(sid, room)
    await sio.save_session(sid, {"role": role, "show": show})
    logger.info("Socket %s joined rooms: %s", sid, ", ".join(rooms))
    return {"ok": True, "rooms": rooms}


@sio.on("leave:role")
async def leave_role(sid: str, data: Any | None = None):
    if data is None:
        session = await sio.get_session(sid)
        data = session if isinstance(session, dict) else {}
    role, show = _parse_join(data)
    if role not in KNOWN_ROLES:
        return {"ok": False, "error": "unknown_role"}

    rooms = _rooms_for(role, show)
    for room in rooms:
        await sio.leave_room(sid, room)
    await sio.save_session(sid, {})
    logger.info("Socket %s left rooms: %s", sid, ", ".join(rooms))
    return {"ok": True, "rooms": rooms}
