"""Publish/subscribe registry for queue events.

Services receive a ``Broadcaster`` instead of reaching for the Socket.IO
server directly. ``publish`` runs after the database transaction commits and
is fire-and-forget: nothing is acknowledged, replayed or ordered across
concurrent writers.

Subscriptions are keyed by channel. ``None`` is the global channel: a
subscriber there only sees unscoped events. Events listed in
``settings.REALTIME_EVENT_ROLES`` are delivered to those role channels only.
"""

from __future__ import annotations

import functools
import logging
import threading
from collections.abc import Callable
from collections.abc import Iterable
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from asgiref.sync import async_to_sync
from django.conf import settings
from django.utils.module_loading import import_string

from audioroad.realtime.socketio import room_for_role
from audioroad.realtime.socketio import sio

logger = logging.getLogger(__name__)

Subscriber = Callable[[str, dict[str, Any]], None]


@dataclass(frozen=True)
class PublishedEvent:
    event: str
    payload: dict[str, Any]
    channels: tuple[str, ...]


class Broadcaster:
    def __init__(self, event_roles: Mapping[str, Iterable[str]] | None = None):
        if event_roles is None:
            event_roles = getattr(settings, "REALTIME_EVENT_ROLES", {}) or {}
        self.event_roles = {
            event: tuple(room_for_role(role) for role in roles)
            for event, roles in event_roles.items()
        }
        self._subscribers: dict[str | None, list[Subscriber]] = {}
        self._lock = threading.Lock()

    def channels_for(self, event: str) -> tuple[str, ...]:
        return self.event_roles.get(event, ())

    def subscribe(self, callback: Subscriber, channel: str | None = None) -> None:
        with self._lock:
            self._subscribers.setdefault(channel, []).append(callback)

    def unsubscribe(self, callback: Subscriber, channel: str | None = None) -> None:
        with self._lock:
            callbacks = self._subscribers.get(channel, [])
            if callback in callbacks:
                callbacks.remove(callback)

    def _local_subscribers(self, channels: tuple[str, ...]) -> list[Subscriber]:
        with self._lock:
            if channels:
                groups = [self._subscribers.get(channel, []) for channel in channels]
            else:
                groups = list(self._subscribers.values())
        unique: list[Subscriber] = []
        for group in groups:
            for callback in group:
                if callback not in unique:
                    unique.append(callback)
        return unique

    def publish(self, event: str, payload: dict[str, Any]) -> None:
        channels = self.channels_for(event)
        logger.debug("Publishing %s to %s", event, channels or "all clients")
        try:
            self.emit(event, payload, channels)
        except Exception:
            logger.exception("Emit failed for %s", event)
        for callback in self._local_subscribers(channels):
            try:
                callback(event, payload)
            except Exception:
                logger.exception("Subscriber failed for %s", event)

    def emit(
        self,
        event: str,
        payload: dict[str, Any],
        channels: tuple[str, ...],
    ) -> None:
        """Deliver to remote clients. Local subscribers are handled by publish."""

    def connection_count(self) -> int:
        with self._lock:
            return sum(len(callbacks) for callbacks in self._subscribers.values())


class InMemoryBroadcaster(Broadcaster):
    """Process-local backend. Keeps every published event in ``published``."""

    def __init__(self, event_roles: Mapping[str, Iterable[str]] | None = None):
        super().__init__(event_roles)
        self.published: list[PublishedEvent] = []

    def emit(self, event, payload, channels):
        self.published.append(PublishedEvent(event, payload, channels))

    def events(self, name: str) -> list[dict[str, Any]]:
        return [item.payload for item in self.published if item.event == name]

    def reset(self) -> None:
        self.published.clear()
        with self._lock:
            self._subscribers.clear()


class SocketIOBroadcaster(Broadcaster):
    """Fans events out to browser clients through the shared Socket.IO server."""

    def emit(self, event, payload, channels):
        # Safe to call from sync Django code; rooms with nobody in them are a no-op.
        async_to_sync(sio.emit)(event, payload, to=list(channels) or None)

    def connection_count(self) -> int:
        return len(sio.eio.sockets)


@functools.cache
def get_broadcaster() -> Broadcaster:
    backend = import_string(settings.REALTIME_BROADCASTER)
    return backend()
