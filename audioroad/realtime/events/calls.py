from __future__ import annotations

from typing import TYPE_CHECKING
from typing import Any

from audioroad.calls.api.serializers import CallSerializer

if TYPE_CHECKING:  # import for type checking only
    from audioroad.calls.models import Call
    from audioroad.realtime.broadcaster import Broadcaster

CALL_CREATED = "call:created"
CALL_UPDATED = "call:updated"
CALL_DELETED = "call:deleted"


def build_call_payload(call: Call) -> dict[str, Any]:
    """Same shape as the REST response: the call plus its caller summary."""

    return dict(CallSerializer(call).data)


def publish_call_created(call: Call, broadcaster: Broadcaster) -> None:
    broadcaster.publish(CALL_CREATED, build_call_payload(call))


def publish_call_updated(call: Call, broadcaster: Broadcaster) -> None:
    broadcaster.publish(CALL_UPDATED, build_call_payload(call))


def publish_call_deleted(call_id: str, broadcaster: Broadcaster) -> None:
    broadcaster.publish(CALL_DELETED, {"id": str(call_id)})
