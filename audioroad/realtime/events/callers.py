from __future__ import annotations

from typing import TYPE_CHECKING
from typing import Any

from audioroad.callers.api.serializers import CallerSerializer

if TYPE_CHECKING:  # import for type checking only
    from audioroad.callers.models import Caller
    from audioroad.realtime.broadcaster import Broadcaster

CALLER_CREATED = "caller:created"
CALLER_UPDATED = "caller:updated"


def build_caller_payload(caller: Caller) -> dict[str, Any]:
    return dict(CallerSerializer(caller).data)


def publish_caller_created(caller: Caller, broadcaster: Broadcaster) -> None:
    """Tell the screener desks about a newly registered caller."""

    broadcaster.publish(CALLER_CREATED, build_caller_payload(caller))


def publish_caller_updated(caller: Caller, broadcaster: Broadcaster) -> None:
    broadcaster.publish(CALLER_UPDATED, build_caller_payload(caller))
