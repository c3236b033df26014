import logging

from django.db import DatabaseError
from django.db import transaction

from audioroad.callers.models import Caller
from audioroad.core.exceptions import PersistenceError
from audioroad.realtime.broadcaster import Broadcaster
from audioroad.realtime.events.callers import publish_caller_created
from audioroad.realtime.events.callers import publish_caller_updated

logger = logging.getLogger(__name__)


def create_caller(data: dict, *, broadcaster: Broadcaster) -> Caller:
    """Persist a validated caller and announce it once the write commits."""

    try:
        with transaction.atomic():
            caller = Caller.objects.create(**data)
    except DatabaseError as exc:
        logger.exception("Error creating caller")
        msg = "Failed to create caller"
        raise PersistenceError(msg) from exc

    transaction.on_commit(
        lambda: publish_caller_created(caller, broadcaster), robust=True
    )
    return caller


def update_caller(caller: Caller, changes: dict, *, broadcaster: Broadcaster) -> Caller:
    try:
        with transaction.atomic():
            for field, value in changes.items():
                setattr(caller, field, value)
            caller.save(update_fields=[*changes.keys(), "updated_at"])
    except DatabaseError as exc:
        logger.exception("Error updating caller %s", caller.pk)
        msg = "Failed to update caller"
        raise PersistenceError(msg) from exc

    transaction.on_commit(
        lambda: publish_caller_updated(caller, broadcaster), robust=True
    )
    return caller
