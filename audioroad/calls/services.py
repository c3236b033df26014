"""Call queue mutations.

Every function performs one write inside ``transaction.atomic()`` and, only
after the surrounding transaction commits, hands the result to the injected
broadcaster. Database failures are logged here and surfaced as a generic
``PersistenceError``; nothing is retried.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from typing import Any

from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import DatabaseError
from django.db import IntegrityError
from django.db import transaction

from audioroad.calls.models import Call
from audioroad.core.exceptions import ConflictError
from audioroad.core.exceptions import InvalidTransition
from audioroad.core.exceptions import OnAirConflict
from audioroad.core.exceptions import PersistenceError
from audioroad.realtime.events.calls import publish_call_created
from audioroad.realtime.events.calls import publish_call_deleted
from audioroad.realtime.events.calls import publish_call_updated

if TYPE_CHECKING:  # import for type checking only
    from audioroad.realtime.broadcaster import Broadcaster

logger = logging.getLogger(__name__)


def create_call(data: dict[str, Any], *, broadcaster: Broadcaster) -> Call:
    """Queue a screened call. New calls always start out ``ready``."""

    fields = dict(data)
    fields.pop("call_status", None)
    try:
        with transaction.atomic():
            call = Call.objects.create(call_status=Call.Status.READY, **fields)
    except DatabaseError as exc:
        logger.exception("Error creating call")
        msg = "Failed to create call"
        raise PersistenceError(msg) from exc

    transaction.on_commit(lambda: publish_call_created(call, broadcaster), robust=True)
    return call


def _ensure_nothing_on_air(call: Call) -> None:
    # The calls_single_on_air index still catches two hosts racing past this check.
    if Call.objects.filter(call_status=Call.Status.ON_AIR).exclude(pk=call.pk).exists():
        raise OnAirConflict


def _is_single_on_air_violation(exc: IntegrityError) -> bool:
    # PostgreSQL names the constraint, SQLite names the indexed column.
    message = str(exc)
    return "calls_single_on_air" in message or "calls.call_status" in message


def update_call(
    call_id,
    changes: dict[str, Any],
    *,
    broadcaster: Broadcaster,
    expected_version: int | None = None,
) -> Call:
    """Apply a partial update and bump ``version``.

    ``expected_version`` enables optimistic concurrency; without it the last
    write wins. A missing call is reported as a persistence failure.
    """

    enforce_transitions = getattr(settings, "CALLS_ENFORCE_TRANSITIONS", False)
    going_on_air = changes.get("call_status") == Call.Status.ON_AIR
    try:
        with transaction.atomic():
            try:
                call = Call.objects.select_for_update().get(pk=call_id)
            except (Call.DoesNotExist, DjangoValidationError) as exc:
                logger.error("Error updating call %s: no such call", call_id)  # noqa: TRY400
                msg = "Failed to update call"
                raise PersistenceError(msg) from exc

            if expected_version is not None and expected_version != call.version:
                raise ConflictError

            new_status = changes.get("call_status", call.call_status)
            if enforce_transitions and not call.can_transition_to(new_status):
                msg = f"Cannot move a call from {call.call_status} to {new_status}."
                raise InvalidTransition(msg)
            if new_status == Call.Status.ON_AIR and call.call_status != new_status:
                _ensure_nothing_on_air(call)

            for field, value in changes.items():
                setattr(call, field, value)
            call.version += 1
            call.save()
    except IntegrityError as exc:
        if not (going_on_air and _is_single_on_air_violation(exc)):
            logger.exception("Error updating call %s", call_id)
            msg = "Failed to update call"
            raise PersistenceError(msg) from exc
        logger.warning("Call %s lost the on-air race", call_id)
        raise OnAirConflict from exc
    except DatabaseError as exc:
        logger.exception("Error updating call %s", call_id)
        msg = "Failed to update call"
        raise PersistenceError(msg) from exc

    transaction.on_commit(lambda: publish_call_updated(call, broadcaster), robust=True)
    return call


def delete_call(call_id, *, broadcaster: Broadcaster) -> None:
    try:
        with transaction.atomic():
            deleted, _ = Call.objects.filter(pk=call_id).delete()
    except DjangoValidationError:
        deleted = 0
    except DatabaseError as exc:
        logger.exception("Error deleting call %s", call_id)
        msg = "Failed to delete call"
        raise PersistenceError(msg) from exc

    if not deleted:
        logger.error("Error deleting call %s: no such call", call_id)
        msg = "Failed to delete call"
        raise PersistenceError(msg)

    transaction.on_commit(lambda: publish_call_deleted(call_id, broadcaster), robust=True)
