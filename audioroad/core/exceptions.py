"""Error kinds surfaced by the API and the DRF exception handler that renders them.

Response bodies:
- validation failures: ``{"errors": [{"field": ..., "message": ...}, ...]}``
- everything else: ``{"error": ..., "code": ...}``
"""

from __future__ import annotations

from typing import Any

from django.utils.translation import gettext_lazy as _
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.exceptions import ValidationError
from rest_framework.settings import api_settings
from rest_framework.views import exception_handler


class PersistenceError(APIException):
    """The database rejected or could not find the row. Detail stays generic."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = _("Internal server error")
    default_code = "persistence_error"


class ConflictError(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = _("The call was changed by someone else. Reload and retry.")
    default_code = "conflict"


class OnAirConflict(ConflictError):
    default_detail = _("Another call is already on air.")
    default_code = "on_air_conflict"


class InvalidTransition(ConflictError):
    default_detail = _("Call status change is not allowed.")
    default_code = "invalid_transition"


def _flatten_errors(detail: Any, field: str | None = None):
    if isinstance(detail, dict):
        for key, value in detail.items():
            name = key if field is None else f"{field}.{key}"
            yield from _flatten_errors(value, name)
    elif isinstance(detail, list):
        for item in detail:
            yield from _flatten_errors(item, field)
    else:
        yield {
            "field": field or api_settings.NON_FIELD_ERRORS_KEY,
            "message": str(detail),
        }


def api_exception_handler(exc: Exception, context: dict[str, Any]):
    response = exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, ValidationError):
        response.data = {"errors": list(_flatten_errors(exc.detail))}
        return response

    detail = response.data
    if isinstance(detail, dict):
        detail = detail.get("detail", detail)
    body: dict[str, Any] = {"error": str(detail)}
    code = getattr(detail, "code", None)
    if code:
        body["code"] = code
    response.data = body
    return response
