import pytest
from rest_framework.test import APIClient

from audioroad.callers.models import Caller
from audioroad.calls.models import Call
from audioroad.realtime.broadcaster import get_broadcaster


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture
def broadcaster():
    """The in-memory broadcaster configured by the test settings, emptied per test."""

    instance = get_broadcaster()
    instance.reset()
    yield instance
    instance.reset()


@pytest.fixture
def caller(db) -> Caller:
    return Caller.objects.create(name="Jane Doe", phone="555-123-4567")


@pytest.fixture
def make_call(db, caller):
    def _make_call(**fields) -> Call:
        fields.setdefault("caller", caller)
        fields.setdefault("topic", "Fuel prices")
        fields.setdefault("screener_name", "Alex")
        fields.setdefault("call_status", Call.Status.READY)
        return Call.objects.create(**fields)

    return _make_call
