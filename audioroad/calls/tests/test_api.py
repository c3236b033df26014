import uuid
from datetime import timedelta
from http import HTTPStatus

import pytest
from django.utils import timezone

from audioroad.calls.models import Call

CALLS_URL = "/api/calls"
READY_URL = "/api/calls/ready"


def _call_url(call_id) -> str:
    return f"{CALLS_URL}/{call_id}"


def _error_fields(response) -> set[str]:
    return {error["field"] for error in response.json()["errors"]}


@pytest.mark.django_db
class TestCreateCall:
    def test_forces_ready_status(
        self, api_client, caller, broadcaster, django_capture_on_commit_callbacks
    ):
        with django_capture_on_commit_callbacks(execute=True):
            res = api_client.post(
                CALLS_URL,
                {
                    "caller_id": str(caller.pk),
                    "topic": "Fuel prices",
                    "screener_name": "Alex",
                    "call_status": "on_air",
                },
                format="json",
            )

        assert res.status_code == HTTPStatus.CREATED
        assert res.data["call_status"] == "ready"
        assert res.data["priority"] == "medium"
        assert res.data["caller_id"] == str(caller.pk)
        assert res.data["callers"] == {
            "name": "Jane Doe",
            "phone": "555-123-4567",
            "location": "",
        }
        assert Call.objects.get(pk=res.data["id"]).call_status == Call.Status.READY

    def test_broadcasts_persisted_record(
        self, api_client, caller, broadcaster, django_capture_on_commit_callbacks
    ):
        with django_capture_on_commit_callbacks(execute=True):
            res = api_client.post(
                CALLS_URL,
                {
                    "caller_id": str(caller.pk),
                    "topic": "Trucking regulations",
                    "screener_name": "Alex",
                    "priority": "HIGH",
                },
                format="json",
            )

        stored = Call.objects.get(pk=res.data["id"])
        created = broadcaster.events("call:created")
        assert len(created) == 1
        assert created[0]["id"] == str(stored.pk)
        assert created[0]["topic"] == stored.topic
        assert created[0]["priority"] == stored.priority == "high"
        assert created[0]["callers"]["name"] == "Jane Doe"

    def test_rejects_malformed_caller_id(self, api_client, broadcaster):
        res = api_client.post(
            CALLS_URL,
            {"caller_id": "42", "topic": "Fuel prices", "screener_name": "Alex"},
            format="json",
        )
        assert res.status_code == HTTPStatus.BAD_REQUEST
        assert res.json()["errors"] == [
            {"field": "caller_id", "message": "Invalid caller ID format"},
        ]

    def test_rejects_unknown_caller(self, api_client, db, broadcaster):
        res = api_client.post(
            CALLS_URL,
            {
                "caller_id": str(uuid.uuid4()),
                "topic": "Fuel prices",
                "screener_name": "Alex",
            },
            format="json",
        )
        assert res.status_code == HTTPStatus.BAD_REQUEST
        assert _error_fields(res) == {"caller_id"}
        assert not Call.objects.exists()

    def test_reports_every_violation_at_once(self, api_client, caller, broadcaster):
        res = api_client.post(
            CALLS_URL,
            {
                "caller_id": str(caller.pk),
                "topic": "Hi",
                "priority": "urgent",
                "talking_points": "x" * 1001,
            },
            format="json",
        )
        assert res.status_code == HTTPStatus.BAD_REQUEST
        assert _error_fields(res) == {
            "topic",
            "priority",
            "talking_points",
            "screener_name",
        }
        assert broadcaster.published == []


@pytest.mark.django_db
class TestReadyQueue:
    def test_only_ready_calls(self, api_client, make_call):
        ready = make_call()
        make_call(call_status=Call.Status.ON_AIR)
        make_call(call_status=Call.Status.COMPLETED)
        make_call(call_status=Call.Status.WAITING)

        res = api_client.get(READY_URL)
        assert res.status_code == HTTPStatus.OK
        assert [row["id"] for row in res.data] == [str(ready.pk)]
        assert all(row["call_status"] == "ready" for row in res.data)

    @pytest.mark.parametrize("high_first", [True, False])
    def test_high_priority_before_low(self, api_client, make_call, high_first):
        if high_first:
            high = make_call(priority=Call.Priority.HIGH)
            low = make_call(priority=Call.Priority.LOW)
        else:
            low = make_call(priority=Call.Priority.LOW)
            high = make_call(priority=Call.Priority.HIGH)

        res = api_client.get(READY_URL)
        assert [row["id"] for row in res.data] == [str(high.pk), str(low.pk)]

    def test_equal_priority_oldest_first(self, api_client, make_call):
        later = make_call()
        earlier = make_call()
        Call.objects.filter(pk=earlier.pk).update(
            created_at=timezone.now() - timedelta(minutes=5)
        )

        res = api_client.get(READY_URL)
        assert [row["id"] for row in res.data] == [str(earlier.pk), str(later.pk)]

    def test_embeds_caller_summary(self, api_client, make_call):
        make_call()
        res = api_client.get(READY_URL)
        assert res.data[0]["callers"]["phone"] == "555-123-4567"


@pytest.mark.django_db
class TestListCalls:
    def test_filter_by_status(self, api_client, make_call):
        make_call()
        on_air = make_call(call_status=Call.Status.ON_AIR)

        res = api_client.get(CALLS_URL, {"call_status": "ON_AIR"})
        assert res.status_code == HTTPStatus.OK
        assert [row["id"] for row in res.data] == [str(on_air.pk)]

    def test_unknown_status_filter(self, api_client, make_call):
        res = api_client.get(CALLS_URL, {"call_status": "archived"})
        assert res.status_code == HTTPStatus.BAD_REQUEST
        assert _error_fields(res) == {"call_status"}


@pytest.mark.django_db
class TestUpdateCall:
    def test_rejects_unknown_status(self, api_client, make_call, broadcaster):
        call = make_call()
        res = api_client.patch(
            _call_url(call.pk), {"call_status": "archived"}, format="json"
        )
        assert res.status_code == HTTPStatus.BAD_REQUEST
        assert res.json()["errors"][0]["message"] == "Invalid call status"
        call.refresh_from_db()
        assert call.call_status == Call.Status.READY
        assert call.version == 1
        assert broadcaster.published == []

    def test_requires_status(self, api_client, make_call):
        call = make_call()
        res = api_client.patch(_call_url(call.pk), {"priority": "high"}, format="json")
        assert res.status_code == HTTPStatus.BAD_REQUEST
        assert _error_fields(res) == {"call_status"}

    def test_normalizes_case_and_broadcasts(
        self, api_client, make_call, broadcaster, django_capture_on_commit_callbacks
    ):
        call = make_call()
        with django_capture_on_commit_callbacks(execute=True):
            res = api_client.patch(
                _call_url(call.pk),
                {"call_status": "ON_AIR", "priority": "High"},
                format="json",
            )

        assert res.status_code == HTTPStatus.OK
        assert res.data["call_status"] == "on_air"
        assert res.data["priority"] == "high"
        assert res.data["version"] == 2
        updated = broadcaster.events("call:updated")
        assert updated[0]["id"] == str(call.pk)
        assert updated[0]["call_status"] == "on_air"

    def test_unknown_call_is_a_persistence_failure(self, api_client, db):
        res = api_client.patch(
            _call_url(uuid.uuid4()), {"call_status": "dropped"}, format="json"
        )
        assert res.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
        assert res.json() == {
            "error": "Failed to update call",
            "code": "persistence_error",
        }

    def test_stale_version_conflicts(self, api_client, make_call, broadcaster):
        call = make_call()
        Call.objects.filter(pk=call.pk).update(version=3)

        res = api_client.patch(
            _call_url(call.pk),
            {"call_status": "dropped", "version": 2},
            format="json",
        )
        assert res.status_code == HTTPStatus.CONFLICT
        assert res.json()["code"] == "conflict"
        call.refresh_from_db()
        assert call.call_status == Call.Status.READY
        assert call.version == 3

    def test_if_match_header(self, api_client, make_call):
        call = make_call()
        res = api_client.patch(
            _call_url(call.pk),
            {"call_status": "dropped"},
            format="json",
            HTTP_IF_MATCH='"1"',
        )
        assert res.status_code == HTTPStatus.OK
        assert res.data["version"] == 2

    def test_bad_if_match_header(self, api_client, make_call):
        call = make_call()
        res = api_client.patch(
            _call_url(call.pk),
            {"call_status": "dropped"},
            format="json",
            HTTP_IF_MATCH='"v1"',
        )
        assert res.status_code == HTTPStatus.BAD_REQUEST

    def test_if_match_wildcard_matches_any_version(self, api_client, make_call):
        call = make_call()
        Call.objects.filter(pk=call.pk).update(version=5)

        res = api_client.patch(
            _call_url(call.pk),
            {"call_status": "dropped"},
            format="json",
            HTTP_IF_MATCH="*",
        )
        assert res.status_code == HTTPStatus.OK
        assert res.data["version"] == 6

    def test_malformed_id_is_a_persistence_failure(self, api_client, db):
        res = api_client.patch(
            _call_url("a" * 36), {"call_status": "dropped"}, format="json"
        )
        assert res.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
        assert res["Content-Type"] == "application/json"
        assert res.json() == {
            "error": "Failed to update call",
            "code": "persistence_error",
        }

    def test_second_call_on_air_conflicts(self, api_client, make_call, broadcaster):
        on_air = make_call(call_status=Call.Status.ON_AIR)
        waiting = make_call()

        res = api_client.patch(
            _call_url(waiting.pk), {"call_status": "on_air"}, format="json"
        )
        assert res.status_code == HTTPStatus.CONFLICT
        assert res.json()["code"] == "on_air_conflict"
        waiting.refresh_from_db()
        on_air.refresh_from_db()
        assert waiting.call_status == Call.Status.READY
        assert on_air.call_status == Call.Status.ON_AIR

    def test_lenient_transitions_by_default(self, api_client, make_call):
        call = make_call(call_status=Call.Status.COMPLETED)
        res = api_client.patch(_call_url(call.pk), {"call_status": "ready"}, format="json")
        assert res.status_code == HTTPStatus.OK
        assert res.data["call_status"] == "ready"

    def test_strict_transitions(self, api_client, make_call, settings):
        settings.CALLS_ENFORCE_TRANSITIONS = True
        call = make_call()

        res = api_client.patch(
            _call_url(call.pk), {"call_status": "completed"}, format="json"
        )
        assert res.status_code == HTTPStatus.CONFLICT
        assert res.json()["code"] == "invalid_transition"

        res = api_client.patch(_call_url(call.pk), {"call_status": "on_air"}, format="json")
        assert res.status_code == HTTPStatus.OK
        res = api_client.patch(
            _call_url(call.pk), {"call_status": "completed"}, format="json"
        )
        assert res.status_code == HTTPStatus.OK


@pytest.mark.django_db
class TestDeleteCall:
    def test_delete_broadcasts_id(
        self, api_client, make_call, broadcaster, django_capture_on_commit_callbacks
    ):
        call = make_call()
        with django_capture_on_commit_callbacks(execute=True):
            res = api_client.delete(_call_url(call.pk))

        assert res.status_code == HTTPStatus.NO_CONTENT
        assert not Call.objects.filter(pk=call.pk).exists()
        assert broadcaster.events("call:deleted") == [{"id": str(call.pk)}]

    def test_delete_unknown_call(self, api_client, db, broadcaster):
        res = api_client.delete(_call_url(uuid.uuid4()))
        assert res.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
        assert res.json()["error"] == "Failed to delete call"

    def test_delete_malformed_id(self, api_client, make_call, broadcaster):
        call = make_call()
        res = api_client.delete(_call_url("a" * 36))
        assert res.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
        assert res["Content-Type"] == "application/json"
        assert res.json()["error"] == "Failed to delete call"
        assert Call.objects.filter(pk=call.pk).exists()
