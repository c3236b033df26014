"""Calls API endpoints: screener intake, the host's ready queue, status changes."""

from drf_spectacular.utils import OpenApiParameter
from drf_spectacular.utils import extend_schema
from rest_framework import mixins
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from audioroad.calls.api.serializers import CallCreateSerializer
from audioroad.calls.api.serializers import CallSerializer
from audioroad.calls.api.serializers import CallUpdateSerializer
from audioroad.calls.models import Call
from audioroad.calls.services import create_call
from audioroad.calls.services import delete_call
from audioroad.calls.services import update_call
from audioroad.realtime.broadcaster import get_broadcaster


def _version_from_if_match(request) -> int | None:
    """Read ``If-Match: "3"`` (weak or strong) as an expected version.

    ``If-Match: *`` matches any version, same as sending none.
    """

    raw = request.headers.get("If-Match")
    if not raw:
        return None
    value = raw.strip().removeprefix("W/").strip('"')
    if value == "*":
        return None
    if not value.isdigit():
        raise ValidationError({"version": ["Invalid If-Match header"]})
    return int(value)


class CallViewSet(
    mixins.ListModelMixin,
    GenericViewSet,
):
    """Calls queued by screeners and worked by hosts.

    - list: every call, optional ``?call_status=`` filter
    - ready: the ready queue (priority desc, then oldest first)
    - create: queue a new call as ``ready``
    - partial_update: change status/priority/notes
    - destroy: remove a call
    """

    serializer_class = CallSerializer
    pagination_class = None
    lookup_value_regex = "[0-9a-fA-F-]{36}"
    http_method_names = ["get", "post", "patch", "delete", "head", "options"]
    broadcaster = None

    def get_broadcaster(self):
        return self.broadcaster or get_broadcaster()

    def get_queryset(self):
        queryset = Call.objects.select_related("caller").order_by("created_at")
        call_status = self.request.query_params.get("call_status")
        if call_status:
            call_status = call_status.strip().lower()
            if call_status not in Call.Status.values:
                raise ValidationError({"call_status": ["Invalid call status"]})
            queryset = queryset.filter(call_status=call_status)
        return queryset

    @extend_schema(
        parameters=[
            OpenApiParameter("call_status", str, enum=Call.Status.values),
        ],
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @action(detail=False, methods=["get"], url_path="ready")
    def ready(self, request):
        queryset = Call.objects.ready_queue()
        return Response(self.get_serializer(queryset, many=True).data)

    @extend_schema(request=CallCreateSerializer, responses={201: CallSerializer})
    def create(self, request, *args, **kwargs):
        serializer = CallCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        call = create_call(
            serializer.validated_data, broadcaster=self.get_broadcaster()
        )
        out = CallSerializer(call, context=self.get_serializer_context()).data
        return Response(out, status=status.HTTP_201_CREATED)

    @extend_schema(request=CallUpdateSerializer, responses={200: CallSerializer})
    def partial_update(self, request, *args, **kwargs):
        serializer = CallUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        changes = dict(serializer.validated_data)
        expected_version = changes.pop("version", None)
        if expected_version is None:
            expected_version = _version_from_if_match(request)

        call = update_call(
            kwargs[self.lookup_field],
            changes,
            broadcaster=self.get_broadcaster(),
            expected_version=expected_version,
        )
        out = CallSerializer(call, context=self.get_serializer_context()).data
        return Response(out)

    def destroy(self, request, *args, **kwargs):
        delete_call(kwargs[self.lookup_field], broadcaster=self.get_broadcaster())
        return Response(status=status.HTTP_204_NO_CONTENT)
