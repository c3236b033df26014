"""Callers API endpoints."""

from rest_framework import mixins
from rest_framework import status
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from audioroad.callers.api.serializers import CallerSerializer
from audioroad.callers.models import Caller
from audioroad.callers.services import create_caller
from audioroad.callers.services import update_caller
from audioroad.realtime.broadcaster import get_broadcaster


class CallerViewSet(
    mixins.ListModelMixin,
    GenericViewSet,
):
    """Callers registered by the screeners.

    - list: every caller, newest first (unpaginated)
    - create: validate, persist, broadcast ``caller:created``
    - partial_update: validate, persist, broadcast ``caller:updated``
    """

    queryset = Caller.objects.order_by("-created_at")
    serializer_class = CallerSerializer
    pagination_class = None
    lookup_value_regex = "[0-9a-fA-F-]{36}"
    http_method_names = ["get", "post", "patch", "head", "options"]
    broadcaster = None

    def get_broadcaster(self):
        return self.broadcaster or get_broadcaster()

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        caller = create_caller(
            serializer.validated_data, broadcaster=self.get_broadcaster()
        )
        out = self.get_serializer(caller).data
        return Response(out, status=status.HTTP_201_CREATED)

    def partial_update(self, request, *args, **kwargs):
        caller = self.get_object()
        serializer = self.get_serializer(caller, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        caller = update_caller(
            caller, serializer.validated_data, broadcaster=self.get_broadcaster()
        )
        return Response(self.get_serializer(caller).data)
