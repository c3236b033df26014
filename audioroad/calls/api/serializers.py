from rest_framework import serializers

from audioroad.callers.api.serializers import CallerSummarySerializer
from audioroad.callers.models import Caller
from audioroad.calls.models import Call
from audioroad.core.fields import LowercaseChoiceField

TEXT_MAX_LEN = 1000


class CallSerializer(serializers.ModelSerializer):
    """Read serializer: the call plus the caller summary under ``callers``."""

    caller_id = serializers.UUIDField(read_only=True)
    callers = CallerSummarySerializer(source="caller", read_only=True)

    class Meta:
        model = Call
        fields = (
            "id",
            "caller_id",
            "topic",
            "screener_notes",
            "talking_points",
            "priority",
            "screener_name",
            "call_status",
            "version",
            "created_at",
            "updated_at",
            "callers",
        )
        read_only_fields = fields


class CallFieldsMixin(serializers.Serializer):
    """Length and choice rules shared by create and update."""

    topic = serializers.CharField(
        min_length=3,
        max_length=200,
        error_messages={
            "required": "Topic is required",
            "blank": "Topic is required",
            "min_length": "Topic must be between 3 and 200 characters",
            "max_length": "Topic must be between 3 and 200 characters",
        },
    )
    screener_notes = serializers.CharField(
        max_length=TEXT_MAX_LEN,
        required=False,
        allow_blank=True,
        error_messages={
            "max_length": "Screener notes must not exceed 1000 characters",
        },
    )
    talking_points = serializers.CharField(
        max_length=TEXT_MAX_LEN,
        required=False,
        allow_blank=True,
        error_messages={
            "max_length": "Talking points must not exceed 1000 characters",
        },
    )
    screener_name = serializers.CharField(
        min_length=2,
        max_length=100,
        error_messages={
            "required": "Screener name is required",
            "blank": "Screener name is required",
            "min_length": "Screener name must be between 2 and 100 characters",
            "max_length": "Screener name must be between 2 and 100 characters",
        },
    )
    priority = LowercaseChoiceField(
        choices=Call.Priority.choices,
        required=False,
        error_messages={"invalid_choice": "Invalid priority level"},
    )


class CallCreateSerializer(CallFieldsMixin):
    """Screener intake. ``call_status`` is not accepted here: new calls are ready."""

    caller_id = serializers.UUIDField(
        error_messages={
            "required": "Caller ID is required",
            "null": "Caller ID is required",
            "invalid": "Invalid caller ID format",
        },
    )
    priority = LowercaseChoiceField(
        choices=Call.Priority.choices,
        required=False,
        default=Call.Priority.MEDIUM,
        error_messages={"invalid_choice": "Invalid priority level"},
    )

    def validate_caller_id(self, value):
        if not Caller.objects.filter(pk=value).exists():
            msg = "Caller does not exist"
            raise serializers.ValidationError(msg)
        return value


class CallUpdateSerializer(CallFieldsMixin):
    """Host/screener edits. Any of the five statuses is accepted as a value."""

    call_status = LowercaseChoiceField(
        choices=Call.Status.choices,
        error_messages={
            "required": "Call status is required",
            "null": "Call status is required",
            "invalid_choice": "Invalid call status",
        },
    )
    version = serializers.IntegerField(min_value=1, required=False, write_only=True)

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # Only call_status is mandatory on an update.
        for name, field in self.fields.items():
            if name != "call_status":
                field.required = False
