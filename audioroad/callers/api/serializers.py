from rest_framework import serializers

from audioroad.callers.models import Caller
from audioroad.core.fields import LowercaseChoiceField

PHONE_PATTERN = r"^[\d\s\-\+\(\)]+$"


class CallerSerializer(serializers.ModelSerializer):
    """Read/write serializer for callers.

    Field rules mirror the screener intake form: every violation is reported
    in one response.
    """

    name = serializers.CharField(
        min_length=2,
        max_length=100,
        error_messages={
            "required": "Name is required",
            "blank": "Name is required",
            "min_length": "Name must be between 2 and 100 characters",
            "max_length": "Name must be between 2 and 100 characters",
        },
    )
    phone = serializers.RegexField(
        PHONE_PATTERN,
        max_length=32,
        error_messages={
            "required": "Phone number is required",
            "blank": "Phone number is required",
            "invalid": "Invalid phone number format",
            "max_length": "Invalid phone number format",
        },
    )
    location = serializers.CharField(
        max_length=100,
        required=False,
        allow_blank=True,
        error_messages={"max_length": "Location must not exceed 100 characters"},
    )
    email = serializers.EmailField(
        required=False,
        allow_blank=True,
        error_messages={"invalid": "Invalid email format"},
    )
    caller_type = LowercaseChoiceField(
        choices=Caller.Type.choices,
        required=False,
        default=Caller.Type.NEW,
        error_messages={"invalid_choice": "Invalid caller type"},
    )
    notes = serializers.CharField(
        max_length=500,
        required=False,
        allow_blank=True,
        error_messages={"max_length": "Notes must not exceed 500 characters"},
    )
    status = LowercaseChoiceField(
        choices=Caller.Status.choices,
        required=False,
        default=Caller.Status.ACTIVE,
        error_messages={"invalid_choice": "Invalid caller status"},
    )

    class Meta:
        model = Caller
        fields = (
            "id",
            "name",
            "phone",
            "location",
            "email",
            "caller_type",
            "notes",
            "status",
            "created_at",
            "updated_at",
        )
        read_only_fields = ("id", "created_at", "updated_at")


class CallerSummarySerializer(serializers.ModelSerializer):
    """The caller columns embedded in call payloads."""

    class Meta:
        model = Caller
        fields = ("name", "phone", "location")
