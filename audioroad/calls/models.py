import uuid

from django.db import models
from django.db.models import Case
from django.db.models import IntegerField
from django.db.models import Q
from django.db.models import Value
from django.db.models import When
from django.utils.translation import gettext_lazy as _


class CallQuerySet(models.QuerySet):
    def with_priority_rank(self):
        return self.annotate(
            priority_rank=Case(
                When(priority=Call.Priority.HIGH, then=Value(3)),
                When(priority=Call.Priority.MEDIUM, then=Value(2)),
                When(priority=Call.Priority.LOW, then=Value(1)),
                default=Value(0),
                output_field=IntegerField(),
            )
        )

    def ready_queue(self):
        """Ready calls, highest priority first, then first come first served."""

        return (
            self.filter(call_status=Call.Status.READY)
            .with_priority_rank()
            .select_related("caller")
            .order_by("-priority_rank", "created_at")
        )


class Call(models.Model):
    """One request by a caller to speak on air."""

    class Priority(models.TextChoices):
        LOW = "low", _("Low")
        MEDIUM = "medium", _("Medium")
        HIGH = "high", _("High")

    class Status(models.TextChoices):
        WAITING = "waiting", _("Waiting")
        READY = "ready", _("Ready")
        ON_AIR = "on_air", _("On Air")
        COMPLETED = "completed", _("Completed")
        DROPPED = "dropped", _("Dropped")

    # Host/screener workflow. Only enforced when CALLS_ENFORCE_TRANSITIONS is on.
    TRANSITIONS = {
        Status.WAITING: {Status.READY, Status.DROPPED},
        Status.READY: {Status.ON_AIR, Status.DROPPED},
        Status.ON_AIR: {Status.COMPLETED, Status.DROPPED},
        Status.COMPLETED: set(),
        Status.DROPPED: set(),
    }

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    caller = models.ForeignKey(
        "callers.Caller", on_delete=models.PROTECT, related_name="calls"
    )
    topic = models.CharField(max_length=200)
    screener_notes = models.TextField(blank=True, default="")
    talking_points = models.TextField(blank=True, default="")
    priority = models.CharField(
        max_length=16, choices=Priority.choices, default=Priority.MEDIUM
    )
    screener_name = models.CharField(max_length=100)
    call_status = models.CharField(
        max_length=16, choices=Status.choices, default=Status.WAITING
    )
    version = models.PositiveIntegerField(default=1)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = CallQuerySet.as_manager()

    class Meta:
        db_table = "calls"
        ordering = ["created_at"]
        indexes = [
            models.Index(
                fields=["call_status", "created_at"], name="calls_status_created_idx"
            ),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["call_status"],
                condition=Q(call_status="on_air"),
                name="calls_single_on_air",
            ),
        ]

    def __str__(self):
        return f"{self.topic} [{self.call_status}]"

    def can_transition_to(self, status: str) -> bool:
        if status == self.call_status:
            return True
        return status in self.TRANSITIONS.get(self.call_status, set())
