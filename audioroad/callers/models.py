import uuid

from django.db import models
from django.utils.translation import gettext_lazy as _


class Caller(models.Model):
    """A person who has called into the show, tracked across many calls."""

    class Type(models.TextChoices):
        NEW = "new", _("New")
        REGULAR = "regular", _("Regular")
        VIP = "vip", _("VIP")

    class Status(models.TextChoices):
        ACTIVE = "active", _("Active")
        BLOCKED = "blocked", _("Blocked")
        INACTIVE = "inactive", _("Inactive")

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100)
    phone = models.CharField(max_length=32)
    location = models.CharField(max_length=100, blank=True, default="")
    email = models.EmailField(blank=True, default="")
    caller_type = models.CharField(
        max_length=16, choices=Type.choices, default=Type.NEW
    )
    notes = models.TextField(blank=True, default="")
    status = models.CharField(
        max_length=16, choices=Status.choices, default=Status.ACTIVE
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "callers"
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.name} ({self.phone})"
