from django.contrib import admin

from audioroad.callers import models


@admin.register(models.Caller)
class CallerAdmin(admin.ModelAdmin):
    list_display = ["id", "name", "phone", "location", "caller_type", "status"]
    search_fields = ["name", "phone", "email", "location", "notes"]
    list_filter = ["caller_type", "status", "created_at"]
