from django.contrib import admin

from audioroad.calls import models


@admin.register(models.Call)
class CallAdmin(admin.ModelAdmin):
    list_display = ["id", "caller", "topic", "priority", "call_status", "created_at"]
    search_fields = ["topic", "screener_name", "caller__name", "caller__phone"]
    list_filter = ["call_status", "priority", "created_at"]
    list_select_related = ["caller"]
