from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class RealtimeConfig(AppConfig):
    name = "audioroad.realtime"
    verbose_name = _("Realtime")

    def ready(self):
        import audioroad.realtime.signals  # noqa: F401, PLC0415
