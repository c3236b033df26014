from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class CallersConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "audioroad.callers"
    verbose_name = _("Callers")
