from django.core.signals import setting_changed
from django.dispatch import receiver

from audioroad.realtime.broadcaster import get_broadcaster

REALTIME_SETTINGS = {"REALTIME_BROADCASTER", "REALTIME_EVENT_ROLES"}


@receiver(setting_changed)
def reset_broadcaster(sender, setting, **kwargs):
    if setting in REALTIME_SETTINGS:
        get_broadcaster.cache_clear()
