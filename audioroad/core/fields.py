from rest_framework import serializers


class LowercaseChoiceField(serializers.ChoiceField):
    """ChoiceField that accepts any letter case, e.g. ``"ON_AIR"`` → ``"on_air"``."""

    def to_internal_value(self, data):
        if isinstance(data, str):
            data = data.strip().lower()
        return super().to_internal_value(data)
