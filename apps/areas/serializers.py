"""
Area converter serializers for Pro Housing.
"""

from rest_framework import serializers

from apps.areas.services import AreaUnit

UNIT_CHOICES = [unit.value for unit in AreaUnit]


class ConvertAreaSerializer(serializers.Serializer):
    """Serializer for a single conversion request."""

    value = serializers.DecimalField(
        max_digits=20,
        decimal_places=4,
        required=True,
        help_text="Area magnitude in from_unit.",
    )
    from_unit = serializers.ChoiceField(
        choices=UNIT_CHOICES,
        required=True,
        help_text="Unit the value is expressed in.",
    )
    to_unit = serializers.ChoiceField(
        choices=UNIT_CHOICES,
        required=True,
        help_text="Unit to convert into.",
    )
    show_full_name = serializers.BooleanField(
        default=False,
        help_text="Use the full unit name in the formatted string.",
    )


class AreaConversionsSerializer(serializers.Serializer):
    """Serializer for an all-units conversion request."""

    value = serializers.DecimalField(
        max_digits=20,
        decimal_places=4,
        required=True,
        help_text="Area magnitude in unit.",
    )
    unit = serializers.ChoiceField(
        choices=UNIT_CHOICES,
        default=AreaUnit.SQ_FEET.value,
        help_text="Unit the value is expressed in.",
    )


class ConvertedAreaSerializer(serializers.Serializer):
    """An area expressed in one unit."""

    unit = serializers.CharField()
    label = serializers.CharField()
    full_name = serializers.CharField()
    value = serializers.DecimalField(max_digits=None, decimal_places=None)
    formatted = serializers.CharField()


class ConvertAreaResponseSerializer(serializers.Serializer):
    """Serializer for a single conversion response."""

    value = serializers.DecimalField(max_digits=None, decimal_places=4)
    from_unit = serializers.CharField()
    to_unit = serializers.CharField()
    result = serializers.DecimalField(max_digits=None, decimal_places=None)
    formatted = serializers.CharField()


class AreaConversionsResponseSerializer(serializers.Serializer):
    """Serializer for an all-units conversion response."""

    value = serializers.DecimalField(max_digits=None, decimal_places=4)
    unit = serializers.CharField()
    is_valid = serializers.BooleanField()
    optimal_unit = serializers.CharField()
    conversions = ConvertedAreaSerializer(many=True)


class AreaUnitSerializer(serializers.Serializer):
    """Serializer for a supported unit and its display names."""

    unit = serializers.CharField(source='value')
    label = serializers.CharField()
    full_name = serializers.CharField()
    sq_feet_factor = serializers.DecimalField(
        source='factor', max_digits=None, decimal_places=None,
    )
    popular = serializers.SerializerMethodField()

    def get_popular(self, obj):
        return obj in self.context.get('popular_units', ())
