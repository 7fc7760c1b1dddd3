"""
Listing price serializers for Pro Housing.
"""

from rest_framework import serializers


class ParsePriceSerializer(serializers.Serializer):
    """Serializer for a price parsing request."""

    price = serializers.CharField(
        max_length=100,
        required=True,
        help_text='Listing price string, e.g. "50 LAKH" or "22cr - 27.6cr".',
    )
    threshold = serializers.CharField(
        max_length=100,
        required=False,
        help_text="Optional price to compare against.",
    )


class ParsedPriceResponseSerializer(serializers.Serializer):
    """Serializer for a price parsing response."""

    price = serializers.CharField()
    value = serializers.DecimalField(max_digits=None, decimal_places=2)
    is_range = serializers.BooleanField()
    min_value = serializers.DecimalField(max_digits=None, decimal_places=2)
    max_value = serializers.DecimalField(max_digits=None, decimal_places=2)
    formatted = serializers.CharField()
    meets_threshold = serializers.BooleanField(allow_null=True)
