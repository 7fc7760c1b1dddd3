"""
EMI calculator serializers for Pro Housing.
"""

from decimal import Decimal

from rest_framework import serializers

from apps.loans.services import LOAN_PRESETS, get_preset

LOAN_FIELDS = (
    'property_value',
    'down_payment_percent',
    'annual_interest_rate',
    'tenure_years',
)


class EMICalculatorSerializer(serializers.Serializer):
    """
    Serializer for an EMI calculation request.

    With ``loan_type`` set, missing fields take the preset's defaults and
    every value is clamped into the preset's slider range. Without it,
    all four loan fields are required.
    """

    loan_type = serializers.ChoiceField(
        choices=list(LOAN_PRESETS),
        required=False,
        help_text="Preset to take defaults and bounds from.",
    )
    property_value = serializers.DecimalField(
        max_digits=15,
        decimal_places=2,
        min_value=Decimal('0.01'),
        required=False,
        help_text="Total price of the property.",
    )
    down_payment_percent = serializers.DecimalField(
        max_digits=5,
        decimal_places=2,
        min_value=Decimal('0'),
        max_value=Decimal('100'),
        required=False,
        help_text="Share of the price paid upfront (%).",
    )
    annual_interest_rate = serializers.DecimalField(
        max_digits=5,
        decimal_places=2,
        min_value=Decimal('0'),
        max_value=Decimal('100'),
        required=False,
        help_text="Nominal annual interest rate (%).",
    )
    tenure_years = serializers.IntegerField(
        min_value=1,
        max_value=50,
        required=False,
        help_text="Loan tenure in years.",
    )

    def validate(self, attrs):
        """Apply preset defaults and bounds, or require every loan field."""
        loan_type = attrs.get('loan_type')

        if loan_type:
            preset = get_preset(loan_type)
            clamped = preset.clamp(
                attrs.get('property_value', preset.default_amount),
                attrs.get('down_payment_percent', preset.default_down_payment),
                attrs.get('annual_interest_rate', preset.default_interest),
                attrs.get('tenure_years', preset.default_tenure),
            )
            attrs.update(zip(LOAN_FIELDS, clamped))
            return attrs

        missing = {
            field: ['This field is required when loan_type is not given.']
            for field in LOAN_FIELDS
            if field not in attrs
        }
        if missing:
            raise serializers.ValidationError(missing)

        return attrs


class AmortizationScheduleSerializer(EMICalculatorSerializer):
    """Serializer for a repayment schedule request."""

    start_date = serializers.DateField(
        required=False,
        help_text="Disbursement date; payments fall monthly after it.",
    )


class PaymentProjectionSerializer(serializers.Serializer):
    """Cumulative EMI outflow after a number of years."""

    years = serializers.IntegerField()
    amount = serializers.DecimalField(max_digits=None, decimal_places=0)
    formatted = serializers.CharField()


class EMIResultSerializer(serializers.Serializer):
    """Serializer for an EMI calculation response."""

    loan_type = serializers.CharField(allow_null=True)
    property_value = serializers.DecimalField(max_digits=15, decimal_places=2)
    down_payment_percent = serializers.DecimalField(max_digits=5, decimal_places=2)
    annual_interest_rate = serializers.DecimalField(max_digits=5, decimal_places=2)
    tenure_years = serializers.IntegerField()
    number_of_months = serializers.IntegerField()
    down_payment = serializers.DecimalField(max_digits=None, decimal_places=2)
    principal = serializers.DecimalField(max_digits=None, decimal_places=2)
    monthly_payment = serializers.DecimalField(max_digits=None, decimal_places=2)
    total_payable = serializers.DecimalField(max_digits=None, decimal_places=2)
    total_interest = serializers.DecimalField(max_digits=None, decimal_places=2)
    formatted = serializers.DictField(child=serializers.CharField())
    projections = PaymentProjectionSerializer(many=True)


class AmortizationRowSerializer(serializers.Serializer):
    """Serializer for one month of a repayment schedule."""

    month = serializers.IntegerField()
    payment_date = serializers.DateField(allow_null=True)
    payment = serializers.DecimalField(max_digits=None, decimal_places=2)
    principal_component = serializers.DecimalField(max_digits=None, decimal_places=2)
    interest_component = serializers.DecimalField(max_digits=None, decimal_places=2)
    balance = serializers.DecimalField(max_digits=None, decimal_places=2)


class LoanPresetSerializer(serializers.Serializer):
    """Serializer for a loan preset and its slider bounds."""

    key = serializers.CharField()
    title = serializers.CharField()
    description = serializers.CharField()
    amount_label = serializers.CharField()
    down_payment_label = serializers.CharField()
    default_amount = serializers.DecimalField(max_digits=15, decimal_places=2)
    default_down_payment = serializers.DecimalField(max_digits=5, decimal_places=2)
    default_interest = serializers.DecimalField(max_digits=5, decimal_places=2)
    default_tenure = serializers.IntegerField()
    min_amount = serializers.DecimalField(max_digits=15, decimal_places=2)
    max_amount = serializers.DecimalField(max_digits=15, decimal_places=2)
    min_down_payment = serializers.DecimalField(max_digits=5, decimal_places=2)
    max_down_payment = serializers.DecimalField(max_digits=5, decimal_places=2)
    min_interest = serializers.DecimalField(max_digits=5, decimal_places=2)
    max_interest = serializers.DecimalField(max_digits=5, decimal_places=2)
    min_tenure = serializers.IntegerField()
    max_tenure = serializers.IntegerField()
