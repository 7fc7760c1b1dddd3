"""
EMI calculator views for Pro Housing.

Views are thin; calculation logic lives in the service layer.
"""

import logging

from django.conf import settings
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.core.utils import format_currency_full, format_currency_short
from apps.loans.serializers import (
    AmortizationRowSerializer,
    AmortizationScheduleSerializer,
    EMICalculatorSerializer,
    EMIResultSerializer,
    LoanPresetSerializer,
)
from apps.loans.services import (
    LOAN_PRESETS,
    build_amortization_schedule,
    compute_loan,
    project_payments,
)

logger = logging.getLogger(__name__)


class LoanPresetListView(APIView):
    """
    GET /api/emi-calculator/presets

    List the loan presets with their defaults and slider bounds.
    """

    def get(self, request):
        """Handle listing presets."""
        serializer = LoanPresetSerializer(list(LOAN_PRESETS.values()), many=True)
        return Response(serializer.data, status=status.HTTP_200_OK)


class EMICalculatorView(APIView):
    """
    POST /api/emi-calculator

    Calculate the monthly EMI, total payable and total interest.
    """

    def post(self, request):
        """Handle an EMI calculation."""
        serializer = EMICalculatorSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = compute_loan(
            property_value=data['property_value'],
            down_payment_percent=data['down_payment_percent'],
            annual_interest_rate_percent=data['annual_interest_rate'],
            tenure_years=data['tenure_years'],
            quantum=settings.LOAN_ROUNDING_QUANTUM,
        )

        projections = [
            {
                'years': years,
                'amount': amount,
                'formatted': format_currency_short(amount),
            }
            for years, amount in project_payments(result.monthly_payment).items()
        ]

        response_data = {
            'loan_type': data.get('loan_type'),
            'property_value': data['property_value'],
            'down_payment_percent': data['down_payment_percent'],
            'annual_interest_rate': data['annual_interest_rate'],
            'tenure_years': data['tenure_years'],
            'number_of_months': result.number_of_months,
            'down_payment': result.down_payment,
            'principal': result.principal,
            'monthly_payment': result.monthly_payment,
            'total_payable': result.total_payable,
            'total_interest': result.total_interest,
            'formatted': {
                'property_value': format_currency_short(data['property_value']),
                'down_payment': format_currency_short(result.down_payment),
                'principal': format_currency_short(result.principal),
                'monthly_payment': format_currency_full(result.monthly_payment),
                'total_payable': format_currency_full(result.total_payable),
                'total_interest': format_currency_full(result.total_interest),
            },
            'projections': projections,
        }

        logger.info(
            "EMI calculated: principal=%s, rate=%s%%, tenure=%dy, emi=%s",
            result.principal,
            data['annual_interest_rate'],
            data['tenure_years'],
            result.monthly_payment,
        )

        return Response(
            EMIResultSerializer(response_data).data,
            status=status.HTTP_200_OK,
        )


class AmortizationScheduleView(APIView):
    """
    POST /api/emi-calculator/schedule

    Month-by-month repayment schedule for a loan.
    """

    def post(self, request):
        """Handle a schedule request."""
        serializer = AmortizationScheduleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        rows = build_amortization_schedule(
            property_value=data['property_value'],
            down_payment_percent=data['down_payment_percent'],
            annual_interest_rate_percent=data['annual_interest_rate'],
            tenure_years=data['tenure_years'],
            start_date=data.get('start_date'),
        )

        return Response(
            {
                'number_of_months': len(rows),
                'schedule': AmortizationRowSerializer(rows, many=True).data,
            },
            status=status.HTTP_200_OK,
        )
