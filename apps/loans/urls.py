"""
EMI calculator URL configuration.
"""

from django.urls import path

from apps.loans.views import (
    AmortizationScheduleView,
    EMICalculatorView,
    LoanPresetListView,
)

urlpatterns = [
    path('emi-calculator', EMICalculatorView.as_view(), name='emi-calculator'),
    path(
        'emi-calculator/presets',
        LoanPresetListView.as_view(),
        name='emi-presets',
    ),
    path(
        'emi-calculator/schedule',
        AmortizationScheduleView.as_view(),
        name='emi-schedule',
    ),
]
