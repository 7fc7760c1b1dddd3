"""
Listing price URL configuration.
"""

from django.urls import path

from apps.pricing.views import NormalizeListingPricesView, ParsePriceView

urlpatterns = [
    path('price/parse', ParsePriceView.as_view(), name='price-parse'),
    path(
        'price/normalize-listings',
        NormalizeListingPricesView.as_view(),
        name='price-normalize-listings',
    ),
]
