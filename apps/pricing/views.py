"""
Listing price views for Pro Housing.
"""

import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.pricing.serializers import ParsedPriceResponseSerializer, ParsePriceSerializer
from apps.pricing.services import (
    extract_price_range_values,
    format_price_to_string,
    is_price_greater_than_or_equal,
    is_price_range,
    parse_price_to_number,
)
from apps.pricing.tasks import normalize_listing_prices

logger = logging.getLogger(__name__)


class ParsePriceView(APIView):
    """
    POST /api/price/parse

    Interpret a listing price string as rupee amounts.
    """

    def post(self, request):
        """Handle price parsing."""
        serializer = ParsePriceSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        price = serializer.validated_data['price']
        threshold = serializer.validated_data.get('threshold')

        value = parse_price_to_number(price)
        min_value, max_value = extract_price_range_values(price)

        response_data = {
            'price': price,
            'value': value,
            'is_range': is_price_range(price),
            'min_value': min_value,
            'max_value': max_value,
            'formatted': format_price_to_string(value),
            'meets_threshold': (
                is_price_greater_than_or_equal(price, threshold)
                if threshold else None
            ),
        }

        return Response(
            ParsedPriceResponseSerializer(response_data).data,
            status=status.HTTP_200_OK,
        )


class NormalizeListingPricesView(APIView):
    """
    POST /api/price/normalize-listings

    Trigger background normalization of the listings spreadsheet
    via a Celery task.
    """

    def post(self, request):
        """Trigger the normalization task."""
        task = normalize_listing_prices.delay()

        logger.info("Listing price normalization triggered, task=%s", task.id)

        return Response(
            {
                'message': 'Listing price normalization has been triggered.',
                'task_id': task.id,
            },
            status=status.HTTP_202_ACCEPTED,
        )
