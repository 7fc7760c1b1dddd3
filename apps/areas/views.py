"""
Area converter views for Pro Housing.

Views are thin; conversion logic lives in the service layer.
"""

import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.areas.serializers import (
    AreaConversionsResponseSerializer,
    AreaConversionsSerializer,
    AreaUnitSerializer,
    ConvertAreaResponseSerializer,
    ConvertAreaSerializer,
)
from apps.areas.services import (
    AreaUnit,
    convert_area,
    format_area,
    get_all_conversions,
    get_optimal_unit,
    get_popular_units,
    is_valid_area,
)

logger = logging.getLogger(__name__)


class AreaUnitListView(APIView):
    """
    GET /api/area/units

    List supported units with labels and square-feet factors.
    """

    def get(self, request):
        """Handle listing units."""
        serializer = AreaUnitSerializer(
            list(AreaUnit),
            many=True,
            context={'popular_units': get_popular_units()},
        )
        return Response(serializer.data, status=status.HTTP_200_OK)


class ConvertAreaView(APIView):
    """
    POST /api/area/convert

    Convert an area from one unit to another.
    """

    def post(self, request):
        """Handle a single conversion."""
        serializer = ConvertAreaSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = convert_area(data['value'], data['from_unit'], data['to_unit'])

        response_data = {
            'value': data['value'],
            'from_unit': data['from_unit'],
            'to_unit': data['to_unit'],
            'result': result,
            'formatted': format_area(
                result, data['to_unit'], show_full_name=data['show_full_name'],
            ),
        }

        return Response(
            ConvertAreaResponseSerializer(response_data).data,
            status=status.HTTP_200_OK,
        )


class AreaConversionsView(APIView):
    """
    POST /api/area/conversions

    Express an area in every supported unit at once.
    """

    def post(self, request):
        """Handle an all-units conversion."""
        serializer = AreaConversionsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        value = serializer.validated_data['value']
        unit = AreaUnit(serializer.validated_data['unit'])

        conversions = get_all_conversions(value, unit)

        response_data = {
            'value': value,
            'unit': unit.value,
            'is_valid': is_valid_area(value, unit),
            'optimal_unit': get_optimal_unit(conversions[AreaUnit.SQ_FEET]).value,
            'conversions': [
                {
                    'unit': target.value,
                    'label': target.label,
                    'full_name': target.full_name,
                    'value': converted,
                    'formatted': format_area(converted, target),
                }
                for target, converted in conversions.items()
            ],
        }

        logger.debug("Converted %s %s into %d units", value, unit.value, len(conversions))

        return Response(
            AreaConversionsResponseSerializer(response_data).data,
            status=status.HTTP_200_OK,
        )
