"""
Custom exceptions and DRF exception handler for Pro Housing.
"""

import logging

from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class InvalidUnitError(ValueError):
    """Raised when a value is not one of the supported area units."""

    def __init__(self, unit):
        self.unit = unit
        super().__init__(f"Unsupported area unit: {unit!r}.")


class UnknownPresetError(KeyError):
    """Raised when a loan preset key does not exist."""

    def __init__(self, key):
        self.key = key
        super().__init__(key)

    def __str__(self):
        return f"Unknown loan preset: {self.key!r}."


class ListingNormalizationError(Exception):
    """Raised when a listing spreadsheet cannot be normalized."""

    pass


def custom_exception_handler(exc, context):
    """
    Custom DRF exception handler that returns consistent error responses.

    Handles all DRF exceptions, maps calculator contract violations to
    400 responses and adds logging for server errors.
    """
    if isinstance(exc, (InvalidUnitError, UnknownPresetError)):
        exc = ValidationError({'errors': [str(exc)]})

    response = exception_handler(exc, context)

    if response is not None:
        error_data = {
            'error': True,
            'status_code': response.status_code,
            'detail': response.data,
        }
        response.data = error_data
    else:
        # Unhandled exceptions: log and return 500
        logger.exception(
            "Unhandled exception in %s",
            context.get('view', 'unknown'),
            exc_info=exc,
        )
        response = Response(
            {
                'error': True,
                'status_code': 500,
                'detail': 'An unexpected error occurred. Please try again later.',
            },
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return response
