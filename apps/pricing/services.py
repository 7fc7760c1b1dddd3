"""
Listing price service.

Listing prices are entered as display strings such as ``"33 CR"``,
``"50 LAKH"`` or a range like ``"22cr - 27.6cr"``. These helpers turn them
into rupee amounts for comparison and filtering, and back again.
"""

import logging
import re
from decimal import Decimal
from typing import Dict, Optional, Tuple

from apps.core.utils import CRORE, LAKH, ZERO, leading_decimal, quantize, to_decimal

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal('0.01')

# Splits on any run of '-', 'T' or 'O', which covers "A - B" and "A TO B"
_RANGE_SEPARATOR = re.compile(r'[-TO]+')


def parse_price_to_number(price_string) -> Decimal:
    """
    Convert a price string to a rupee amount.

    Ranges return the average of both ends.

    Examples:
        parse_price_to_number('33 CR') → 330000000
        parse_price_to_number('50 lakh') → 5000000
        parse_price_to_number('22cr - 27.6cr') → 248000000
        parse_price_to_number('n/a') → 0
    """
    if not price_string or not isinstance(price_string, str):
        return ZERO

    normalized = price_string.strip().upper()

    if '-' in normalized or 'TO' in normalized:
        return parse_price_range_to_number(normalized)

    return parse_single_price_to_number(normalized)


def parse_price_range_to_number(price_range) -> Decimal:
    """
    Average of a two-ended price range, e.g. ``"35LAKH-66LAKH"``.

    Returns 0 unless the range has exactly two parseable, non-zero ends.
    """
    low, high = _split_range(price_range)
    if not low or not high:
        return ZERO
    return (low + high) / 2


def parse_single_price_to_number(price_string) -> Decimal:
    """Convert one ``CR``, ``LAKH`` or plain-number price to rupees."""
    if not price_string or not isinstance(price_string, str):
        return ZERO

    normalized = price_string.strip().upper()

    if 'CR' in normalized:
        multiplier = CRORE
        normalized = normalized.replace('CR', '', 1)
    elif 'LAKH' in normalized:
        multiplier = LAKH
        normalized = normalized.replace('LAKH', '', 1)
    else:
        multiplier = Decimal('1')

    value = leading_decimal(normalized)
    if value is None:
        return ZERO
    return value * multiplier


def format_price_to_string(value) -> str:
    """
    Convert a rupee amount back to a listing price string.

    Amounts of a crore or more are shown in crores, everything else in
    lakhs. Amounts under a lakh are kept as-is with the lakh suffix.

    Examples:
        format_price_to_string(330000000) → '33.00 CR'
        format_price_to_string(5000000) → '50.00 LAKH'
    """
    amount = to_decimal(value)
    if not amount:
        return '0 LAKH'

    if amount >= CRORE:
        return f'{quantize(amount / CRORE, TWO_PLACES)} CR'
    if amount >= LAKH:
        return f'{quantize(amount / LAKH, TWO_PLACES)} LAKH'
    return f'{quantize(amount, TWO_PLACES)} LAKH'


def is_price_range(price_string) -> bool:
    if not price_string or not isinstance(price_string, str):
        return False
    return '-' in price_string or 'to' in price_string.lower()


def extract_price_range_values(price_range) -> Tuple[Decimal, Decimal]:
    """
    Return ``(min, max)`` rupee amounts for a price or price range.

    A single price returns the same amount twice.
    """
    if not is_price_range(price_range):
        single_value = parse_price_to_number(price_range)
        return single_value, single_value

    return _split_range(price_range)


def is_price_greater_than_or_equal(price_string, threshold) -> bool:
    return parse_price_to_number(price_string) >= parse_price_to_number(threshold)


def build_price_filter(min_price, max_price, field: str = 'price') -> Optional[Dict[str, Decimal]]:
    """
    Build Django ORM range lookups from user-entered price bounds.

    Bounds that are empty or parse to zero are left out.

    Returns:
        e.g. ``{'price__gte': Decimal('5000000'), 'price__lte': ...}``,
        or None when neither bound applies.
    """
    lookups = {}

    if min_price:
        min_numeric = parse_price_to_number(min_price)
        if min_numeric > 0:
            lookups[f'{field}__gte'] = min_numeric

    if max_price:
        max_numeric = parse_price_to_number(max_price)
        if max_numeric > 0:
            lookups[f'{field}__lte'] = max_numeric

    return lookups or None


def _split_range(price_range) -> Tuple[Decimal, Decimal]:
    if not price_range or not isinstance(price_range, str):
        return ZERO, ZERO

    parts = [
        part.strip()
        for part in _RANGE_SEPARATOR.split(price_range.strip().upper())
    ]
    if len(parts) != 2:
        logger.debug("Price range %r does not have two ends", price_range)
        return ZERO, ZERO

    return (
        parse_single_price_to_number(parts[0]),
        parse_single_price_to_number(parts[1]),
    )
