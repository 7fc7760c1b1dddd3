"""
Area unit conversion service.

Converts listing areas between the units used across Indian real estate.
Every conversion scales linearly through square feet as the base unit.
"""

import logging
from decimal import Decimal
from enum import Enum
from typing import Dict, List

from apps.core.exceptions import InvalidUnitError
from apps.core.utils import ZERO, group_indian, quantize, to_decimal

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal('0.01')

# Plausible listing sizes: 50 sq ft up to 1000 acres
MIN_LISTING_SQ_FEET = Decimal('50')
MAX_LISTING_SQ_FEET = Decimal('43560000')


class AreaUnit(str, Enum):
    """Supported area units, keyed by their API value."""

    SQ_FEET = 'sq_feet'
    SQ_METER = 'sq_meter'
    SQ_YARD = 'sq_yard'
    ACRE = 'acre'
    HECTARE = 'hectare'
    BIGHA = 'bigha'
    KATHA = 'katha'
    GUNTA = 'gunta'
    CENT = 'cent'

    @property
    def label(self) -> str:
        return UNIT_LABELS[self]

    @property
    def full_name(self) -> str:
        return UNIT_FULL_NAMES[self]

    @property
    def factor(self) -> Decimal:
        """Square feet in one of this unit."""
        return CONVERSION_TO_SQ_FEET[self]


UNIT_LABELS = {
    AreaUnit.SQ_FEET: 'Sq Ft',
    AreaUnit.SQ_METER: 'Sq M',
    AreaUnit.SQ_YARD: 'Sq Yd',
    AreaUnit.ACRE: 'Acre',
    AreaUnit.HECTARE: 'Hectare',
    AreaUnit.BIGHA: 'Bigha',
    AreaUnit.KATHA: 'Katha',
    AreaUnit.GUNTA: 'Gunta',
    AreaUnit.CENT: 'Cent',
}

UNIT_FULL_NAMES = {
    AreaUnit.SQ_FEET: 'Square Feet',
    AreaUnit.SQ_METER: 'Square Meter',
    AreaUnit.SQ_YARD: 'Square Yard',
    AreaUnit.ACRE: 'Acre',
    AreaUnit.HECTARE: 'Hectare',
    AreaUnit.BIGHA: 'Bigha',
    AreaUnit.KATHA: 'Katha',
    AreaUnit.GUNTA: 'Gunta',
    AreaUnit.CENT: 'Cent',
}

# Bigha and katha vary by region; these are the values listings use.
CONVERSION_TO_SQ_FEET = {
    AreaUnit.SQ_FEET: Decimal('1'),
    AreaUnit.SQ_METER: Decimal('10.764'),
    AreaUnit.SQ_YARD: Decimal('9'),
    AreaUnit.ACRE: Decimal('43560'),
    AreaUnit.HECTARE: Decimal('107639.1'),
    AreaUnit.BIGHA: Decimal('26909.8'),
    AreaUnit.KATHA: Decimal('1361.25'),
    AreaUnit.GUNTA: Decimal('1089'),
    AreaUnit.CENT: Decimal('435.6'),
}

POPULAR_UNITS = (
    AreaUnit.SQ_FEET,
    AreaUnit.SQ_METER,
    AreaUnit.SQ_YARD,
    AreaUnit.ACRE,
    AreaUnit.BIGHA,
    AreaUnit.GUNTA,
)


def coerce_unit(unit) -> AreaUnit:
    """
    Resolve an AreaUnit member or its string value.

    Raises:
        InvalidUnitError: If ``unit`` is not a supported unit.
    """
    try:
        return AreaUnit(unit)
    except ValueError:
        raise InvalidUnitError(unit) from None


def convert_area(value, from_unit, to_unit) -> Decimal:
    """
    Convert an area between two units.

    Args:
        value: Area magnitude in ``from_unit``.
        from_unit: Source unit (AreaUnit or its value).
        to_unit: Target unit (AreaUnit or its value).

    Returns:
        The converted magnitude rounded to 2 decimal places. Same-unit
        conversions return the input unrounded. Missing, non-numeric or
        non-positive values return 0.

    Raises:
        InvalidUnitError: If either unit is not supported.
    """
    from_unit = coerce_unit(from_unit)
    to_unit = coerce_unit(to_unit)

    amount = to_decimal(value)
    if amount is None or amount <= 0:
        return ZERO
    if from_unit is to_unit:
        return amount

    sq_feet = amount * from_unit.factor
    return quantize(sq_feet / to_unit.factor, TWO_PLACES)


def get_all_conversions(value, original_unit=AreaUnit.SQ_FEET) -> Dict[AreaUnit, Decimal]:
    """Convert ``value`` into every supported unit, in declaration order."""
    original_unit = coerce_unit(original_unit)
    return {
        unit: convert_area(value, original_unit, unit)
        for unit in AreaUnit
    }


def format_area(value, unit, show_full_name: bool = False) -> str:
    """
    Format an area for display, e.g. ``'1,20,000 Sq Ft'``.

    Returns ``'N/A'`` for missing or non-positive values.
    """
    unit = coerce_unit(unit)
    amount = to_decimal(value)
    if amount is None or amount <= 0:
        return 'N/A'

    unit_label = unit.full_name if show_full_name else unit.label
    return f'{group_indian(amount)} {unit_label}'


def is_valid_area(value, unit) -> bool:
    """Whether an area is a plausible size for a property listing."""
    unit = coerce_unit(unit)
    amount = to_decimal(value)
    if amount is None or amount <= 0:
        return False

    sq_feet = convert_area(amount, unit, AreaUnit.SQ_FEET)
    if not MIN_LISTING_SQ_FEET <= sq_feet <= MAX_LISTING_SQ_FEET:
        logger.debug("Area %s %s (%s sq ft) outside listing bounds", amount, unit.value, sq_feet)
        return False
    return True


def get_optimal_unit(sq_feet) -> AreaUnit:
    """Pick the unit that reads most naturally for an area in square feet."""
    sq_feet = to_decimal(sq_feet, ZERO)

    if sq_feet >= 43560:
        return AreaUnit.ACRE
    if sq_feet >= 10000:
        return AreaUnit.BIGHA
    if sq_feet >= 1000:
        return AreaUnit.SQ_FEET
    if sq_feet >= 100:
        return AreaUnit.SQ_METER
    return AreaUnit.SQ_FEET


def get_popular_units() -> List[AreaUnit]:
    return list(POPULAR_UNITS)
