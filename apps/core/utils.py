"""
Core utility functions for Pro Housing.

Contains the numeric coercion and Indian-locale formatting helpers shared
by the calculator apps. All money and area arithmetic uses Python's
Decimal for precision.
"""

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, getcontext
from typing import Optional

# Set high precision for intermediate financial calculations
getcontext().prec = 28

ZERO = Decimal('0')
RUPEE = '₹'

CRORE = Decimal('10000000')
LAKH = Decimal('100000')
THOUSAND = Decimal('1000')

# Largest magnitude accepted as input; every derived amount must fit the
# 28-digit context once quantized
MAX_MAGNITUDE = Decimal('1e15')

_LEADING_NUMBER = re.compile(r'^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?')


def to_decimal(value, default: Optional[Decimal] = None) -> Optional[Decimal]:
    """
    Coerce a raw numeric input to a finite Decimal.

    Accepts Decimal, int, float or numeric strings. Anything that is
    missing, non-numeric, NaN, infinite or larger in magnitude than
    ``MAX_MAGNITUDE`` returns ``default`` instead of raising, so callers
    can fail soft on incomplete or absurd user input.
    """
    if value is None or isinstance(value, bool):
        return default
    try:
        result = Decimal(str(value).strip())
    except (InvalidOperation, ValueError, TypeError):
        return default
    if not result.is_finite() or abs(result) > MAX_MAGNITUDE:
        return default
    return result


def leading_decimal(text: str) -> Optional[Decimal]:
    """
    Parse the numeric prefix of a string, ignoring whatever follows.

    ``"27.6 CR"`` → Decimal('27.6'), ``"abc"`` → None.
    """
    match = _LEADING_NUMBER.match(text.strip())
    if not match:
        return None
    return to_decimal(match.group(0))


def quantize(value: Decimal, quantum: Decimal) -> Decimal:
    """Round half-up to ``quantum``, normalising negative zero to zero."""
    result = value.quantize(quantum, rounding=ROUND_HALF_UP)
    return result if result else ZERO


def group_indian(value, max_fraction_digits: int = 3) -> str:
    """
    Format a number with Indian digit grouping (en-IN).

    The last three integer digits form one group and the rest are grouped
    in pairs. Fraction digits are rounded to ``max_fraction_digits`` and
    trailing zeros are dropped.

    Examples:
        group_indian(1234567.891) → '12,34,567.891'
        group_indian(34713) → '34,713'
        group_indian(92.9) → '92.9'
    """
    amount = to_decimal(value, ZERO)
    amount = quantize(amount, Decimal(1).scaleb(-max_fraction_digits))

    sign = '-' if amount < 0 else ''
    whole, _, fraction = f'{abs(amount):f}'.partition('.')
    fraction = fraction.rstrip('0')

    if len(whole) > 3:
        head, tail = whole[:-3], whole[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        whole = ','.join(groups + [tail])

    if fraction:
        return f'{sign}{whole}.{fraction}'
    return f'{sign}{whole}'


def format_currency_short(amount) -> str:
    """
    Abbreviate a rupee amount for compact display.

    Examples:
        format_currency_short(50000000) → '₹5.0Cr'
        format_currency_short(4000000) → '₹40.0L'
        format_currency_short(34713) → '₹35K'
        format_currency_short(950) → '₹950'
    """
    amount = to_decimal(amount, ZERO)

    if amount >= CRORE:
        return f'{RUPEE}{quantize(amount / CRORE, Decimal("0.1"))}Cr'
    if amount >= LAKH:
        return f'{RUPEE}{quantize(amount / LAKH, Decimal("0.1"))}L'
    if amount >= THOUSAND:
        return f'{RUPEE}{quantize(amount / THOUSAND, Decimal("1"))}K'
    return f'{RUPEE}{group_indian(amount)}'


def format_currency_full(amount) -> str:
    """Render a whole-rupee INR string, e.g. ``'₹34,713'``."""
    return f'{RUPEE}{group_indian(amount, max_fraction_digits=0)}'
