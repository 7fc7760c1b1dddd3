"""
EMI calculator service layer.

Contains the fixed-rate amortization calculation, the month-by-month
repayment schedule and the loan presets offered by the calculator page.
Everything here is a pure function of its inputs; views only validate
input and serialize the results.
"""

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, DecimalException
from typing import Dict, List, Optional, Tuple

from dateutil.relativedelta import relativedelta

from apps.core.exceptions import UnknownPresetError
from apps.core.utils import ZERO, quantize, to_decimal

logger = logging.getLogger(__name__)

HUNDRED = Decimal('100')
MONTHS_PER_YEAR = 12

# Whole rupees, matching the calculator's display convention
DEFAULT_QUANTUM = Decimal('1')
SCHEDULE_QUANTUM = Decimal('0.01')

PROJECTION_YEARS = (1, 5, 10)


@dataclass(frozen=True)
class LoanParameters:
    """Validated calculator inputs plus the figures derived from them."""

    property_value: Decimal
    down_payment_percent: Decimal
    annual_interest_rate_percent: Decimal
    tenure_years: int

    @classmethod
    def parse(
        cls,
        property_value,
        down_payment_percent,
        annual_interest_rate_percent,
        tenure_years,
    ) -> Optional['LoanParameters']:
        """
        Build parameters from raw input, or return None if unusable.

        Non-numeric, non-finite or non-positive property values and
        tenures, fractional tenures and negative interest rates are
        rejected. The down payment percentage is passed through unclamped.
        """
        property_value = to_decimal(property_value)
        down_payment_percent = to_decimal(down_payment_percent)
        annual_rate = to_decimal(annual_interest_rate_percent)
        tenure_years = to_decimal(tenure_years)

        if None in (property_value, down_payment_percent, annual_rate, tenure_years):
            return None
        if property_value <= 0 or tenure_years <= 0 or annual_rate < 0:
            return None
        if tenure_years != tenure_years.to_integral_value():
            return None

        return cls(
            property_value=property_value,
            down_payment_percent=down_payment_percent,
            annual_interest_rate_percent=annual_rate,
            tenure_years=int(tenure_years),
        )

    @property
    def down_payment(self) -> Decimal:
        return self.property_value * self.down_payment_percent / HUNDRED

    @property
    def principal(self) -> Decimal:
        return self.property_value - self.down_payment

    @property
    def monthly_rate(self) -> Decimal:
        return self.annual_interest_rate_percent / MONTHS_PER_YEAR / HUNDRED

    @property
    def number_of_months(self) -> int:
        return self.tenure_years * MONTHS_PER_YEAR


@dataclass(frozen=True)
class LoanResult:
    """Rounded outcome of an EMI calculation."""

    monthly_payment: Decimal
    total_payable: Decimal
    total_interest: Decimal
    principal: Decimal = ZERO
    down_payment: Decimal = ZERO
    number_of_months: int = 0

    @classmethod
    def zero(cls) -> 'LoanResult':
        return cls(
            monthly_payment=ZERO,
            total_payable=ZERO,
            total_interest=ZERO,
        )


@dataclass(frozen=True)
class AmortizationRow:
    """One month of a repayment schedule."""

    month: int
    payment: Decimal
    principal_component: Decimal
    interest_component: Decimal
    balance: Decimal
    payment_date: Optional[date] = None


def calculate_monthly_payment(
    principal: Decimal,
    monthly_rate: Decimal,
    number_of_months: int,
) -> Decimal:
    """
    Unrounded EMI using the compound interest formula.

    EMI = P × r × (1+r)^n / ((1+r)^n - 1)

    A zero rate falls back to straight-line repayment, P / n.
    """
    if monthly_rate == 0:
        return principal / Decimal(number_of_months)

    power_term = (Decimal('1') + monthly_rate) ** number_of_months
    return principal * monthly_rate * power_term / (power_term - Decimal('1'))


def compute_loan(
    property_value,
    down_payment_percent,
    annual_interest_rate_percent,
    tenure_years,
    quantum=DEFAULT_QUANTUM,
) -> LoanResult:
    """
    Calculate the monthly EMI and aggregate loan cost.

    Args:
        property_value: Total price of the property.
        down_payment_percent: Share of the price paid upfront (0-100).
        annual_interest_rate_percent: Nominal annual rate, e.g. 8.5.
        tenure_years: Loan duration in years.
        quantum: Rounding unit for the returned amounts (whole rupees
            by default).

    Returns:
        LoanResult with monthly_payment, total_payable and total_interest
        rounded half-up to ``quantum``. Totals are derived from the
        unrounded EMI. Unusable input yields LoanResult.zero() rather
        than an exception.
    """
    params = LoanParameters.parse(
        property_value,
        down_payment_percent,
        annual_interest_rate_percent,
        tenure_years,
    )
    if params is None:
        logger.debug(
            "EMI inputs not computable (value=%r, down=%r, rate=%r, tenure=%r)",
            property_value,
            down_payment_percent,
            annual_interest_rate_percent,
            tenure_years,
        )
        return LoanResult.zero()

    quantum = _rounding_quantum(quantum)
    principal = params.principal
    months = params.number_of_months

    try:
        emi = calculate_monthly_payment(principal, params.monthly_rate, months)
        total_payable = emi * months
        total_interest = total_payable - principal

        return LoanResult(
            monthly_payment=quantize(emi, quantum),
            total_payable=quantize(total_payable, quantum),
            total_interest=quantize(total_interest, quantum),
            principal=principal,
            down_payment=params.down_payment,
            number_of_months=months,
        )
    except DecimalException:
        logger.debug("EMI for %s outside the representable range", params)
        return LoanResult.zero()


def _rounding_quantum(quantum) -> Decimal:
    """
    Canonical power-of-ten rounding unit no coarser than a rupee.

    ``1``, ``0.1``, ``0.01`` ... are accepted; anything else falls back to
    whole rupees.
    """
    quantum = to_decimal(quantum)
    if quantum is None or quantum <= 0 or quantum > 1:
        return DEFAULT_QUANTUM

    canonical = Decimal(1).scaleb(quantum.adjusted())
    if quantum != canonical:
        return DEFAULT_QUANTUM
    return canonical


def build_amortization_schedule(
    property_value,
    down_payment_percent,
    annual_interest_rate_percent,
    tenure_years,
    start_date: Optional[date] = None,
) -> List[AmortizationRow]:
    """
    Break the loan into monthly interest and principal repayments.

    Each row carries the outstanding balance after that month's payment.
    The final row settles whatever balance remains so the schedule always
    closes at zero. With ``start_date``, payment N falls N calendar months
    after it.

    Returns an empty list when the inputs are not computable or there is
    nothing to borrow.
    """
    params = LoanParameters.parse(
        property_value,
        down_payment_percent,
        annual_interest_rate_percent,
        tenure_years,
    )
    if params is None or params.principal <= 0:
        return []

    months = params.number_of_months
    monthly_rate = params.monthly_rate

    try:
        emi = calculate_monthly_payment(params.principal, monthly_rate, months)

        balance = params.principal
        rows = []
        for month in range(1, months + 1):
            interest = balance * monthly_rate
            principal_part = emi - interest
            if month == months:
                principal_part = balance
            balance -= principal_part

            rows.append(AmortizationRow(
                month=month,
                payment=quantize(principal_part + interest, SCHEDULE_QUANTUM),
                principal_component=quantize(principal_part, SCHEDULE_QUANTUM),
                interest_component=quantize(interest, SCHEDULE_QUANTUM),
                balance=quantize(balance, SCHEDULE_QUANTUM),
                payment_date=(
                    start_date + relativedelta(months=month)
                    if start_date else None
                ),
            ))
    except DecimalException:
        logger.debug("Schedule for %s outside the representable range", params)
        return []

    logger.debug(
        "Built %d-month schedule for principal %s at %s%%",
        months,
        params.principal,
        params.annual_interest_rate_percent,
    )
    return rows


def project_payments(
    monthly_payment,
    years: Tuple[int, ...] = PROJECTION_YEARS,
) -> Dict[int, Decimal]:
    """Cumulative EMI outflow after each number of ``years``."""
    monthly_payment = to_decimal(monthly_payment, ZERO)
    return {
        span: monthly_payment * MONTHS_PER_YEAR * span
        for span in years
    }


@dataclass(frozen=True)
class LoanPreset:
    """Calculator defaults and slider bounds for one kind of loan."""

    key: str
    title: str
    description: str
    amount_label: str
    down_payment_label: str
    default_amount: Decimal
    default_down_payment: Decimal
    default_interest: Decimal
    default_tenure: int
    min_amount: Decimal
    max_amount: Decimal
    min_down_payment: Decimal
    max_down_payment: Decimal
    min_interest: Decimal
    max_interest: Decimal
    min_tenure: int
    max_tenure: int

    def clamp(
        self,
        property_value: Decimal,
        down_payment_percent: Decimal,
        annual_interest_rate_percent: Decimal,
        tenure_years: int,
    ) -> Tuple[Decimal, Decimal, Decimal, int]:
        """Pull each input into this preset's allowed range."""
        return (
            _clamp(property_value, self.min_amount, self.max_amount),
            _clamp(down_payment_percent, self.min_down_payment, self.max_down_payment),
            _clamp(annual_interest_rate_percent, self.min_interest, self.max_interest),
            _clamp(tenure_years, self.min_tenure, self.max_tenure),
        )


def _clamp(value, low, high):
    return max(low, min(high, value))


LOAN_PRESETS: Dict[str, LoanPreset] = {
    preset.key: preset
    for preset in (
        LoanPreset(
            key='home',
            title='Home Loan EMI',
            description='Calculate your home loan EMI with current market rates',
            amount_label='Property Value',
            down_payment_label='Down Payment',
            default_amount=Decimal('5000000'),
            default_down_payment=Decimal('20'),
            default_interest=Decimal('8.5'),
            default_tenure=20,
            min_amount=Decimal('1000000'),
            max_amount=Decimal('100000000'),
            min_down_payment=Decimal('10'),
            max_down_payment=Decimal('50'),
            min_interest=Decimal('6.5'),
            max_interest=Decimal('12.0'),
            min_tenure=5,
            max_tenure=30,
        ),
        LoanPreset(
            key='car',
            title='Car Loan EMI',
            description='Calculate your car loan EMI with competitive rates',
            amount_label='Car Value',
            down_payment_label='Down Payment',
            default_amount=Decimal('800000'),
            default_down_payment=Decimal('15'),
            default_interest=Decimal('12.5'),
            default_tenure=7,
            min_amount=Decimal('300000'),
            max_amount=Decimal('10000000'),
            min_down_payment=Decimal('10'),
            max_down_payment=Decimal('40'),
            min_interest=Decimal('8.0'),
            max_interest=Decimal('18.0'),
            min_tenure=1,
            max_tenure=8,
        ),
        LoanPreset(
            key='general',
            title='Personal Loan EMI',
            description=(
                'Calculate EMI for personal loans, business loans, '
                'or any other loan'
            ),
            amount_label='Loan Amount',
            down_payment_label='Processing Fee',
            default_amount=Decimal('1000000'),
            default_down_payment=Decimal('0'),
            default_interest=Decimal('15.0'),
            default_tenure=5,
            min_amount=Decimal('50000'),
            max_amount=Decimal('5000000'),
            min_down_payment=Decimal('0'),
            max_down_payment=Decimal('5'),
            min_interest=Decimal('10.0'),
            max_interest=Decimal('24.0'),
            min_tenure=1,
            max_tenure=7,
        ),
    )
}


def get_preset(key: str) -> LoanPreset:
    """
    Look up a loan preset by key.

    Raises:
        UnknownPresetError: If no preset has that key.
    """
    try:
        return LOAN_PRESETS[key]
    except KeyError:
        raise UnknownPresetError(key) from None
