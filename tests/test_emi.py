"""
Tests for the EMI calculation, repayment schedule and loan presets.
"""

from datetime import date
from decimal import Decimal

from django.test import SimpleTestCase

from apps.core.exceptions import UnknownPresetError
from apps.loans.services import (
    LOAN_PRESETS,
    LoanResult,
    build_amortization_schedule,
    compute_loan,
    get_preset,
    project_payments,
)


class ComputeLoanTests(SimpleTestCase):
    """Test the compound interest EMI formula with Decimal."""

    def test_home_loan_regression(self):
        """50L property, 20% down, 8.5%, 20 years → ~₹34,713."""
        result = compute_loan(5000000, 20, Decimal('8.5'), 20)
        self.assertIsInstance(result.monthly_payment, Decimal)
        self.assertEqual(result.principal, Decimal('4000000'))
        self.assertEqual(result.down_payment, Decimal('1000000'))
        self.assertEqual(result.number_of_months, 240)
        self.assertLessEqual(abs(result.monthly_payment - Decimal('34713')), 1)

    def test_manual_verification_15_percent(self):
        """Manually verified: P=500000, r=15%/12=0.0125, n=24."""
        result = compute_loan(500000, 0, 15, 2, quantum=Decimal('0.01'))
        self.assertEqual(result.monthly_payment, Decimal('24243.32'))

    def test_rounds_to_whole_rupees_by_default(self):
        result = compute_loan(Decimal('333333'), Decimal('7.77'), Decimal('9.1'), 3)
        for amount in (result.monthly_payment, result.total_payable, result.total_interest):
            self.assertEqual(amount, amount.quantize(Decimal('1')))

    def test_zero_interest(self):
        """0% interest → straight-line repayment."""
        result = compute_loan(1200000, 0, 0, 10)
        self.assertEqual(result.monthly_payment, Decimal('10000'))
        self.assertEqual(result.total_payable, Decimal('1200000'))
        self.assertEqual(result.total_interest, Decimal('0'))

    def test_zero_interest_with_down_payment(self):
        result = compute_loan(1500000, 20, 0, 5)
        self.assertEqual(result.principal, Decimal('1200000'))
        self.assertEqual(result.monthly_payment, Decimal('20000'))

    def test_full_down_payment(self):
        """100% down payment leaves nothing to borrow."""
        result = compute_loan(5000000, 100, Decimal('8.5'), 20)
        self.assertEqual(result.principal, Decimal('0'))
        self.assertEqual(result.monthly_payment, Decimal('0'))
        self.assertEqual(result.total_payable, Decimal('0'))
        self.assertEqual(result.total_interest, Decimal('0'))

    def test_totals_are_consistent(self):
        """total_payable = principal + total_interest within a rupee."""
        cases = [
            (5000000, 20, Decimal('8.5'), 20),
            (800000, 15, Decimal('12.5'), 7),
            (1000000, 0, 15, 5),
            (Decimal('2750000.50'), Decimal('12.5'), Decimal('9.15'), 17),
        ]
        for case in cases:
            result = compute_loan(*case)
            self.assertLessEqual(
                abs(result.total_payable - (result.principal + result.total_interest)),
                1,
            )
            # Totals come from the unrounded EMI
            self.assertLessEqual(
                abs(result.total_payable - result.monthly_payment * result.number_of_months),
                Decimal(result.number_of_months) / 2 + 1,
            )
            self.assertGreaterEqual(result.total_interest, 0)

    def test_higher_rate_costs_more(self):
        results = [compute_loan(5000000, 20, rate, 20) for rate in (6, 8, 10, 12)]
        for lower, higher in zip(results, results[1:]):
            self.assertGreater(higher.monthly_payment, lower.monthly_payment)
            self.assertGreater(higher.total_interest, lower.total_interest)

    def test_custom_quantum(self):
        result = compute_loan(5000000, 20, Decimal('8.5'), 20, quantum='0.01')
        self.assertEqual(result.monthly_payment, result.monthly_payment.quantize(Decimal('0.01')))
        self.assertEqual(result.monthly_payment.as_tuple().exponent, -2)

    def test_invalid_quantum_falls_back_to_rupees(self):
        result = compute_loan(5000000, 20, Decimal('8.5'), 20, quantum=0)
        self.assertEqual(result.monthly_payment, result.monthly_payment.quantize(Decimal('1')))

    def test_non_power_of_ten_quantum_falls_back_to_rupees(self):
        for quantum in ('0.05', '10', '2'):
            result = compute_loan(5000000, 20, Decimal('8.5'), 20, quantum=quantum)
            self.assertEqual(result.monthly_payment.as_tuple().exponent, 0)

    def test_quantum_with_trailing_zeros_is_canonical(self):
        result = compute_loan(5000000, 20, Decimal('8.5'), 20, quantum='0.10')
        self.assertEqual(result.monthly_payment.as_tuple().exponent, -1)

    def test_accepts_int_float_and_string_inputs(self):
        result1 = compute_loan(100000, 10, 12, 1)
        result2 = compute_loan(100000.0, 10.0, 12.0, 1)
        result3 = compute_loan('100000', '10', '12', '1')
        self.assertEqual(result1, result2)
        self.assertEqual(result1, result3)

    def test_negative_property_value_is_zeroed(self):
        self.assertEqual(compute_loan(-100, 20, Decimal('8.5'), 20), LoanResult.zero())

    def test_zero_property_value_is_zeroed(self):
        self.assertEqual(compute_loan(0, 20, Decimal('8.5'), 20), LoanResult.zero())

    def test_zero_tenure_is_zeroed(self):
        self.assertEqual(compute_loan(5000000, 20, Decimal('8.5'), 0), LoanResult.zero())

    def test_fractional_tenure_is_zeroed(self):
        self.assertEqual(compute_loan(5000000, 20, Decimal('8.5'), Decimal('1.55')), LoanResult.zero())
        self.assertEqual(compute_loan(5000000, 20, Decimal('8.5'), '0.5'), LoanResult.zero())

    def test_whole_tenure_written_as_decimal(self):
        result = compute_loan(5000000, 20, Decimal('8.5'), Decimal('20.0'))
        self.assertEqual(result.number_of_months, 240)

    def test_out_of_range_inputs_are_zeroed(self):
        self.assertEqual(compute_loan(Decimal('1e30'), 20, Decimal('8.5'), 20), LoanResult.zero())
        self.assertEqual(compute_loan(Decimal('1e15'), Decimal('-1e15'), Decimal('8.5'), 20), LoanResult.zero())
        self.assertEqual(compute_loan(5000000, 20, Decimal('8.5'), Decimal('1e15')), LoanResult.zero())

    def test_negative_rate_is_zeroed(self):
        self.assertEqual(compute_loan(5000000, 20, -1, 20), LoanResult.zero())

    def test_non_finite_and_garbage_inputs_are_zeroed(self):
        for bad in (float('nan'), float('inf'), 'abc', None):
            self.assertEqual(compute_loan(bad, 20, Decimal('8.5'), 20), LoanResult.zero())
            self.assertEqual(compute_loan(5000000, 20, Decimal('8.5'), bad), LoanResult.zero())


class AmortizationScheduleTests(SimpleTestCase):
    """Tests for the month-by-month repayment schedule."""

    def test_schedule_length_and_closing_balance(self):
        rows = build_amortization_schedule(120000, 0, 12, 1)
        self.assertEqual(len(rows), 12)
        self.assertEqual([row.month for row in rows], list(range(1, 13)))
        self.assertEqual(rows[-1].balance, Decimal('0'))

    def test_first_month_split(self):
        rows = build_amortization_schedule(120000, 0, 12, 1)
        emi = compute_loan(120000, 0, 12, 1, quantum='0.01').monthly_payment
        self.assertEqual(rows[0].interest_component, Decimal('1200.00'))
        self.assertEqual(rows[0].payment, emi)
        self.assertEqual(rows[0].principal_component, emi - Decimal('1200.00'))

    def test_principal_components_repay_the_loan(self):
        rows = build_amortization_schedule(5000000, 20, Decimal('8.5'), 20)
        repaid = sum(row.principal_component for row in rows)
        self.assertLessEqual(abs(repaid - Decimal('4000000')), Decimal('2.00'))

    def test_balance_never_increases(self):
        rows = build_amortization_schedule(800000, 15, Decimal('12.5'), 7)
        balances = [row.balance for row in rows]
        self.assertEqual(balances, sorted(balances, reverse=True))

    def test_zero_rate_has_no_interest(self):
        rows = build_amortization_schedule(120000, 0, 0, 1)
        self.assertTrue(all(row.interest_component == 0 for row in rows))
        self.assertEqual(rows[0].payment, Decimal('10000.00'))

    def test_payment_dates_follow_start_date(self):
        rows = build_amortization_schedule(120000, 0, 12, 1, start_date=date(2024, 1, 31))
        self.assertEqual(rows[0].payment_date, date(2024, 2, 29))
        self.assertEqual(rows[1].payment_date, date(2024, 3, 31))
        self.assertEqual(rows[-1].payment_date, date(2025, 1, 31))

    def test_no_dates_without_start_date(self):
        rows = build_amortization_schedule(120000, 0, 12, 1)
        self.assertIsNone(rows[0].payment_date)

    def test_invalid_inputs_give_empty_schedule(self):
        self.assertEqual(build_amortization_schedule(-1, 0, 12, 1), [])
        self.assertEqual(build_amortization_schedule(120000, 100, 12, 1), [])
        self.assertEqual(build_amortization_schedule(120000, 0, 12, 0), [])
        self.assertEqual(build_amortization_schedule(120000, 0, 12, '1.5'), [])
        self.assertEqual(build_amortization_schedule(Decimal('1e30'), 0, 12, 1), [])

    def test_unrepresentable_schedule_is_empty(self):
        self.assertEqual(build_amortization_schedule(Decimal('1e15'), Decimal('-1e15'), 12, 1), [])


class ProjectPaymentsTests(SimpleTestCase):

    def test_default_projection_years(self):
        projections = project_payments(Decimal('34713'))
        self.assertEqual(projections, {
            1: Decimal('416556'),
            5: Decimal('2082780'),
            10: Decimal('4165560'),
        })

    def test_custom_years(self):
        self.assertEqual(project_payments(1000, years=(2,)), {2: Decimal('24000')})


class LoanPresetTests(SimpleTestCase):
    """Tests for the calculator presets."""

    def test_presets_available(self):
        self.assertEqual(list(LOAN_PRESETS), ['home', 'car', 'general'])

    def test_home_defaults(self):
        preset = get_preset('home')
        self.assertEqual(preset.default_amount, Decimal('5000000'))
        self.assertEqual(preset.default_down_payment, Decimal('20'))
        self.assertEqual(preset.default_interest, Decimal('8.5'))
        self.assertEqual(preset.default_tenure, 20)

    def test_unknown_preset(self):
        with self.assertRaises(UnknownPresetError):
            get_preset('boat')
        with self.assertRaises(KeyError):
            get_preset('boat')

    def test_clamp_pulls_values_into_range(self):
        preset = get_preset('home')
        clamped = preset.clamp(Decimal('500'), Decimal('5'), Decimal('20'), 40)
        self.assertEqual(clamped, (Decimal('1000000'), Decimal('10'), Decimal('12.0'), 30))

    def test_clamp_keeps_values_in_range(self):
        preset = get_preset('car')
        values = (Decimal('800000'), Decimal('15'), Decimal('12.5'), 7)
        self.assertEqual(preset.clamp(*values), values)
