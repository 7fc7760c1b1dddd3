"""
Tests for listing price parsing, formatting and range filters.
"""

from decimal import Decimal
from unittest import mock

from django.test import SimpleTestCase
from rest_framework.test import APIClient

from apps.pricing.services import (
    build_price_filter,
    extract_price_range_values,
    format_price_to_string,
    is_price_greater_than_or_equal,
    is_price_range,
    parse_price_range_to_number,
    parse_price_to_number,
    parse_single_price_to_number,
)


class ParsePriceTests(SimpleTestCase):
    """Test conversion of listing price strings to rupees."""

    def test_crore(self):
        self.assertEqual(parse_price_to_number('33 CR'), Decimal('330000000'))
        self.assertEqual(parse_price_to_number('1.5cr'), Decimal('15000000'))

    def test_lakh(self):
        self.assertEqual(parse_price_to_number('50 LAKH'), Decimal('5000000'))
        self.assertEqual(parse_price_to_number('50 lakh'), Decimal('5000000'))

    def test_plain_number(self):
        self.assertEqual(parse_price_to_number('4500000'), Decimal('4500000'))

    def test_range_averages_ends(self):
        self.assertEqual(parse_price_to_number('22cr - 27.6cr'), Decimal('248000000'))
        self.assertEqual(parse_price_to_number('35LAKH-66LAKH'), Decimal('5050000'))
        self.assertEqual(parse_price_to_number('50 LAKH TO 1 CR'), Decimal('7500000'))

    def test_unparseable(self):
        self.assertEqual(parse_price_to_number('price on request'), 0)
        self.assertEqual(parse_price_to_number(''), 0)
        self.assertEqual(parse_price_to_number(None), 0)
        self.assertEqual(parse_price_to_number(5000000), 0)

    def test_out_of_range_number(self):
        self.assertEqual(parse_price_to_number('1e30'), 0)
        self.assertEqual(parse_price_to_number('1e30 CR'), 0)

    def test_range_needs_two_non_zero_ends(self):
        self.assertEqual(parse_price_range_to_number('1 CR - 2 CR - 3 CR'), 0)
        self.assertEqual(parse_price_range_to_number('- 5 CR'), 0)
        self.assertEqual(parse_price_range_to_number('abc - 5 CR'), 0)

    def test_single_price(self):
        self.assertEqual(parse_single_price_to_number('22CR'), Decimal('220000000'))
        self.assertEqual(parse_single_price_to_number('abc'), 0)


class FormatPriceTests(SimpleTestCase):

    def test_crore(self):
        self.assertEqual(format_price_to_string(330000000), '33.00 CR')
        self.assertEqual(format_price_to_string(12345678), '1.23 CR')

    def test_lakh(self):
        self.assertEqual(format_price_to_string(5000000), '50.00 LAKH')
        self.assertEqual(format_price_to_string(250000), '2.50 LAKH')

    def test_below_a_lakh_keeps_raw_amount(self):
        self.assertEqual(format_price_to_string(50000), '50000.00 LAKH')

    def test_empty(self):
        self.assertEqual(format_price_to_string(0), '0 LAKH')
        self.assertEqual(format_price_to_string(None), '0 LAKH')
        self.assertEqual(format_price_to_string('abc'), '0 LAKH')

    def test_out_of_range_amount(self):
        self.assertEqual(format_price_to_string(Decimal('1e40')), '0 LAKH')
        self.assertEqual(format_price_to_string(Decimal('1e15')), '100000000.00 CR')


class PriceRangeTests(SimpleTestCase):

    def test_is_price_range(self):
        self.assertTrue(is_price_range('22cr - 27.6cr'))
        self.assertTrue(is_price_range('10 to 20 lakh'))
        self.assertFalse(is_price_range('2 Cr'))
        self.assertFalse(is_price_range(None))

    def test_extract_range_values(self):
        self.assertEqual(
            extract_price_range_values('35LAKH-66LAKH'),
            (Decimal('3500000'), Decimal('6600000')),
        )

    def test_extract_single_value(self):
        self.assertEqual(
            extract_price_range_values('2 CR'),
            (Decimal('20000000'), Decimal('20000000')),
        )

    def test_compare_against_threshold(self):
        self.assertTrue(is_price_greater_than_or_equal('1 CR', '50 LAKH'))
        self.assertTrue(is_price_greater_than_or_equal('50 LAKH', '50 lakh'))
        self.assertFalse(is_price_greater_than_or_equal('22cr - 27.6cr', '30 CR'))


class BuildPriceFilterTests(SimpleTestCase):

    def test_both_bounds(self):
        self.assertEqual(build_price_filter('50 LAKH', '1 CR'), {
            'price__gte': Decimal('5000000'),
            'price__lte': Decimal('10000000'),
        })

    def test_custom_field_and_dropped_bound(self):
        self.assertEqual(
            build_price_filter('abc', '2 CR', field='price_value'),
            {'price_value__lte': Decimal('20000000')},
        )

    def test_no_bounds(self):
        self.assertIsNone(build_price_filter('', None))
        self.assertIsNone(build_price_filter('n/a', '0'))


class ParsePriceAPITests(SimpleTestCase):
    """Test POST /api/price/parse."""

    def setUp(self):
        self.client = APIClient()
        self.url = '/api/price/parse'

    def test_parse_range(self):
        response = self.client.post(self.url, {'price': '22cr - 27.6cr'}, format='json')
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data['value'], '248000000.00')
        self.assertTrue(data['is_range'])
        self.assertEqual(data['min_value'], '220000000.00')
        self.assertEqual(data['max_value'], '276000000.00')
        self.assertEqual(data['formatted'], '24.80 CR')
        self.assertIsNone(data['meets_threshold'])

    def test_parse_with_threshold(self):
        response = self.client.post(self.url, {
            'price': '1 CR',
            'threshold': '50 LAKH',
        }, format='json')
        data = response.json()
        self.assertFalse(data['is_range'])
        self.assertTrue(data['meets_threshold'])

    def test_out_of_range_price_is_fail_soft(self):
        response = self.client.post(self.url, {'price': '1e30'}, format='json')
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data['value'], '0.00')
        self.assertEqual(data['formatted'], '0 LAKH')

    def test_missing_price(self):
        response = self.client.post(self.url, {}, format='json')
        self.assertEqual(response.status_code, 400)
        self.assertIn('price', response.json()['detail'])


class NormalizeListingPricesAPITests(SimpleTestCase):
    """Test POST /api/price/normalize-listings."""

    @mock.patch('apps.pricing.views.normalize_listing_prices')
    def test_triggers_task(self, mock_task):
        mock_task.delay.return_value = mock.Mock(id='task-123')

        response = APIClient().post('/api/price/normalize-listings', format='json')

        self.assertEqual(response.status_code, 202)
        self.assertEqual(response.json()['task_id'], 'task-123')
        mock_task.delay.assert_called_once_with()
