"""
Celery tasks for listing price maintenance.

Reads a listings spreadsheet with pandas, rewrites raw numeric prices
into the ``"N.NN CR"`` / ``"N.NN LAKH"`` display format and writes the
result next to the source file.
"""

import logging
from pathlib import Path

import pandas as pd
from celery import shared_task
from django.conf import settings

from apps.core.exceptions import ListingNormalizationError
from apps.core.utils import leading_decimal
from apps.pricing.services import format_price_to_string, parse_price_to_number

logger = logging.getLogger(__name__)

SOURCE_FILE = 'listings.xlsx'
OUTPUT_FILE = 'listings_normalized.xlsx'


def normalize_price(raw_price):
    """
    Return ``(display_price, changed)`` for one listing price cell.

    Prices that already contain a space are assumed to be formatted.
    Returns ``(None, False)`` when the cell holds no usable number.
    """
    if isinstance(raw_price, str) and ' ' in raw_price.strip():
        return raw_price.strip(), False

    if raw_price is None or (not isinstance(raw_price, str) and pd.isna(raw_price)):
        return None, False

    numeric_price = leading_decimal(str(raw_price))
    if numeric_price is None:
        return None, False

    return format_price_to_string(numeric_price), True


@shared_task(
    bind=True,
    name='pricing.normalize_listing_prices',
    max_retries=3,
    default_retry_delay=10,
)
def normalize_listing_prices(self):
    """
    Normalize listing prices from listings.xlsx.

    Adds a ``price_value`` column holding the rupee amount of each
    display price, for range filtering.

    This task is idempotent and safe to run multiple times.
    """
    file_path = Path(settings.DATA_DIR) / SOURCE_FILE

    if not file_path.exists():
        logger.error("Listings file not found: %s", file_path)
        return {'status': 'error', 'message': f'File not found: {file_path}'}

    try:
        logger.info("Starting listing price normalization from %s", file_path)

        df = pd.read_excel(file_path)
        logger.info("Read %d rows from %s", len(df), SOURCE_FILE)

        # Normalize column names
        df.columns = [str(col).strip().lower().replace(' ', '_') for col in df.columns]

        if 'price' not in df.columns:
            raise ListingNormalizationError(f"{SOURCE_FILE} has no 'price' column")

        updated_count = 0
        skipped_count = 0
        prices = []

        for index, row in df.iterrows():
            raw_price = row.get('price')
            display_price, changed = normalize_price(raw_price)

            if display_price is None:
                logger.warning(
                    "Row %d: invalid price %r, skipping", index, raw_price
                )
                skipped_count += 1
                prices.append(raw_price)
                continue

            if changed:
                logger.debug("Row %d: %r -> %s", index, raw_price, display_price)
                updated_count += 1
            else:
                skipped_count += 1
            prices.append(display_price)

        df['price'] = prices
        df['price_value'] = [
            float(parse_price_to_number(price)) if isinstance(price, str) else 0.0
            for price in prices
        ]

        output_path = Path(settings.DATA_DIR) / OUTPUT_FILE
        df.to_excel(output_path, index=False)

        result = {
            'status': 'success',
            'total_rows': len(df),
            'updated': updated_count,
            'skipped': skipped_count,
            'output': str(output_path),
        }
        logger.info("Listing price normalization complete: %s", result)
        return result

    except ListingNormalizationError as exc:
        logger.error("Listing price normalization failed: %s", exc)
        return {'status': 'error', 'message': str(exc)}

    except Exception as exc:
        logger.exception("Listing price normalization failed")
        raise self.retry(exc=exc)
