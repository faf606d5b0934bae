"""
Shared fixtures: CoinMarketCap payloads and ready-made conversion results.
"""

from datetime import UTC, datetime
from decimal import Decimal

import pytest

from domain.models.currency import ConversionResult, CurrencySymbol

TEST_API_KEY = 'test_api_key_12345'
LAST_UPDATED = '2024-01-01T12:00:00.000Z'


def make_payload(
	amount=100,
	symbol='USD',
	quotes=None,
	error_code=0,
	error_message=None,
):
	"""Build a price-conversion envelope the way CoinMarketCap returns it."""
	if quotes is None:
		quotes = {'BTC': 0.0025}
	return {
		'status': {
			'timestamp': '2024-01-01T12:00:05.000Z',
			'error_code': error_code,
			'error_message': error_message,
			'elapsed': 10,
			'credit_count': 1,
		},
		'data': {
			'id': 2781,
			'symbol': symbol,
			'name': 'United States Dollar',
			'amount': amount,
			'last_updated': LAST_UPDATED,
			'quote': {
				code: {'price': price, 'last_updated': LAST_UPDATED}
				for code, price in quotes.items()
			},
		},
	}


@pytest.fixture
def cmc_payload():
	return make_payload


@pytest.fixture
def conversion_result():
	return ConversionResult.from_quote(
		original_amount=Decimal('100'),
		converted_amount=Decimal('0.0025'),
		from_symbol=CurrencySymbol('USD'),
		to_symbol=CurrencySymbol('BTC'),
		fetched_at=datetime(2024, 1, 1, 12, 0, 5, tzinfo=UTC),
		source_updated_at=datetime(2024, 1, 1, 12, 0, 0, tzinfo=UTC),
	)
