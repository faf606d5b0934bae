from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from domain.models.currency import ConversionResult


class ConversionResponse(BaseModel):
	from_currency: str = Field(..., description='Source currency symbol')
	to_currency: str = Field(..., description='Target currency symbol')
	original_amount: Decimal = Field(..., description='Original amount requested')
	converted_amount: Decimal = Field(..., description='Converted amount')
	exchange_rate: Decimal = Field(..., description='Converted amount per unit of source currency')
	fetched_at: datetime = Field(..., description='When the conversion was queried')
	source_updated_at: datetime = Field(..., description='When the provider last updated the quote')

	@classmethod
	def from_result(cls, result: ConversionResult) -> 'ConversionResponse':
		return cls(
			from_currency=result.from_symbol.code,
			to_currency=result.to_symbol.code,
			original_amount=result.original_amount,
			converted_amount=result.converted_amount,
			exchange_rate=result.exchange_rate,
			fetched_at=result.fetched_at,
			source_updated_at=result.source_updated_at,
		)

	class ConfigDict:
		json_schema_extra = {
			'example': {
				'from_currency': 'USD',
				'to_currency': 'BTC',
				'original_amount': 100.00,
				'converted_amount': 0.0025,
				'exchange_rate': 0.000025,
				'fetched_at': '2025-09-27T10:30:05Z',
				'source_updated_at': '2025-09-27T10:30:00Z',
			}
		}


class ErrorResponse(BaseModel):
	detail: str = Field(..., description='Human readable error message')
	kind: str = Field(..., description='Stable error kind')


class HealthResponse(BaseModel):
	status: str
	provider: str
