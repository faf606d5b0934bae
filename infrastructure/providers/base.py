from decimal import Decimal
from typing import Protocol

from domain.models.currency import ConversionResult, CurrencySymbol


class ConversionProvider(Protocol):
	"""A price source that converts an amount in a single round trip."""

	@property
	def name(self) -> str: ...

	async def fetch_conversion(
		self, amount: Decimal, from_symbol: CurrencySymbol, to_symbol: CurrencySymbol
	) -> ConversionResult: ...

	async def close(self) -> None: ...
