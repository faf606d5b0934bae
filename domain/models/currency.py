from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import ClassVar

from domain.exceptions.currency import InvalidAmountError, InvalidCurrencyError


@dataclass(frozen=True)
class CurrencySymbol:
	"""Currency or crypto-asset ticker, e.g. USD or BTC.

	The code is trimmed and upper-cased on construction, so two symbols are
	equal iff their normalized codes are.
	"""

	code: str

	MIN_LENGTH: ClassVar[int] = 2
	MAX_LENGTH: ClassVar[int] = 10

	def __post_init__(self):
		if not isinstance(self.code, str):
			raise InvalidCurrencyError(f'expected a string, got {type(self.code).__name__}')

		normalized = self.code.strip().upper()
		if not self.MIN_LENGTH <= len(normalized) <= self.MAX_LENGTH:
			raise InvalidCurrencyError(
				f"'{self.code}' must be {self.MIN_LENGTH}-{self.MAX_LENGTH} characters"
			)
		object.__setattr__(self, 'code', normalized)

	def __str__(self) -> str:
		return self.code


def parse_amount(value: Decimal | int | float | str) -> Decimal:
	"""Return ``value`` as a positive finite Decimal or raise InvalidAmountError."""
	if isinstance(value, bool):
		raise InvalidAmountError(f'{value!r} is not a number')
	try:
		amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
	except InvalidOperation as e:
		raise InvalidAmountError(f'{value!r} is not a number') from e

	if not amount.is_finite() or amount <= 0:
		raise InvalidAmountError(f'got {value}')
	return amount


@dataclass(frozen=True)
class ConversionRequest:
	amount: Decimal
	from_symbol: CurrencySymbol
	to_symbol: CurrencySymbol

	@classmethod
	def create(
		cls, amount: Decimal | int | float | str, from_symbol: str, to_symbol: str
	) -> 'ConversionRequest':
		return cls(
			amount=parse_amount(amount),
			from_symbol=CurrencySymbol(from_symbol),
			to_symbol=CurrencySymbol(to_symbol),
		)


@dataclass(frozen=True)
class ConversionResult:
	original_amount: Decimal
	converted_amount: Decimal
	from_symbol: CurrencySymbol
	to_symbol: CurrencySymbol
	exchange_rate: Decimal
	fetched_at: datetime  # when we queried
	source_updated_at: datetime  # provider's last update of the quote

	@classmethod
	def from_quote(
		cls,
		original_amount: Decimal,
		converted_amount: Decimal,
		from_symbol: CurrencySymbol,
		to_symbol: CurrencySymbol,
		fetched_at: datetime,
		source_updated_at: datetime,
	) -> 'ConversionResult':
		# Derived rather than read from the payload: the provider only
		# guarantees the converted total.
		return cls(
			original_amount=original_amount,
			converted_amount=converted_amount,
			from_symbol=from_symbol,
			to_symbol=to_symbol,
			exchange_rate=converted_amount / original_amount,
			fetched_at=fetched_at,
			source_updated_at=source_updated_at,
		)
