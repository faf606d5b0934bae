import sys
from decimal import Decimal
from typing import TextIO

from domain.exceptions.currency import ConversionError, ErrorKind, RetriesExhaustedError
from domain.models.currency import ConversionResult

TIME_FORMAT = '%Y-%m-%d %H:%M:%S %Z'

HINTS = {
	ErrorKind.INVALID_AMOUNT: 'The amount must be a number greater than zero.',
	ErrorKind.INVALID_CURRENCY: 'Use a ticker symbol such as USD or BTC.',
	ErrorKind.UNAUTHORIZED: 'Check that CMC_API_KEY holds a valid CoinMarketCap API key.',
	ErrorKind.FORBIDDEN: 'Your API plan does not include the price-conversion endpoint.',
	ErrorKind.RATE_LIMIT_EXCEEDED: 'Wait a minute before trying again.',
	ErrorKind.SERVER_ERROR: 'CoinMarketCap is having trouble; try again later.',
	ErrorKind.NETWORK_FAILURE: 'Check your internet connection and CMC_API_URL.',
	ErrorKind.CANCELLED: 'The conversion did not finish within the deadline.',
}


def _number(value: Decimal) -> str:
	return format(value, '.8g')


class Presenter:
	def __init__(self, verbose: bool = False, out: TextIO | None = None, err: TextIO | None = None):
		self.verbose = verbose
		self.out = out or sys.stdout
		self.err = err or sys.stderr

	def present_result(self, result: ConversionResult) -> None:
		if self.verbose:
			self._present_verbose(result)
		else:
			print(
				f'{_number(result.original_amount)} {result.from_symbol} = '
				f'{_number(result.converted_amount)} {result.to_symbol}',
				file=self.out,
			)

	def _present_verbose(self, result: ConversionResult) -> None:
		lines = [
			'=' * 60,
			'CURRENCY CONVERSION RESULT',
			'=' * 60,
			f'Original Amount:    {_number(result.original_amount)} {result.from_symbol}',
			f'Converted Amount:   {_number(result.converted_amount)} {result.to_symbol}',
			'-' * 60,
			f'Exchange Rate:      1 {result.from_symbol} = {_number(result.exchange_rate)} {result.to_symbol}',
			f'Last Updated:       {result.source_updated_at.strftime(TIME_FORMAT)}',
			f'Query Time:         {result.fetched_at.strftime(TIME_FORMAT)}',
			'=' * 60,
		]
		print('\n'.join(lines), file=self.out)

	def present_error(self, error: Exception) -> None:
		label = 'ERROR' if self.verbose else 'Error'
		print(f'{label}: {error}', file=self.err)

		hint = self.hint_for(error)
		if hint:
			print(hint, file=self.err)

	@staticmethod
	def hint_for(error: Exception) -> str | None:
		if not isinstance(error, ConversionError):
			return None
		kind = error.kind
		if isinstance(error, RetriesExhaustedError) and error.last_kind is not None:
			kind = error.last_kind
		return HINTS.get(kind)
