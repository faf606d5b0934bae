from enum import Enum


class CurrencyException(Exception):
	pass


class ConfigurationError(CurrencyException):
	pass


class ErrorKind(Enum):
	INVALID_AMOUNT = 'invalid_amount'
	INVALID_CURRENCY = 'invalid_currency'
	UNAUTHORIZED = 'unauthorized'
	FORBIDDEN = 'forbidden'
	RATE_LIMIT_EXCEEDED = 'rate_limit_exceeded'
	SERVER_ERROR = 'server_error'
	NETWORK_FAILURE = 'network_failure'
	INVALID_RESPONSE = 'invalid_response'
	API_FAILURE = 'api_failure'
	RETRIES_EXHAUSTED = 'retries_exhausted'
	CANCELLED = 'cancelled'

	@property
	def message(self) -> str:
		return _MESSAGES[self]

	@property
	def retryable(self) -> bool:
		return self in RETRYABLE_KINDS


# Stable prefixes: presentation code and API clients match on these.
_MESSAGES = {
	ErrorKind.INVALID_AMOUNT: 'invalid amount: must be greater than zero',
	ErrorKind.INVALID_CURRENCY: 'invalid currency symbol',
	ErrorKind.UNAUTHORIZED: 'unauthorized: invalid API key',
	ErrorKind.FORBIDDEN: 'forbidden: API key does not have access to this endpoint',
	ErrorKind.RATE_LIMIT_EXCEEDED: 'rate limit exceeded: too many requests',
	ErrorKind.SERVER_ERROR: 'server error: please try again later',
	ErrorKind.NETWORK_FAILURE: 'network failure: could not connect to API',
	ErrorKind.INVALID_RESPONSE: 'invalid API response',
	ErrorKind.API_FAILURE: 'API request failed',
	ErrorKind.RETRIES_EXHAUSTED: 'max retry attempts exceeded',
	ErrorKind.CANCELLED: 'request cancelled',
}

RETRYABLE_KINDS = frozenset(
	{ErrorKind.RATE_LIMIT_EXCEEDED, ErrorKind.SERVER_ERROR, ErrorKind.NETWORK_FAILURE}
)


class ConversionError(CurrencyException):
	"""A failure classified into one of the closed set of error kinds."""

	def __init__(self, kind: ErrorKind, detail: str | None = None):
		self.kind = kind
		self.detail = detail
		super().__init__(f'{kind.message}: {detail}' if detail else kind.message)

	@property
	def retryable(self) -> bool:
		return self.kind.retryable


class InvalidAmountError(ConversionError):
	def __init__(self, detail: str | None = None):
		super().__init__(ErrorKind.INVALID_AMOUNT, detail)


class InvalidCurrencyError(ConversionError):
	def __init__(self, detail: str | None = None):
		super().__init__(ErrorKind.INVALID_CURRENCY, detail)


class RetriesExhaustedError(ConversionError):
	"""Raised when every allowed attempt failed with a retryable error.

	The last underlying error is kept so callers can still tell a rate limit
	apart from a server outage.
	"""

	def __init__(self, attempts: int, last_error: BaseException):
		self.attempts = attempts
		self.last_error = last_error
		super().__init__(ErrorKind.RETRIES_EXHAUSTED, f'{attempts} attempts: {last_error}')

	@property
	def last_kind(self) -> ErrorKind | None:
		if isinstance(self.last_error, ConversionError):
			return self.last_error.kind
		return None


class OperationCancelledError(ConversionError):
	def __init__(self, detail: str | None = None):
		super().__init__(ErrorKind.CANCELLED, detail)
