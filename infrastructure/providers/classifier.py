"""Maps raw provider failures onto the closed set of ``ErrorKind`` values.

HTTP status codes and the error codes CoinMarketCap embeds in its ``status``
block share one table, so the two paths cannot drift apart. Whether a kind is
worth retrying is decided by the kind alone (see ``ErrorKind.retryable``).
"""

import httpx

from domain.exceptions.currency import ConversionError, ErrorKind

# kind -> (HTTP status codes, provider error codes)
CLASSIFICATION_TABLE: dict[ErrorKind, tuple[frozenset[int], frozenset[int]]] = {
	ErrorKind.INVALID_CURRENCY: (frozenset({400}), frozenset()),
	ErrorKind.UNAUTHORIZED: (frozenset({401}), frozenset({1001, 1002})),
	ErrorKind.FORBIDDEN: (frozenset({403}), frozenset({1005, 1006, 1007})),
	ErrorKind.RATE_LIMIT_EXCEEDED: (frozenset({429}), frozenset({1008, 1009, 1010, 1011})),
	ErrorKind.SERVER_ERROR: (frozenset({500, 502, 503, 504}), frozenset()),
}

_STATUS_KINDS = {
	status: kind for kind, (statuses, _) in CLASSIFICATION_TABLE.items() for status in statuses
}
_PROVIDER_CODE_KINDS = {
	code: kind for kind, (_, codes) in CLASSIFICATION_TABLE.items() for code in codes
}


def kind_for_status(status_code: int) -> ErrorKind:
	return _STATUS_KINDS.get(status_code, ErrorKind.API_FAILURE)


def kind_for_provider_code(error_code: int) -> ErrorKind:
	return _PROVIDER_CODE_KINDS.get(error_code, ErrorKind.API_FAILURE)


def classify_http_status(status_code: int, body: str = '') -> ConversionError:
	kind = kind_for_status(status_code)
	if kind is ErrorKind.INVALID_CURRENCY:
		return ConversionError(kind, body[:200] or None)
	if kind is ErrorKind.API_FAILURE:
		return ConversionError(kind, f'HTTP {status_code}')
	return ConversionError(kind)


def classify_provider_code(error_code: int, message: str | None = None) -> ConversionError:
	kind = kind_for_provider_code(error_code)
	if kind is ErrorKind.API_FAILURE:
		detail = f'code {error_code} - {message}' if message else f'code {error_code}'
		return ConversionError(kind, detail)
	return ConversionError(kind, message)


def classify_transport_error(error: httpx.RequestError) -> ConversionError:
	return ConversionError(ErrorKind.NETWORK_FAILURE, f'{error.__class__.__name__}: {error}')


def invalid_response(detail: str) -> ConversionError:
	return ConversionError(ErrorKind.INVALID_RESPONSE, detail)


def is_retryable(error: BaseException) -> bool:
	return isinstance(error, ConversionError) and error.retryable
