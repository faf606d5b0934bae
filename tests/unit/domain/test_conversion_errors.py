# nosec B101

import pytest

from domain.exceptions.currency import (
	RETRYABLE_KINDS,
	ConversionError,
	CurrencyException,
	ErrorKind,
	OperationCancelledError,
	RetriesExhaustedError,
)


def test_every_kind_has_a_distinct_message_prefix():
	prefixes = [kind.message for kind in ErrorKind]

	assert len(set(prefixes)) == len(prefixes)
	for prefix in prefixes:
		others = [p for p in prefixes if p != prefix]
		assert not any(other.startswith(prefix) for other in others)


def test_message_includes_detail():
	error = ConversionError(ErrorKind.API_FAILURE, 'HTTP 418')

	assert str(error) == 'API request failed: HTTP 418'
	assert error.detail == 'HTTP 418'
	assert isinstance(error, CurrencyException)


def test_message_without_detail_is_the_prefix():
	assert str(ConversionError(ErrorKind.UNAUTHORIZED)) == 'unauthorized: invalid API key'


def test_only_transient_kinds_are_retryable():
	assert RETRYABLE_KINDS == {
		ErrorKind.RATE_LIMIT_EXCEEDED,
		ErrorKind.SERVER_ERROR,
		ErrorKind.NETWORK_FAILURE,
	}
	for kind in ErrorKind:
		assert ConversionError(kind).retryable is (kind in RETRYABLE_KINDS)


@pytest.mark.parametrize('message', ['', 'try again', 'unauthorized'])
def test_retryability_ignores_message_text(message):
	assert ConversionError(ErrorKind.SERVER_ERROR, message).retryable is True
	assert ConversionError(ErrorKind.UNAUTHORIZED, message).retryable is False


def test_retries_exhausted_keeps_last_kind():
	last = ConversionError(ErrorKind.SERVER_ERROR)
	error = RetriesExhaustedError(3, last)

	assert error.kind is ErrorKind.RETRIES_EXHAUSTED
	assert error.last_kind is ErrorKind.SERVER_ERROR
	assert error.last_error is last
	assert error.attempts == 3
	assert str(error) == 'max retry attempts exceeded: 3 attempts: server error: please try again later'
	assert error.retryable is False


def test_retries_exhausted_with_foreign_error_has_no_last_kind():
	assert RetriesExhaustedError(2, ValueError('boom')).last_kind is None


def test_cancelled_is_distinct_from_exhaustion():
	error = OperationCancelledError('deadline of 30s exceeded')

	assert error.kind is ErrorKind.CANCELLED
	assert not isinstance(error, RetriesExhaustedError)
	assert str(error).startswith('request cancelled')
