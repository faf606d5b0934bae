import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from domain.exceptions.currency import ConversionError, ErrorKind

logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
	ErrorKind.INVALID_AMOUNT: 400,
	ErrorKind.INVALID_CURRENCY: 400,
	ErrorKind.RATE_LIMIT_EXCEEDED: 429,
	ErrorKind.SERVER_ERROR: 503,
	ErrorKind.NETWORK_FAILURE: 503,
	ErrorKind.RETRIES_EXHAUSTED: 503,
	ErrorKind.CANCELLED: 504,
}


def status_for(kind: ErrorKind) -> int:
	# Credential and payload problems are ours, not the client's: bad gateway.
	return STATUS_BY_KIND.get(kind, 502)


def register_exception_handlers(app: FastAPI) -> None:
	@app.exception_handler(ConversionError)
	async def conversion_error_handler(request: Request, exc: ConversionError):
		status_code = status_for(exc.kind)
		if status_code >= 500:
			logger.error(f'Provider error: {exc}')
		return JSONResponse(
			status_code=status_code, content={'detail': str(exc), 'kind': exc.kind.value}
		)
