import logging
from decimal import Decimal

from domain.exceptions.currency import OperationCancelledError
from domain.models.currency import ConversionRequest, ConversionResult
from infrastructure.providers.base import ConversionProvider
from infrastructure.providers.classifier import is_retryable
from infrastructure.resilience.backoff import RetryPolicy
from infrastructure.resilience.retry import deadline_signal, execute

logger = logging.getLogger(__name__)


class ConversionService:
	def __init__(
		self,
		provider: ConversionProvider,
		retry_policy: RetryPolicy | None = None,
		default_deadline: float | None = None,
	):
		self.provider = provider
		self.retry_policy = retry_policy or RetryPolicy()
		self.default_deadline = default_deadline

	async def convert(
		self,
		amount: Decimal | int | float | str,
		from_symbol: str,
		to_symbol: str,
		deadline: float | None = None,
	) -> ConversionResult:
		"""Convert ``amount`` of ``from_symbol`` into ``to_symbol``.

		Input is validated before any network call. ``deadline`` (seconds,
		falling back to the service default) bounds the whole conversion,
		retries and waits included.
		"""
		request = ConversionRequest.create(amount, from_symbol, to_symbol)
		deadline = deadline if deadline is not None else self.default_deadline

		logger.info(f'Converting {request.amount} {request.from_symbol} -> {request.to_symbol}')

		async def fetch() -> ConversionResult:
			return await self.provider.fetch_conversion(
				request.amount, request.from_symbol, request.to_symbol
			)

		with deadline_signal(deadline) as cancel_event:
			try:
				return await execute(self.retry_policy, is_retryable, fetch, cancel_event)
			except OperationCancelledError as e:
				if deadline is not None and cancel_event.is_set():
					raise OperationCancelledError(f'deadline of {deadline:g}s exceeded') from e
				raise
