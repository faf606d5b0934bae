import logging
from typing import Annotated

import httpx
from fastapi import Depends

from application.services import ConversionService
from config.settings import Settings, get_settings
from infrastructure.http.client import create_http_client
from infrastructure.providers import CoinMarketCapProvider, ConversionProvider

logger = logging.getLogger(__name__)


class AppDependencies:
	"""Container for application-wide singleton dependencies."""

	http_client: httpx.AsyncClient | None = None
	provider: ConversionProvider | None = None


deps = AppDependencies()


def init_dependencies(settings: Settings | None = None) -> None:
	"""Initialize all singleton dependencies. Called at app startup."""
	logger.info('Initializing dependencies...')
	settings = settings or get_settings()
	api_key = settings.require_api_key()

	deps.http_client = create_http_client(settings.HTTP_TIMEOUT_SECONDS)
	deps.provider = CoinMarketCapProvider(
		api_key=api_key,
		base_url=settings.CMC_API_URL,
		client=deps.http_client,
	)
	logger.info('Dependencies initialized')


async def cleanup_dependencies() -> None:
	logger.info('Cleaning up dependencies...')

	if deps.http_client:
		await deps.http_client.aclose()
	deps.http_client = None
	deps.provider = None

	logger.info('Cleanup complete')


def get_provider() -> ConversionProvider:
	if deps.provider is None:
		raise RuntimeError('Provider not initialized')
	return deps.provider


def get_conversion_service(
	provider: Annotated[ConversionProvider, Depends(get_provider)],
	settings: Annotated[Settings, Depends(get_settings)],
) -> ConversionService:
	return ConversionService(
		provider,
		retry_policy=settings.retry_policy(),
		default_deadline=settings.REQUEST_DEADLINE_SECONDS,
	)
