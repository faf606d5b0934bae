import argparse
import asyncio
import logging
import sys
from decimal import Decimal

from application.services import ConversionService
from cli.presenter import Presenter
from config.settings import Settings, get_settings
from domain.exceptions.currency import ConfigurationError, CurrencyException, InvalidAmountError
from domain.models.currency import ConversionResult, parse_amount
from infrastructure.http.client import create_http_client
from infrastructure.monitoring.logger import configure_logging
from infrastructure.providers import CoinMarketCapProvider

__version__ = '1.0.0'

logger = logging.getLogger(__name__)


def _amount(value: str) -> Decimal:
	try:
		return parse_amount(value)
	except InvalidAmountError as e:
		raise argparse.ArgumentTypeError(str(e)) from e


def build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(
		prog='currency-converter',
		description='Convert an amount between fiat currencies and crypto assets using CoinMarketCap.',
		epilog=(
			'examples:\n'
			'  currency-converter 123.45 USD BTC\n'
			'  currency-converter --verbose 100 BTC USD\n\n'
			'environment:\n'
			'  CMC_API_KEY   CoinMarketCap API key (required)\n'
			'  CMC_API_URL   CoinMarketCap API base URL (optional)'
		),
		formatter_class=argparse.RawDescriptionHelpFormatter,
	)
	parser.add_argument('amount', type=_amount, help='Amount to convert (must be > 0)')
	parser.add_argument('from_currency', help='Source currency symbol (e.g. USD, BTC)')
	parser.add_argument('to_currency', help='Target currency symbol (e.g. EUR, ETH)')
	parser.add_argument(
		'--verbose', action='store_true', help='Show rate and timestamps, and log retries'
	)
	parser.add_argument(
		'--version',
		action='version',
		version=f'Currency Conversion Utility v{__version__}\nPowered by CoinMarketCap API',
	)
	return parser


async def _convert(settings: Settings, args: argparse.Namespace) -> ConversionResult:
	client = create_http_client(settings.HTTP_TIMEOUT_SECONDS)
	provider = CoinMarketCapProvider(
		api_key=settings.require_api_key(), base_url=settings.CMC_API_URL, client=client
	)
	service = ConversionService(
		provider,
		retry_policy=settings.retry_policy(),
		default_deadline=settings.REQUEST_DEADLINE_SECONDS,
	)
	try:
		return await service.convert(args.amount, args.from_currency, args.to_currency)
	finally:
		await client.aclose()


def run(argv: list[str] | None = None, settings: Settings | None = None) -> int:
	args = build_parser().parse_args(argv)
	settings = settings or get_settings()

	configure_logging('INFO' if args.verbose else settings.LOG_LEVEL, settings.LOG_JSON)
	presenter = Presenter(verbose=args.verbose)

	try:
		settings.require_api_key()
	except ConfigurationError as e:
		presenter.present_error(e)
		print('You can copy .env.example to .env and add your API key', file=sys.stderr)
		return 1

	try:
		result = asyncio.run(_convert(settings, args))
	except CurrencyException as e:
		logger.debug('Conversion failed', exc_info=True)
		presenter.present_error(e)
		return 1

	presenter.present_result(result)
	return 0


def main() -> None:
	sys.exit(run())


if __name__ == '__main__':
	main()
