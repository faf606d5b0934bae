# nosec B101

from decimal import Decimal
from unittest.mock import AsyncMock, patch

import pytest

from cli import main as cli_main
from config.settings import Settings
from domain.exceptions.currency import ConversionError, ErrorKind


@pytest.fixture(autouse=True)
def quiet_logging():
	with patch.object(cli_main, 'configure_logging'):
		yield


@pytest.fixture
def settings():
	return Settings(CMC_API_KEY='test_key', _env_file=None)


@pytest.mark.parametrize(
	'argv, amount, from_currency, to_currency, verbose',
	[
		(['123.45', 'USD', 'BTC'], Decimal('123.45'), 'USD', 'BTC', False),
		(['--verbose', '100', 'BTC', 'ETH'], Decimal('100'), 'BTC', 'ETH', True),
		(['50', 'eur', 'gbp', '--verbose'], Decimal('50'), 'eur', 'gbp', True),
	],
)
def test_parse_valid_arguments(argv, amount, from_currency, to_currency, verbose):
	args = cli_main.build_parser().parse_args(argv)

	assert args.amount == amount
	assert args.from_currency == from_currency
	assert args.to_currency == to_currency
	assert args.verbose is verbose


@pytest.mark.parametrize(
	'argv',
	[
		['100', 'USD'],
		['100', 'USD', 'BTC', 'extra'],
		['abc', 'USD', 'BTC'],
		['0', 'USD', 'BTC'],
		['-50', 'USD', 'BTC'],
	],
)
def test_parse_invalid_arguments_exits_with_usage_error(argv, capsys):
	with pytest.raises(SystemExit) as exc_info:
		cli_main.build_parser().parse_args(argv)

	assert exc_info.value.code == 2
	assert 'usage: currency-converter' in capsys.readouterr().err


def test_version_flag(capsys):
	with pytest.raises(SystemExit) as exc_info:
		cli_main.build_parser().parse_args(['--version'])

	assert exc_info.value.code == 0
	assert 'Currency Conversion Utility v1.0.0' in capsys.readouterr().out


def test_run_success_prints_one_line(settings, conversion_result, capsys):
	with patch.object(cli_main, '_convert', AsyncMock(return_value=conversion_result)) as convert:
		exit_code = cli_main.run(['100', 'USD', 'BTC'], settings=settings)

	assert exit_code == 0
	assert capsys.readouterr().out == '100 USD = 0.0025 BTC\n'
	passed_args = convert.call_args[0][1]
	assert passed_args.amount == Decimal('100')


def test_run_without_api_key_fails(capsys):
	settings = Settings(CMC_API_KEY='', _env_file=None)

	with patch.object(cli_main, '_convert', AsyncMock()) as convert:
		exit_code = cli_main.run(['100', 'USD', 'BTC'], settings=settings)

	assert exit_code == 1
	assert 'CMC_API_KEY environment variable is not set' in capsys.readouterr().err
	convert.assert_not_called()


def test_run_reports_conversion_error_with_hint(settings, capsys):
	error = ConversionError(ErrorKind.UNAUTHORIZED)

	with patch.object(cli_main, '_convert', AsyncMock(side_effect=error)):
		exit_code = cli_main.run(['100', 'USD', 'BTC'], settings=settings)

	err = capsys.readouterr().err
	assert exit_code == 1
	assert 'Error: unauthorized: invalid API key' in err
	assert 'CMC_API_KEY' in err


def test_run_reports_invalid_symbol(settings, capsys):
	exit_code = cli_main.run(['100', 'U', 'BTC'], settings=settings)

	assert exit_code == 1
	assert capsys.readouterr().err.startswith('Error: invalid currency symbol')
