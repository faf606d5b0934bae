# nosec B101

import io
import json
import logging
import sys
from datetime import datetime
from decimal import Decimal

import pytest

from infrastructure.monitoring.logger import CustomJSONEncoder, JSONFormatter, configure_logging


@pytest.fixture
def restore_root_logger():
	root = logging.getLogger()
	handlers, level = root.handlers[:], root.level
	yield
	root.handlers[:] = handlers
	root.setLevel(level)


def test_json_encoder_handles_decimal_and_datetime():
	payload = {'rate': Decimal('0.000025'), 'at': datetime(2024, 1, 1, 12, 0)}

	assert json.loads(json.dumps(payload, cls=CustomJSONEncoder)) == {
		'rate': '0.000025',
		'at': '2024-01-01T12:00:00',
	}


def test_json_formatter_includes_exception():
	logger = logging.getLogger('test.json')
	try:
		raise ValueError('bad quote')
	except ValueError:
		record = logger.makeRecord(
			'test.json', logging.ERROR, __file__, 1, 'failed %s', ('BTC',), sys.exc_info()
		)

	entry = json.loads(JSONFormatter().format(record))

	assert entry['level'] == 'ERROR'
	assert entry['logger'] == 'test.json'
	assert entry['message'] == 'failed BTC'
	assert entry['exception']['type'] == 'ValueError'
	assert entry['exception']['message'] == 'bad quote'


def test_configure_logging_console(restore_root_logger):
	stream = io.StringIO()
	configure_logging('info', stream=stream)

	logging.getLogger('currency.test').info('hello')
	logging.getLogger('httpx').info('noise')

	output = stream.getvalue()
	assert 'INFO' in output
	assert 'hello' in output
	assert 'noise' not in output


def test_configure_logging_json(restore_root_logger):
	stream = io.StringIO()
	configure_logging('WARNING', json_output=True, stream=stream)

	logging.getLogger('currency.test').info('dropped')
	logging.getLogger('currency.test').warning('kept')

	lines = stream.getvalue().splitlines()
	assert len(lines) == 1
	assert json.loads(lines[0])['message'] == 'kept'
