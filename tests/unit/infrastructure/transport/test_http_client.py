# nosec B101

import pytest

from infrastructure.http.client import create_http_client


@pytest.mark.asyncio
async def test_create_http_client_applies_timeout_and_headers():
	client = create_http_client(timeout=12.5)
	try:
		assert client.timeout.read == 12.5
		assert client.timeout.connect == 12.5
		assert client.headers['Accept'] == 'application/json'
	finally:
		await client.aclose()

	assert client.is_closed
