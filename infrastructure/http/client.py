import httpx

# One pool per process; it holds no conversion state and is safe to share
# between concurrent requests.
DEFAULT_LIMITS = httpx.Limits(
	max_connections=100,
	max_keepalive_connections=10,
	keepalive_expiry=90.0,
)


def create_http_client(timeout: float = 30.0) -> httpx.AsyncClient:
	return httpx.AsyncClient(
		timeout=httpx.Timeout(timeout),
		limits=DEFAULT_LIMITS,
		headers={'Accept': 'application/json'},
	)
