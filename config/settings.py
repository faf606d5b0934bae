from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from domain.exceptions.currency import ConfigurationError
from infrastructure.resilience.backoff import RetryPolicy


class Settings(BaseSettings):
	CMC_API_KEY: str = ''
	CMC_API_URL: str = 'https://sandbox-api.coinmarketcap.com'

	# Overall budget for one conversion, across all attempts
	REQUEST_DEADLINE_SECONDS: float = 30.0
	HTTP_TIMEOUT_SECONDS: float = 30.0

	RETRY_MAX_ATTEMPTS: int = 4
	RETRY_INITIAL_DELAY: float = 1.0
	RETRY_MAX_DELAY: float = 10.0
	RETRY_MULTIPLIER: float = 2.0

	# Application
	APP_NAME: str = 'Currency Converter'
	LOG_LEVEL: str = 'WARNING'
	LOG_JSON: bool = False

	model_config = SettingsConfigDict(env_file='.env', case_sensitive=False, extra='ignore')

	def retry_policy(self) -> RetryPolicy:
		return RetryPolicy(
			max_attempts=self.RETRY_MAX_ATTEMPTS,
			initial_delay=self.RETRY_INITIAL_DELAY,
			max_delay=self.RETRY_MAX_DELAY,
			multiplier=self.RETRY_MULTIPLIER,
		)

	def require_api_key(self) -> str:
		if not self.CMC_API_KEY.strip():
			raise ConfigurationError('CMC_API_KEY environment variable is not set')
		return self.CMC_API_KEY.strip()


@lru_cache
def get_settings() -> Settings:
	return Settings()
