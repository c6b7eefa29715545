from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

VERSION = '1.0.0'


class Settings(BaseSettings):
	PREFERENCES_URL: str = 'sqlite+aiosqlite:///./exchange_rates.db'

	# Upstream HTTP
	USER_AGENT: str = f'exchange-rates-provider/{VERSION}'
	HTTP_TIMEOUT_SECONDS: float = 15
	REFERENCE_PAIR_LABEL: str = 'GLD/BTC'

	# Rates
	UPDATE_INTERVAL_SECONDS: int = 600
	DEFAULT_EXCHANGE_CURRENCY: str = 'USD'
	DEFAULT_CURRENCY_CODE: str | None = None
	EXCHANGE_CURRENCY_CODE: str | None = None

	# Application
	APP_NAME: str = 'Exchange Rates Provider'
	DEBUG: bool = False
	LOG_LEVEL: str = 'INFO'
	LOG_DIRECTORY: str | None = None

	model_config = SettingsConfigDict(env_file='.env', case_sensitive=False, extra='ignore')


@lru_cache
def get_settings() -> Settings:
	return Settings()
