import logging
from datetime import timedelta

import httpx
from redis.asyncio import Redis

from application.services import ExchangeRateService, RateSelector
from config.settings import Settings, get_settings
from domain.currency import locale_currency_code
from infrastructure.cache.rate_cache import RateCache
from infrastructure.cache.redis_cache import RedisPreferenceStore
from infrastructure.persistence.database import Database
from infrastructure.persistence.preferences import PreferenceStore
from infrastructure.persistence.repositories.preferences import SqlPreferenceStore
from infrastructure.providers import (
	DEFAULT_RATE_SOURCES,
	RateFeedFetcher,
	ReferenceRateResolver,
	create_http_client,
	default_reference_markets,
)

logger = logging.getLogger(__name__)


class AppDependencies:
	"""Container for application-wide singleton dependencies."""

	http_client: httpx.AsyncClient | None = None
	preferences: PreferenceStore | None = None
	exchange_rate_service: ExchangeRateService | None = None


deps = AppDependencies()


async def create_preference_store(url: str) -> PreferenceStore:
	if url.startswith(('redis://', 'rediss://', 'unix://')):
		return RedisPreferenceStore(Redis.from_url(url, decode_responses=True))

	database = Database(url)
	await database.create_tables()
	return SqlPreferenceStore(database)


def build_rate_selector(settings: Settings) -> RateSelector:
	# setlocale touches process-wide state, so the locale is read once here
	default_code = settings.DEFAULT_CURRENCY_CODE or locale_currency_code()
	logger.info(f'Default currency: {default_code or "none"}')

	def default_currency() -> str | None:
		return default_code

	return RateSelector(default_currency, fallback_currency=settings.DEFAULT_EXCHANGE_CURRENCY)


async def init_dependencies(settings: Settings | None = None) -> None:
	"""Initialize all singleton dependencies and seed the rate cache. Called at app startup."""
	logger.info('Initializing dependencies...')
	settings = settings or get_settings()

	deps.http_client = create_http_client(settings.USER_AGENT, settings.HTTP_TIMEOUT_SECONDS)
	deps.preferences = await create_preference_store(settings.PREFERENCES_URL)

	resolver = ReferenceRateResolver(
		default_reference_markets(deps.http_client, pair_label=settings.REFERENCE_PAIR_LABEL)
	)
	deps.exchange_rate_service = ExchangeRateService(
		cache=RateCache(timedelta(seconds=settings.UPDATE_INTERVAL_SECONDS)),
		fetcher=RateFeedFetcher(deps.http_client, resolver),
		sources=DEFAULT_RATE_SOURCES,
		selector=build_rate_selector(settings),
		preferences=deps.preferences,
		exchange_currency_code=settings.EXCHANGE_CURRENCY_CODE,
	)
	await deps.exchange_rate_service.initialize()
	logger.info('Dependencies initialized')


async def cleanup_dependencies() -> None:
	logger.info('Cleaning up dependencies...')

	if deps.http_client:
		await deps.http_client.aclose()
	if deps.preferences:
		await deps.preferences.close()
	deps.exchange_rate_service = None

	logger.info('Cleanup complete')


def get_exchange_rate_service() -> ExchangeRateService:
	if deps.exchange_rate_service is None:
		raise RuntimeError('Exchange rate service not initialized')
	return deps.exchange_rate_service
