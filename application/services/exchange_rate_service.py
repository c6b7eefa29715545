import asyncio
import logging
from collections.abc import Callable
from enum import Enum

from application.services.rate_selector import RateSelector
from domain.currency import currency_symbol
from domain.exceptions.exchange_rate import UnsupportedOperationError
from domain.models.exchange_rate import ExchangeRateRow
from infrastructure.cache.rate_cache import RateCache
from infrastructure.persistence.preferences import PreferenceStore
from infrastructure.providers.rate_feed import RateFeedFetcher, RateSource

logger = logging.getLogger(__name__)


class QueryMode(Enum):
	ALL = 'all'
	SEARCH = 'search'
	CURRENCY_CODE = 'currency_code'


class ExchangeRateService:
	def __init__(
		self,
		cache: RateCache,
		fetcher: RateFeedFetcher,
		sources: list[RateSource],
		selector: RateSelector,
		preferences: PreferenceStore,
		exchange_currency_code: str | None = None,
		symbol_lookup: Callable[[str], str] = currency_symbol,
	):
		self.cache = cache
		self.fetcher = fetcher
		self.sources = sources
		self.selector = selector
		self.preferences = preferences
		self.exchange_currency_code = exchange_currency_code
		self.symbol_lookup = symbol_lookup
		self._refresh_lock = asyncio.Lock()

	async def initialize(self) -> None:
		"""Seed the cache with the rate persisted by a previous run."""
		try:
			cached_rate = await self.preferences.load_cached_rate()
		except Exception as e:
			logger.error(f'Failed to load cached exchange rate: {e}')
			return

		if cached_rate is not None:
			self.cache.seed(cached_rate)
			logger.info(f'Seeded exchange rates with cached {cached_rate.currency_code} rate')

	async def handle(
		self, now_millis: int, offline: bool, mode: QueryMode, argument: str | None = None
	) -> list[ExchangeRateRow] | None:
		if not offline and self.cache.is_stale(now_millis):
			await self.refresh(now_millis)

		table = self.cache.snapshot()
		if table is None:
			return None

		if mode is QueryMode.ALL:
			rates = list(table.values())
		elif mode is QueryMode.SEARCH:
			needle = (argument or '').lower()
			rates = [
				rate
				for code, rate in table.items()
				if needle in code.lower() or needle in self.symbol_lookup(code).lower()
			]
		else:
			best = self.selector.select(table, argument)
			rates = [best] if best is not None else []

		return [ExchangeRateRow.from_exchange_rate(rate) for rate in rates]

	async def refresh(self, now_millis: int) -> bool:
		"""Fetch from the first source that answers; False when none did or a refresh is running."""
		if self._refresh_lock.locked():
			logger.debug('Refresh already in progress, serving current rates')
			return False

		async with self._refresh_lock:
			if not self.cache.is_stale(now_millis):
				return False

			rates = await self.fetcher.fetch_first(self.sources)
			if rates is None:
				logger.error('All exchange rate sources failed')
				return False

			self.cache.replace(rates, now_millis)
			logger.info(f'Exchange rates updated: {len(rates)} currencies')

			await self._persist_best_rate()
			return True

	async def _persist_best_rate(self) -> None:
		table = self.cache.snapshot()
		try:
			code = await self.preferences.get_exchange_currency_code() or self.exchange_currency_code
			best = self.selector.select(table, code)
			if best is not None:
				await self.preferences.save_cached_rate(best)
		except Exception as e:
			logger.error(f'Failed to persist cached exchange rate: {e}')

	async def insert(self, values: dict) -> None:
		raise UnsupportedOperationError('insert')

	async def update(self, values: dict, selection: str | None = None) -> int:
		raise UnsupportedOperationError('update')

	async def delete(self, selection: str | None = None) -> int:
		raise UnsupportedOperationError('delete')

	async def get_type(self) -> str:
		raise UnsupportedOperationError('get_type')
