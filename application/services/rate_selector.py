import logging
from collections.abc import Callable, Mapping

from domain.models.exchange_rate import ExchangeRate

logger = logging.getLogger(__name__)


class RateSelector:
	"""Picks the rate to show: requested code, then environment default, then fallback."""

	def __init__(self, default_currency: Callable[[], str | None], fallback_currency: str = 'USD'):
		self.default_currency = default_currency
		self.fallback_currency = fallback_currency

	def select(
		self, table: Mapping[str, ExchangeRate], requested_code: str | None
	) -> ExchangeRate | None:
		if requested_code is not None and requested_code in table:
			return table[requested_code]

		default_code = self._default_code()
		if default_code is not None and default_code in table:
			return table[default_code]

		return table.get(self.fallback_currency)

	def _default_code(self) -> str | None:
		try:
			return self.default_currency()
		except Exception as e:
			logger.debug(f'Default currency lookup failed: {e}')
			return None
