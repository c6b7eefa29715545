from .responses import ExchangeRateRowResponse, ExchangeRatesResponse

__all__ = [
	'ExchangeRateRowResponse',
	'ExchangeRatesResponse',
]
