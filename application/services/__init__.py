from .exchange_rate_service import ExchangeRateService, QueryMode
from .rate_selector import RateSelector

__all__ = ['ExchangeRateService', 'QueryMode', 'RateSelector']
