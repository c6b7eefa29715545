from .base import JSONSource, create_http_client
from .rate_feed import FeedShape, RateFeedFetcher, RateSource, RateTable
from .reference import (
    LabeledPairMarket,
    ReferenceRateProvider,
    ReferenceRateResolver,
    TickerBuyMarket,
)
from .sources import DEFAULT_RATE_SOURCES, default_reference_markets

__all__ = [
    'DEFAULT_RATE_SOURCES',
    'FeedShape',
    'JSONSource',
    'LabeledPairMarket',
    'RateFeedFetcher',
    'RateSource',
    'RateTable',
    'ReferenceRateProvider',
    'ReferenceRateResolver',
    'TickerBuyMarket',
    'create_http_client',
    'default_reference_markets',
]
