import httpx

from infrastructure.providers.rate_feed import FeedShape, RateSource
from infrastructure.providers.reference import (
    LabeledPairMarket,
    ReferenceRateProvider,
    TickerBuyMarket,
)

DEFAULT_RATE_SOURCES = [
    RateSource(
        endpoint="https://bitpay.com/api/rates",
        source_label="coindesk.com",
        field_priority=("rate",),
        shape=FeedShape.ARRAY_OF_OBJECTS,
    ),
    RateSource(
        endpoint="https://api.bitcoinaverage.com/custom/abw",
        source_label="BitcoinAverage.com",
        field_priority=("24h_avg", "last"),
        shape=FeedShape.OBJECT_OF_OBJECTS,
    ),
    RateSource(
        endpoint="https://blockchain.info/ticker",
        source_label="blockchain.info",
        field_priority=("15m",),
        shape=FeedShape.OBJECT_OF_OBJECTS,
    ),
]

TICKER_MARKET_URL = "https://c-cex.com/t/gld-btc.json"
LABELED_MARKET_URL = "https://www.cryptopia.co.nz/api/GetMarket/2623"


def default_reference_markets(
    client: httpx.AsyncClient, pair_label: str = "GLD/BTC"
) -> list[ReferenceRateProvider]:
    return [
        TickerBuyMarket(TICKER_MARKET_URL, client),
        LabeledPairMarket(LABELED_MARKET_URL, client, pair_label=pair_label),
    ]
