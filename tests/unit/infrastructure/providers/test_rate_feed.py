# nosec B101

from unittest.mock import AsyncMock

import httpx
import pytest

from domain.models.exchange_rate import COIN, EXCLUDED_CURRENCY_CODES
from infrastructure.providers.rate_feed import FeedShape, RateFeedFetcher, RateSource
from infrastructure.providers.reference import ReferenceRateResolver

OBJECT_URL = "https://feeds.test/object"
ARRAY_URL = "https://feeds.test/array"

OBJECT_SOURCE = RateSource(
    endpoint=OBJECT_URL,
    source_label="BitcoinAverage.com",
    field_priority=("24h_avg", "last"),
    shape=FeedShape.OBJECT_OF_OBJECTS,
)
ARRAY_SOURCE = RateSource(
    endpoint=ARRAY_URL,
    source_label="coindesk.com",
    field_priority=("rate",),
    shape=FeedShape.ARRAY_OF_OBJECTS,
)


def resolver_returning(rate):
    resolver = AsyncMock(spec=ReferenceRateResolver)
    resolver.resolve.return_value = rate
    return resolver


# ============================================================================
# TEST: object-of-objects feeds
# ============================================================================

@pytest.mark.asyncio
async def test_object_feed_converts_through_reference_rate(make_client):
    client = make_client({OBJECT_URL: {"EUR": {"24h_avg": "500.00000000"}, "timestamp": 1700000000}})
    fetcher = RateFeedFetcher(client, resolver_returning(0.00006))

    rates = await fetcher.fetch(OBJECT_SOURCE)

    assert list(rates) == ["EUR"]
    eur = rates["EUR"]
    assert eur.fiat_amount == 3_000_000
    assert eur.coin_amount == COIN
    assert eur.source == "BitcoinAverage.com"


@pytest.mark.asyncio
async def test_object_feed_first_valid_field_wins(make_client):
    client = make_client({
        OBJECT_URL: {
            "USD": {"24h_avg": 100, "last": 200},
            "GBP": {"24h_avg": "broken", "last": 300},
            "JPY": {"24h_avg": 0, "last": 400},
            "CHF": {"ask": 1},
        }
    })
    fetcher = RateFeedFetcher(client, resolver_returning(1.0))

    rates = await fetcher.fetch(OBJECT_SOURCE)

    assert rates["USD"].fiat_amount == 100 * 10**8
    assert rates["GBP"].fiat_amount == 300 * 10**8
    assert rates["JPY"].fiat_amount == 400 * 10**8
    assert "CHF" not in rates


@pytest.mark.asyncio
async def test_object_feed_skips_reference_coin_tickers(make_client):
    reply = {code: {"last": 1} for code in EXCLUDED_CURRENCY_CODES}
    reply["EUR"] = {"last": 2}
    client = make_client({OBJECT_URL: reply})
    fetcher = RateFeedFetcher(client, resolver_returning(1.0))

    rates = await fetcher.fetch(OBJECT_SOURCE)

    assert list(rates) == ["EUR"]


@pytest.mark.asyncio
async def test_fetched_table_is_sorted_by_code(make_client):
    client = make_client({OBJECT_URL: {"USD": {"last": 1}, "AUD": {"last": 1}, "EUR": {"last": 1}}})
    fetcher = RateFeedFetcher(client, resolver_returning(1.0))

    rates = await fetcher.fetch(OBJECT_SOURCE)

    assert list(rates) == ["AUD", "EUR", "USD"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "reply",
    [
        [{"code": "USD", "last": 1}],
        {"USD": "not an object"},
        {"USD": {"last": 1}, "EUR": [1, 2]},
    ],
)
async def test_object_feed_structure_errors_fail_whole_fetch(make_client, reply):
    client = make_client({OBJECT_URL: reply})
    fetcher = RateFeedFetcher(client, resolver_returning(1.0))

    assert await fetcher.fetch(OBJECT_SOURCE) is None


# ============================================================================
# TEST: array-of-objects feeds
# ============================================================================

@pytest.mark.asyncio
async def test_array_feed_reads_code_and_rate(make_client):
    client = make_client({
        ARRAY_URL: [
            {"code": "BTC", "name": "Bitcoin", "rate": 1},
            {"code": "USD", "name": "US Dollar", "rate": 40000.5},
            {"code": "EUR", "name": "Eurozone Euro", "rate": 37000},
            {"code": "", "rate": 3},
        ]
    })
    fetcher = RateFeedFetcher(client, resolver_returning(0.0001))

    rates = await fetcher.fetch(ARRAY_SOURCE)

    assert list(rates) == ["EUR", "USD"]
    assert rates["USD"].fiat_amount == 400_005_000
    assert rates["EUR"].fiat_amount == 370_000_000
    assert all(r.source == "coindesk.com" for r in rates.values())


@pytest.mark.asyncio
async def test_array_feed_entry_without_code_fails_whole_fetch(make_client):
    client = make_client({ARRAY_URL: [{"code": "USD", "rate": 1}, {"rate": 2}]})
    fetcher = RateFeedFetcher(client, resolver_returning(1.0))

    assert await fetcher.fetch(ARRAY_SOURCE) is None


@pytest.mark.asyncio
async def test_array_feed_rejects_object_reply(make_client):
    client = make_client({ARRAY_URL: {"USD": {"rate": 1}}})
    fetcher = RateFeedFetcher(client, resolver_returning(1.0))

    assert await fetcher.fetch(ARRAY_SOURCE) is None


# ============================================================================
# TEST: failure handling
# ============================================================================

@pytest.mark.asyncio
@pytest.mark.parametrize("reference_rate", [None, 0.0, -0.5])
async def test_fetch_aborts_without_positive_reference_rate(make_client, reference_rate):
    client = make_client({OBJECT_URL: {"EUR": {"last": "500"}}})
    fetcher = RateFeedFetcher(client, resolver_returning(reference_rate))

    assert await fetcher.fetch(OBJECT_SOURCE) is None
    client.get.assert_not_called()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "reply",
    [
        httpx.ConnectError("refused"),
        httpx.ReadTimeout("timed out"),
        httpx.Response(404, text="not found"),
        httpx.Response(301, headers={"Location": "https://elsewhere.test/"}),
        httpx.Response(200, text="not json"),
    ],
)
async def test_fetch_returns_none_on_upstream_failure(make_client, reply):
    client = make_client({OBJECT_URL: reply})
    fetcher = RateFeedFetcher(client, resolver_returning(1.0))

    assert await fetcher.fetch(OBJECT_SOURCE) is None


@pytest.mark.asyncio
async def test_fetch_first_uses_sources_in_order(make_client):
    client = make_client({
        ARRAY_URL: httpx.Response(500, text="error"),
        OBJECT_URL: {"EUR": {"last": 2}},
    })
    fetcher = RateFeedFetcher(client, resolver_returning(1.0))

    rates = await fetcher.fetch_first([ARRAY_SOURCE, OBJECT_SOURCE])

    assert rates["EUR"].source == "BitcoinAverage.com"
    assert [c.args[0] for c in client.get.call_args_list] == [ARRAY_URL, OBJECT_URL]


@pytest.mark.asyncio
async def test_fetch_first_stops_at_first_success(make_client):
    client = make_client({
        ARRAY_URL: [{"code": "USD", "rate": 1}],
        OBJECT_URL: {"EUR": {"last": 2}},
    })
    fetcher = RateFeedFetcher(client, resolver_returning(1.0))

    rates = await fetcher.fetch_first([ARRAY_SOURCE, OBJECT_SOURCE])

    assert list(rates) == ["USD"]
    client.get.assert_called_once_with(ARRAY_URL)


@pytest.mark.asyncio
async def test_fetch_first_returns_none_when_all_fail(make_client):
    fetcher = RateFeedFetcher(make_client({}), resolver_returning(1.0))

    assert await fetcher.fetch_first([ARRAY_SOURCE, OBJECT_SOURCE]) is None
