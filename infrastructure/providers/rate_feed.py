import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

import httpx

from domain.conversion import scale_fiat
from domain.exceptions.exchange_rate import ExchangeRateException, ParseError
from domain.models.exchange_rate import COIN, EXCLUDED_CURRENCY_CODES, ExchangeRate
from infrastructure.providers.base import JSONSource
from infrastructure.providers.reference import ReferenceRateResolver

logger = logging.getLogger(__name__)

RateTable = Mapping[str, ExchangeRate]


class FeedShape(Enum):
    OBJECT_OF_OBJECTS = "object_of_objects"  # {"USD": {"last": ...}, "timestamp": ...}
    ARRAY_OF_OBJECTS = "array_of_objects"  # [{"code": "USD", "rate": ...}, ...]


@dataclass(frozen=True)
class RateSource:
    endpoint: str
    source_label: str
    field_priority: tuple[str, ...]
    shape: FeedShape


def _object_entries(data: Any) -> Iterator[tuple[str, dict]]:
    if not isinstance(data, dict):
        raise ParseError("Expected a JSON object of currencies")
    for code, entry in data.items():
        if code == "timestamp":
            continue
        if not isinstance(entry, dict):
            raise ParseError(f"Entry for {code!r} is not an object")
        yield code, entry


def _array_entries(data: Any) -> Iterator[tuple[str, dict]]:
    if not isinstance(data, list):
        raise ParseError("Expected a JSON array of currencies")
    for entry in data:
        if not isinstance(entry, dict) or not isinstance(entry.get("code"), str):
            raise ParseError(f"Entry without a code: {entry!r}")
        yield entry["code"], entry


ENTRY_PARSERS = {
    FeedShape.OBJECT_OF_OBJECTS: _object_entries,
    FeedShape.ARRAY_OF_OBJECTS: _array_entries,
}


class RateFeedFetcher:
    """Fetches a whole rate table from one feed, converted through the reference rate."""

    def __init__(self, client: httpx.AsyncClient, resolver: ReferenceRateResolver):
        self._client = client
        self.resolver = resolver

    async def fetch(self, source: RateSource) -> RateTable | None:
        btc_rate = await self.resolver.resolve()
        if btc_rate is None or btc_rate <= 0:
            logger.warning(f"Skipping {source.source_label}: no usable reference rate")
            return None

        try:
            data = await JSONSource(source.endpoint, self._client).fetch_json()
            return self._parse(data, source, btc_rate)
        except ExchangeRateException as e:
            logger.warning(f"Problem fetching exchange rates from {source.endpoint}: {e}")
            return None

    async def fetch_first(self, sources: list[RateSource]) -> RateTable | None:
        for source in sources:
            rates = await self.fetch(source)
            if rates is not None:
                return rates
        return None

    def _parse(self, data: Any, source: RateSource, btc_rate: float) -> RateTable:
        rates: dict[str, ExchangeRate] = {}
        for code, entry in ENTRY_PARSERS[source.shape](data):
            if not code or code == "timestamp" or code in EXCLUDED_CURRENCY_CODES:
                continue
            rate = self._first_valid_rate(code, entry, source, btc_rate)
            if rate is not None:
                rates[code] = rate
        return dict(sorted(rates.items()))

    def _first_valid_rate(
        self, code: str, entry: dict, source: RateSource, btc_rate: float
    ) -> ExchangeRate | None:
        for field in source.field_priority:
            if field not in entry:
                continue
            try:
                fiat_amount = scale_fiat(entry[field], btc_rate, code)
            except ParseError as e:
                logger.warning(f"Problem fetching {code} exchange rate from {source.endpoint}: {e}")
                continue
            return ExchangeRate(
                currency_code=code,
                coin_amount=COIN,
                fiat_amount=fiat_amount,
                source=source.source_label,
            )
        return None
