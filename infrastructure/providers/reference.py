import logging
from typing import Protocol

import httpx

from domain.conversion import parse_decimal
from domain.exceptions.exchange_rate import ExchangeRateException, ParseError
from infrastructure.providers.base import JSONSource

logger = logging.getLogger(__name__)


class ReferenceRateProvider(Protocol):
    """Source of the reference coin's price in BTC."""

    @property
    def name(self) -> str: ...

    async def fetch_rate(self) -> float: ...


def _positive(value: float, name: str) -> float:
    if value <= 0:
        raise ParseError(f"{name} returned a non-positive rate: {value}")
    return value


class TickerBuyMarket(JSONSource):
    """Market answering ``{"ticker": {"buy": <price>}}``."""

    def __init__(self, url: str, client: httpx.AsyncClient, name: str = "c-cex.com"):
        super().__init__(url, client)
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    async def fetch_rate(self) -> float:
        data = await self.fetch_json()
        try:
            buy = data["ticker"]["buy"]
        except (KeyError, TypeError) as e:
            raise ParseError(f"{self.name}: missing ticker.buy") from e
        return _positive(parse_decimal(buy), self.name)


class LabeledPairMarket(JSONSource):
    """
    Market answering ``{"Success": true, "Data": {"Label": ..., "LastPrice": ...}}``.

    Only a reply for exactly ``pair_label`` is accepted.
    """

    def __init__(
        self, url: str, client: httpx.AsyncClient, pair_label: str, name: str = "cryptopia.co.nz"
    ):
        super().__init__(url, client)
        self.pair_label = pair_label
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    async def fetch_rate(self) -> float:
        data = await self.fetch_json()
        if not isinstance(data, dict):
            raise ParseError(f"{self.name}: expected a JSON object")

        success = data.get("Success")
        if success is not True and success != "true":
            raise ParseError(f"{self.name}: request not successful ({data.get('Message')})")

        market = data.get("Data")
        if not isinstance(market, dict):
            raise ParseError(f"{self.name}: missing Data")
        if market.get("Label") != self.pair_label:
            raise ParseError(f"{self.name}: unexpected pair {market.get('Label')!r}")
        if "LastPrice" not in market:
            raise ParseError(f"{self.name}: missing LastPrice")

        return _positive(parse_decimal(market["LastPrice"]), self.name)


class ReferenceRateResolver:
    def __init__(self, providers: list[ReferenceRateProvider]):
        self.providers = providers

    async def resolve(self) -> float | None:
        """First strictly positive rate from the providers, in order; each is tried once."""
        for provider in self.providers:
            try:
                return await provider.fetch_rate()
            except ExchangeRateException as e:
                logger.warning(f"Reference rate from {provider.name} unavailable: {e}")
        logger.error("No reference rate available from any market")
        return None
