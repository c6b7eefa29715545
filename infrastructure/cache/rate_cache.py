from collections.abc import Mapping
from datetime import timedelta
from types import MappingProxyType

from domain.models.exchange_rate import ExchangeRate

UPDATE_INTERVAL = timedelta(minutes=10)


class RateCache:
    """
    In-memory table of the latest rates per currency code.

    The published table is never mutated. ``replace`` builds the new mapping
    first and swaps the reference in one assignment, so a reader holding a
    snapshot always sees one complete table.
    """

    def __init__(self, update_interval: timedelta = UPDATE_INTERVAL):
        self.update_interval = update_interval
        self._table: Mapping[str, ExchangeRate] | None = None
        self._last_updated_millis = 0

    @property
    def last_updated_millis(self) -> int:
        return self._last_updated_millis

    def seed(self, rate: ExchangeRate) -> None:
        self._table = MappingProxyType({rate.currency_code: rate})

    def replace(self, table: Mapping[str, ExchangeRate], now_millis: int) -> None:
        self._table = MappingProxyType(dict(sorted(table.items())))
        self._last_updated_millis = now_millis

    def is_stale(self, now_millis: int) -> bool:
        if self._last_updated_millis == 0:
            return True
        interval_millis = self.update_interval.total_seconds() * 1000
        return now_millis - self._last_updated_millis > interval_millis

    def snapshot(self) -> Mapping[str, ExchangeRate] | None:
        return self._table
