from typing import Protocol

from domain.models.exchange_rate import ExchangeRate

KEY_CURRENCY_CODE = "currency_code"
KEY_RATE_COIN = "rate_coin"
KEY_RATE_FIAT = "rate_fiat"
KEY_SOURCE = "source"
KEY_EXCHANGE_CURRENCY_CODE = "exchange_currency_code"

CACHED_RATE_KEYS = (KEY_CURRENCY_CODE, KEY_RATE_COIN, KEY_RATE_FIAT, KEY_SOURCE)


class PreferenceStore(Protocol):
    """Durable key-value preferences."""

    async def load_cached_rate(self) -> ExchangeRate | None: ...

    async def save_cached_rate(self, rate: ExchangeRate) -> None: ...

    async def get_exchange_currency_code(self) -> str | None: ...

    async def set_exchange_currency_code(self, code: str | None) -> None: ...

    async def close(self) -> None: ...


def rate_to_fields(rate: ExchangeRate) -> dict[str, str]:
    return {
        KEY_CURRENCY_CODE: rate.currency_code,
        KEY_RATE_COIN: str(rate.coin_amount),
        KEY_RATE_FIAT: str(rate.fiat_amount),
        KEY_SOURCE: rate.source,
    }


def rate_from_fields(fields: dict[str, str]) -> ExchangeRate | None:
    """Rebuild the cached rate; None when nothing complete was stored."""
    if any(not fields.get(key) for key in CACHED_RATE_KEYS):
        return None
    return ExchangeRate(
        currency_code=fields[KEY_CURRENCY_CODE],
        coin_amount=int(fields[KEY_RATE_COIN]),
        fiat_amount=int(fields[KEY_RATE_FIAT]),
        source=fields[KEY_SOURCE],
    )
