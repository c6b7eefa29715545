from redis import asyncio as redis

from domain.models.exchange_rate import ExchangeRate
from infrastructure.persistence.preferences import (
    CACHED_RATE_KEYS,
    KEY_EXCHANGE_CURRENCY_CODE,
    rate_from_fields,
    rate_to_fields,
)

PREFERENCES_KEY = "preferences"


class RedisPreferenceStore:
    """Preferences kept as fields of one Redis hash."""

    def __init__(self, redis_client: redis.Redis):
        self.redis = redis_client

    async def load_cached_rate(self) -> ExchangeRate | None:
        values = await self.redis.hmget(PREFERENCES_KEY, list(CACHED_RATE_KEYS))
        return rate_from_fields(
            {key: value for key, value in zip(CACHED_RATE_KEYS, values, strict=True) if value}
        )

    async def save_cached_rate(self, rate: ExchangeRate) -> None:
        await self.redis.hset(PREFERENCES_KEY, mapping=rate_to_fields(rate))

    async def get_exchange_currency_code(self) -> str | None:
        return await self.redis.hget(PREFERENCES_KEY, KEY_EXCHANGE_CURRENCY_CODE) or None

    async def set_exchange_currency_code(self, code: str | None) -> None:
        if code:
            await self.redis.hset(PREFERENCES_KEY, KEY_EXCHANGE_CURRENCY_CODE, code)
        else:
            await self.redis.hdel(PREFERENCES_KEY, KEY_EXCHANGE_CURRENCY_CODE)

    async def close(self) -> None:
        await self.redis.aclose()
