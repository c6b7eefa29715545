from sqlalchemy import delete
from sqlalchemy.future import select

from domain.models.exchange_rate import ExchangeRate
from infrastructure.persistence.database import Database
from infrastructure.persistence.models.preference import PreferenceDB
from infrastructure.persistence.preferences import (
	CACHED_RATE_KEYS,
	KEY_EXCHANGE_CURRENCY_CODE,
	rate_from_fields,
	rate_to_fields,
)


class SqlPreferenceStore:
	def __init__(self, database: Database):
		self.database = database

	async def _get_values(self, keys: tuple[str, ...]) -> dict[str, str]:
		async with self.database.session() as session:
			result = await session.execute(select(PreferenceDB).filter(PreferenceDB.key.in_(keys)))
			return {p.key: p.value for p in result.scalars().all()}

	async def _set_values(self, values: dict[str, str]) -> None:
		async with self.database.session() as session:
			for key, value in values.items():
				await session.merge(PreferenceDB(key=key, value=value))

	async def load_cached_rate(self) -> ExchangeRate | None:
		return rate_from_fields(await self._get_values(CACHED_RATE_KEYS))

	async def save_cached_rate(self, rate: ExchangeRate) -> None:
		await self._set_values(rate_to_fields(rate))

	async def get_exchange_currency_code(self) -> str | None:
		values = await self._get_values((KEY_EXCHANGE_CURRENCY_CODE,))
		return values.get(KEY_EXCHANGE_CURRENCY_CODE) or None

	async def set_exchange_currency_code(self, code: str | None) -> None:
		if code:
			await self._set_values({KEY_EXCHANGE_CURRENCY_CODE: code})
			return
		async with self.database.session() as session:
			await session.execute(delete(PreferenceDB).where(PreferenceDB.key == KEY_EXCHANGE_CURRENCY_CODE))

	async def close(self) -> None:
		await self.database.close()
