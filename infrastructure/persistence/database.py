from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from infrastructure.persistence.models.preference import Base


class Database:
	"""Async engine for the preferences table; one transaction per `session()` block."""

	def __init__(self, url: str):
		self.url = url
		self.engine = create_async_engine(url, pool_pre_ping=True)
		self._sessions = async_sessionmaker(self.engine, expire_on_commit=False)

	async def create_tables(self) -> None:
		async with self.engine.begin() as conn:
			await conn.run_sync(Base.metadata.create_all)

	@asynccontextmanager
	async def session(self) -> AsyncIterator[AsyncSession]:
		# begin() commits on exit and rolls back if the block raises
		async with self._sessions.begin() as session:
			yield session

	async def close(self) -> None:
		await self.engine.dispose()
