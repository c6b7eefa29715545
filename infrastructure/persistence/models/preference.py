from sqlalchemy import String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
	pass


class PreferenceDB(Base):
	__tablename__ = 'preferences'

	key: Mapped[str] = mapped_column(String(64), primary_key=True)
	value: Mapped[str] = mapped_column(String(255), nullable=False)
