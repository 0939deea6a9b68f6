from __future__ import annotations

from sqlalchemy import CursorResult, String, Text, create_engine, delete, select
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, sessionmaker

from inventory.repositories.base import AbstractSlotStorage


class Base(DeclarativeBase):
    pass


class StorageSlotORM(Base):
    __tablename__ = "storage_slots"

    key: Mapped[str] = mapped_column(String, primary_key=True)
    # The whole serialized collection; the slot is replaced wholesale on every write.
    data: Mapped[str] = mapped_column(Text, nullable=False)


class SQLiteSlotStorage(AbstractSlotStorage):
    def __init__(self, database_url: str) -> None:
        self.engine = create_engine(database_url)
        self.session_maker = sessionmaker(self.engine, expire_on_commit=False)

    def initialize(self) -> None:
        Base.metadata.create_all(self.engine)

    def dispose(self) -> None:
        self.engine.dispose()

    def read(self, slot: str) -> str | None:
        with self.session_maker() as session:
            result = session.execute(select(StorageSlotORM.data).where(StorageSlotORM.key == slot))
            return result.scalar_one_or_none()

    def write(self, slot: str, payload: str) -> None:
        with self.session_maker() as session, session.begin():
            orm_slot = session.get(StorageSlotORM, slot)
            if orm_slot:
                orm_slot.data = payload
            else:
                session.add(StorageSlotORM(key=slot, data=payload))

    def clear(self, slot: str) -> bool:
        with self.session_maker() as session, session.begin():
            result = session.execute(delete(StorageSlotORM).where(StorageSlotORM.key == slot))
            if isinstance(result, CursorResult):
                return bool(result.rowcount > 0)
            return False
