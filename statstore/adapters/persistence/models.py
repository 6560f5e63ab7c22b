"""SQLAlchemy ORM models — maps to the counters table."""

from sqlalchemy import Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from statstore.adapters.persistence.database import Base
from statstore.adapters.persistence.types import CounterValue


class CounterEntryModel(Base):
    __tablename__ = "counter_entries"

    entity_type: Mapped[str] = mapped_column(
        String(128), primary_key=True, nullable=False, default="", server_default=""
    )
    entity_id: Mapped[int] = mapped_column(
        Integer, primary_key=True, nullable=False, default=0, server_default="0",
        autoincrement=False,
    )
    user_id: Mapped[int] = mapped_column(
        Integer, primary_key=True, nullable=False, default=0, server_default="0",
        autoincrement=False,
    )
    name: Mapped[str] = mapped_column(String(255), primary_key=True, nullable=False)
    value: Mapped[int | float] = mapped_column(
        CounterValue, nullable=False, default=0, server_default="0"
    )
    changed: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default="0"
    )

    __table_args__ = (
        Index("idx_counter_entries_scope", "entity_type", "entity_id", "user_id"),
    )
