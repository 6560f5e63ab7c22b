"""Port interface for the counter entry table."""

from abc import ABC, abstractmethod
from typing import Any

from statstore.domain.entities.entry import Entry
from statstore.domain.value_objects.entry_query import EntryQuery


class EntryTable(ABC):
    """Storage primitives over a single table keyed by
    (entity_type, entity_id, user_id, name).

    Errors raised by the backend (constraint violations, connectivity) must
    propagate unchanged.
    """

    @abstractmethod
    async def select(self, query: EntryQuery) -> list[dict[str, Any]]:
        """Return matching rows restricted to ``query.projected_fields()``."""
        ...

    @abstractmethod
    async def insert(self, entry: Entry) -> None:
        """Insert a new row. Must fail if the composite key already exists."""
        ...

    @abstractmethod
    async def update(self, key: dict[str, Any], values: dict[str, Any]) -> int:
        """Set *values* on the row matching *key*; return affected row count."""
        ...

    @abstractmethod
    async def delete(self, key: dict[str, Any]) -> int:
        """Delete the row matching *key*; return affected row count."""
        ...

    @abstractmethod
    async def merge(
        self,
        key: dict[str, Any],
        insert_value: int | float,
        delta: int | float,
        changed: int,
    ) -> int:
        """Atomic upsert in a single statement.

        Inserts ``key`` with ``value=insert_value``, or when the key exists
        sets ``value = value + delta``. ``changed`` is written either way.
        Returns the affected row count.
        """
        ...
