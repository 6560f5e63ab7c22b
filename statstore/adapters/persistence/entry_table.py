"""SQLAlchemy implementation of the EntryTable port."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import ColumnElement, delete, insert, or_, select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from statstore.adapters.persistence.models import CounterEntryModel
from statstore.application.ports.entry_table import EntryTable
from statstore.domain.entities.entry import Entry
from statstore.domain.value_objects.entry_query import KEY_FIELDS, EntryQuery

logger = logging.getLogger(__name__)

_table = CounterEntryModel.__table__

# Dialects with a native INSERT ... ON CONFLICT DO UPDATE
_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


# ─── Condition builders ──────────────────────────────────────────────


def _key_conditions(key: dict[str, Any]) -> list[ColumnElement[bool]]:
    return [_table.c[f.value] == key[f.value] for f in KEY_FIELDS]


def _query_conditions(query: EntryQuery) -> list[ColumnElement[bool]]:
    conditions = [
        _table.c.entity_type == query.scope.entity_type,
        _table.c.entity_id == query.scope.entity_id,
        _table.c.user_id == query.scope.user_id,
    ]
    if query.names:
        if len(query.names) == 1:
            conditions.append(_table.c.name == query.names[0])
        else:
            conditions.append(or_(*(_table.c.name == n for n in query.names)))
    return conditions


# ─── Table ───────────────────────────────────────────────────────────


class SqlEntryTable(EntryTable):
    """Issues one statement per call inside the caller's session.

    Committing is left to the session owner (see ``session_scope``).
    """

    def __init__(self, session: AsyncSession, dialect_name: str | None = None):
        self._s = session
        self._dialect_name = dialect_name

    async def select(self, query: EntryQuery) -> list[dict[str, Any]]:
        columns = [_table.c[f.value] for f in query.projected_fields()]
        result = await self._s.execute(select(*columns).where(*_query_conditions(query)))
        return [dict(row) for row in result.mappings()]

    async def insert(self, entry: Entry) -> None:
        await self._s.execute(
            insert(_table).values(
                **entry.scope.key(entry.name),
                value=entry.value,
                changed=entry.changed,
            )
        )

    async def update(self, key: dict[str, Any], values: dict[str, Any]) -> int:
        result = await self._s.execute(
            update(_table).where(*_key_conditions(key)).values(**values)
        )
        return result.rowcount

    async def delete(self, key: dict[str, Any]) -> int:
        result = await self._s.execute(delete(_table).where(*_key_conditions(key)))
        return result.rowcount

    async def merge(
        self,
        key: dict[str, Any],
        insert_value: int | float,
        delta: int | float,
        changed: int,
    ) -> int:
        dialect = self._resolve_dialect()
        upsert_insert = _UPSERT_INSERTS.get(dialect)
        if upsert_insert is None:
            raise NotImplementedError(f"Atomic merge is not supported on dialect {dialect!r}")

        stmt = upsert_insert(_table).values(
            **{f.value: key[f.value] for f in KEY_FIELDS},
            value=insert_value,
            changed=changed,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[_table.c[f.value] for f in KEY_FIELDS],
            set_={
                "value": _table.c.value + delta,
                "changed": stmt.excluded.changed,
            },
        )
        logger.debug("Merging %s (delta=%s) via %s upsert", key, delta, dialect)
        result = await self._s.execute(stmt)
        return result.rowcount

    def _resolve_dialect(self) -> str:
        if self._dialect_name is None:
            self._dialect_name = self._s.get_bind().dialect.name
        return self._dialect_name
