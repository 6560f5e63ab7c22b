"""CounterStore — named numeric entries keyed by entity, entity id and user."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from statstore.application.ports.clock_port import ClockPort
from statstore.application.ports.entry_table import EntryTable
from statstore.domain.entities.entry import Entry
from statstore.domain.policies.value_shaping import shape_values, values_by_name
from statstore.domain.value_objects.entry_query import EntryField, EntryQuery
from statstore.domain.value_objects.fetch_options import FetchOptions
from statstore.domain.value_objects.scope import Scope, resolve_scope

_VALUE_ONLY = (EntryField.VALUE,)
_NAME_AND_VALUE = (EntryField.NAME, EntryField.VALUE)


def _row_to_entry(row: dict[str, Any]) -> Entry:
    return Entry(
        name=row["name"],
        value=row["value"],
        entity_type=row["entity_type"],
        entity_id=row["entity_id"],
        user_id=row["user_id"],
        changed=row["changed"],
    )


def _distinct_names(names: Iterable[str]) -> list[str]:
    """Deduplicate requested names, keeping their order.

    Raises:
        TypeError: if *names* is a single string rather than a collection.
    """
    if isinstance(names, str):
        raise TypeError(f"names must be a collection of strings, not the string {names!r}")
    return list(dict.fromkeys(names))


class CounterStore:
    """Fetch, write, and count entries.

    Every operation addresses its scope either with ``scope=Scope(...)`` or
    with the ``entity_type`` / ``entity_id`` / ``user_id`` arguments, which
    default to ``""`` / ``0`` / ``0``. ``fetch("x")`` and
    ``fetch("x", "", 0, 0)`` address the same entry.

    The store keeps no state of its own; concurrency control is whatever the
    table backend provides. Storage errors are never caught here.
    """

    def __init__(self, table: EntryTable, clock: ClockPort):
        self._table = table
        self._clock = clock

    # ─── Reads ──────────────────────────────────────────────────────────

    async def fetch(
        self,
        name: str,
        entity_type: str | None = None,
        entity_id: int | None = None,
        user_id: int | None = None,
        *,
        scope: Scope | None = None,
    ) -> Entry | None:
        """Return the entry for the full key, or None if it does not exist."""
        scope = resolve_scope(scope, entity_type, entity_id, user_id)
        rows = await self._table.select(self._query(scope, names=[name]))
        if not rows:
            return None
        return _row_to_entry(rows[0])

    async def fetch_value(
        self,
        name: str,
        entity_type: str | None = None,
        entity_id: int | None = None,
        user_id: int | None = None,
        *,
        scope: Scope | None = None,
    ) -> int | float | None:
        """Return only the stored value, or None if the entry does not exist."""
        scope = resolve_scope(scope, entity_type, entity_id, user_id)
        rows = await self._table.select(
            self._query(scope, names=[name], fields=_VALUE_ONLY)
        )
        if not rows:
            return None
        return rows[0]["value"]

    async def fetch_multiple(
        self,
        names: Iterable[str],
        entity_type: str | None = None,
        entity_id: int | None = None,
        user_id: int | None = None,
        *,
        scope: Scope | None = None,
    ) -> list[Entry]:
        """Return the entries of *names* that exist in the scope, in no particular order."""
        scope = resolve_scope(scope, entity_type, entity_id, user_id)
        names = _distinct_names(names)
        if not names:
            return []
        rows = await self._table.select(self._query(scope, names=names))
        return [_row_to_entry(r) for r in rows]

    async def fetch_multiple_values(
        self,
        names: Iterable[str],
        entity_type: str | None = None,
        entity_id: int | None = None,
        user_id: int | None = None,
        *,
        scope: Scope | None = None,
        options: FetchOptions | None = None,
    ) -> dict[str, int | float]:
        """Return a name→value mapping for *names* in the scope.

        Args:
            names: machine names to look up.
            options: ``default_value`` fills in names that were not found;
                ``cast_to_integer`` truncates stored values to ``int``.

        Returns:
            The mapping; empty when nothing matched and no default is set.
        """
        scope = resolve_scope(scope, entity_type, entity_id, user_id)
        options = options or FetchOptions()
        names = _distinct_names(names)
        rows: list[dict[str, Any]] = []
        if names:
            rows = await self._table.select(
                self._query(scope, names=names, fields=_NAME_AND_VALUE)
            )
        return shape_values(rows, names, options)

    async def fetch_all(
        self,
        entity_type: str | None = None,
        entity_id: int | None = None,
        user_id: int | None = None,
        *,
        scope: Scope | None = None,
    ) -> list[Entry]:
        """Return every entry in the scope, whatever its name."""
        scope = resolve_scope(scope, entity_type, entity_id, user_id)
        rows = await self._table.select(self._query(scope))
        return [_row_to_entry(r) for r in rows]

    async def fetch_all_values(
        self,
        entity_type: str | None = None,
        entity_id: int | None = None,
        user_id: int | None = None,
        *,
        scope: Scope | None = None,
    ) -> dict[str, int | float]:
        scope = resolve_scope(scope, entity_type, entity_id, user_id)
        rows = await self._table.select(self._query(scope, fields=_NAME_AND_VALUE))
        return values_by_name(rows)

    # ─── Writes ─────────────────────────────────────────────────────────

    async def insert(
        self,
        name: str,
        value: int | float,
        entity_type: str | None = None,
        entity_id: int | None = None,
        user_id: int | None = None,
        *,
        scope: Scope | None = None,
    ) -> None:
        """Create a new entry stamped with the current time.

        Raises:
            sqlalchemy.exc.IntegrityError (or the backend's equivalent): if an
            entry with the same composite key already exists.
        """
        scope = resolve_scope(scope, entity_type, entity_id, user_id)
        await self._table.insert(
            Entry(
                name=name,
                value=value,
                entity_type=scope.entity_type,
                entity_id=scope.entity_id,
                user_id=scope.user_id,
                changed=self._clock.now(),
            )
        )

    async def update(
        self,
        name: str,
        value: int | float,
        entity_type: str | None = None,
        entity_id: int | None = None,
        user_id: int | None = None,
        *,
        scope: Scope | None = None,
    ) -> int:
        """Set value and timestamp of an existing entry; return affected rows (0 or 1)."""
        scope = resolve_scope(scope, entity_type, entity_id, user_id)
        return await self._table.update(
            scope.key(name), {"value": value, "changed": self._clock.now()}
        )

    async def insert_or_update(
        self,
        name: str,
        value: int | float,
        entity_type: str | None = None,
        entity_id: int | None = None,
        user_id: int | None = None,
        *,
        scope: Scope | None = None,
    ) -> int | None:
        """Insert the entry if absent, otherwise update it.

        Not atomic: the existence check and the write are separate
        statements. Two concurrent callers can both see the entry as absent,
        and the second insert then fails with an IntegrityError. Under
        contention treat that error as a lost race and retry, or use
        ``increment`` / ``decrement`` where they fit.

        Returns:
            None when the entry was created, otherwise the affected row count.
        """
        scope = resolve_scope(scope, entity_type, entity_id, user_id)
        existing = await self.fetch_value(name, scope=scope)
        if existing is None:
            await self.insert(name, value, scope=scope)
            return None
        return await self.update(name, value, scope=scope)

    async def insert_if_not_exists(
        self,
        name: str,
        value: int | float,
        entity_type: str | None = None,
        entity_id: int | None = None,
        user_id: int | None = None,
        *,
        scope: Scope | None = None,
    ) -> None:
        """Insert the entry only if absent; an existing value is left untouched.

        Same race as ``insert_or_update``: a concurrent insert between the
        check and the write surfaces as an IntegrityError.
        """
        scope = resolve_scope(scope, entity_type, entity_id, user_id)
        existing = await self.fetch_value(name, scope=scope)
        if existing is None:
            await self.insert(name, value, scope=scope)

    async def delete(
        self,
        name: str,
        entity_type: str | None = None,
        entity_id: int | None = None,
        user_id: int | None = None,
        *,
        scope: Scope | None = None,
    ) -> int:
        """Delete the entry; return affected rows, 0 if it did not exist."""
        scope = resolve_scope(scope, entity_type, entity_id, user_id)
        return await self._table.delete(scope.key(name))

    async def increment(
        self,
        name: str,
        entity_type: str | None = None,
        entity_id: int | None = None,
        user_id: int | None = None,
        *,
        scope: Scope | None = None,
    ) -> bool:
        """Add 1 to the entry, creating it with value 1 if absent.

        Runs as one atomic upsert, so concurrent increments are never lost.
        """
        scope = resolve_scope(scope, entity_type, entity_id, user_id)
        affected = await self._table.merge(
            scope.key(name), insert_value=1, delta=1, changed=self._clock.now()
        )
        return bool(affected)

    async def decrement(
        self,
        name: str,
        entity_type: str | None = None,
        entity_id: int | None = None,
        user_id: int | None = None,
        *,
        scope: Scope | None = None,
    ) -> bool:
        """Subtract 1 from the entry, creating it with value 0 if absent."""
        scope = resolve_scope(scope, entity_type, entity_id, user_id)
        affected = await self._table.merge(
            scope.key(name), insert_value=0, delta=-1, changed=self._clock.now()
        )
        return bool(affected)

    # ─── Query composition ──────────────────────────────────────────────

    @staticmethod
    def _query(
        scope: Scope,
        names: list[str] | None = None,
        fields: tuple[EntryField, ...] | None = None,
    ) -> EntryQuery:
        return EntryQuery(
            scope=scope,
            names=tuple(names) if names else None,
            fields=fields,
        )
