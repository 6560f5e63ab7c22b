"""Wires adapters into a CounterStore."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from statstore.adapters.clock.system_clock import SystemClock
from statstore.adapters.persistence.entry_table import SqlEntryTable
from statstore.application.counter_store import CounterStore
from statstore.application.ports.clock_port import ClockPort

# Stateless, shared by every store built without an explicit clock
_system_clock = SystemClock()


def build_counter_store(
    session: AsyncSession, clock: ClockPort | None = None
) -> CounterStore:
    return CounterStore(table=SqlEntryTable(session), clock=clock or _system_clock)
