"""Column types for counter values."""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import Numeric
from sqlalchemy.types import TypeDecorator


class _PassthroughNumeric(Numeric):
    """NUMERIC column whose values reach the driver untouched.

    Plain ``Numeric`` coerces binds to float on drivers without native
    decimals (SQLite), which rounds integers above 2**53.
    """

    def bind_processor(self, dialect):
        return None

    def result_processor(self, dialect, coltype):
        return None


def to_number(value: Decimal | int | float | None) -> int | float | None:
    """Whole numbers come back as ``int``, everything else as ``float``."""
    if value is None or isinstance(value, int):
        return value
    if isinstance(value, Decimal):
        if value == value.to_integral_value():
            return int(value)
        return float(value)
    return value


class CounterValue(TypeDecorator):
    """Exact NUMERIC storage that keeps integers as ``int``."""

    impl = Numeric
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.supports_native_decimal:
            return dialect.type_descriptor(Numeric())
        return dialect.type_descriptor(_PassthroughNumeric())

    def process_bind_param(self, value, dialect):
        if value is None or not dialect.supports_native_decimal:
            return value
        if isinstance(value, float):
            return Decimal(repr(value))
        return Decimal(value)

    def process_result_value(self, value, dialect):
        return to_number(value)
