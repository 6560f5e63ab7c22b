"""ValueShaping — turn (name, value) rows into a name→value mapping."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from statstore.domain.value_objects.fetch_options import FetchOptions


def values_by_name(
    rows: Iterable[Mapping[str, Any]], cast_to_integer: bool = False
) -> dict[str, int | float]:
    """Map each row's ``name`` to its ``value``.

    With *cast_to_integer*, values are truncated toward zero (``int()``).
    """
    values: dict[str, int | float] = {}
    for row in rows:
        value = row["value"]
        values[row["name"]] = int(value) if cast_to_integer else value
    return values


def shape_values(
    rows: Iterable[Mapping[str, Any]],
    names: Iterable[str],
    options: FetchOptions,
) -> dict[str, int | float]:
    """Build the result of a multi-name lookup.

    1. Stored values go in as-is, or truncated when ``options.cast_to_integer``.
    2. When ``options.default_value`` is set, every requested name that was
       not found is added with that default (the default itself is not cast).

    Returns:
        An empty dict when nothing was stored and no default is configured.
    """
    values = values_by_name(rows, cast_to_integer=options.cast_to_integer)

    if options.default_value is not None:
        for name in names:
            values.setdefault(name, options.default_value)

    return values
