"""Options for shaping multi-name value lookups."""

from dataclasses import dataclass


@dataclass(frozen=True)
class FetchOptions:
    # None means "unset": missing names stay absent from the result
    default_value: int | float | None = None
    cast_to_integer: bool = False
