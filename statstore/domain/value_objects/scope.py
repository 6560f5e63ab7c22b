"""Scope value object — the (entity_type, entity_id, user_id) part of an entry key."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Scope:
    """Addresses one of the four specificity levels of an entry.

    - ``Scope()``: global entry.
    - ``Scope("node")``: applies to the whole entity type.
    - ``Scope("node", 7)``: applies to one entity instance.
    - any of the above with ``user_id`` set: per user.
    """

    entity_type: str = ""
    entity_id: int = 0
    user_id: int = 0

    def __post_init__(self) -> None:
        if self.entity_id < 0:
            raise ValueError(f"entity_id must be non-negative, got {self.entity_id}")
        if self.user_id < 0:
            raise ValueError(f"user_id must be non-negative, got {self.user_id}")

    def key(self, name: str) -> dict[str, str | int]:
        """Full composite key for the entry called *name* in this scope."""
        return {
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "user_id": self.user_id,
            "name": name,
        }


GLOBAL_SCOPE = Scope()


def resolve_scope(
    scope: Scope | None = None,
    entity_type: str | None = None,
    entity_id: int | None = None,
    user_id: int | None = None,
) -> Scope:
    """Build a Scope from either an explicit ``scope`` or the individual parts.

    Omitted parts fall back to ``""`` / ``0``.

    Raises:
        ValueError: if ``scope`` is combined with any individual part.
    """
    parts_given = any(p is not None for p in (entity_type, entity_id, user_id))
    if scope is not None:
        if parts_given:
            raise ValueError("Pass either scope= or entity_type/entity_id/user_id, not both")
        return scope
    if not parts_given:
        return GLOBAL_SCOPE
    return Scope(
        entity_type=entity_type if entity_type is not None else "",
        entity_id=entity_id if entity_id is not None else 0,
        user_id=user_id if user_id is not None else 0,
    )
