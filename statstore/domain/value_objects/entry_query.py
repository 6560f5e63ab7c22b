"""EntryQuery value object — filter and projection for entry lookups."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from statstore.domain.value_objects.scope import GLOBAL_SCOPE, Scope


class EntryField(str, Enum):
    ENTITY_TYPE = "entity_type"
    ENTITY_ID = "entity_id"
    USER_ID = "user_id"
    NAME = "name"
    VALUE = "value"
    CHANGED = "changed"


SCOPE_FIELDS = (EntryField.ENTITY_TYPE, EntryField.ENTITY_ID, EntryField.USER_ID)
KEY_FIELDS = (*SCOPE_FIELDS, EntryField.NAME)


@dataclass(frozen=True)
class EntryQuery:
    """Select entries of one scope, optionally restricted to some names.

    Scope columns always match by equality. ``names`` of ``None`` (or empty)
    means no name filter; a single name is an equality, several names form
    an OR group. ``fields`` of ``None`` selects the full row.
    """

    scope: Scope = GLOBAL_SCOPE
    names: tuple[str, ...] | None = None
    fields: tuple[EntryField, ...] | None = None

    def projected_fields(self) -> tuple[EntryField, ...]:
        return self.fields or tuple(EntryField)

    def matches(self, row: Mapping[str, Any]) -> bool:
        """Evaluate the filter against a full row (used by in-memory tables)."""
        if (
            row["entity_type"] != self.scope.entity_type
            or row["entity_id"] != self.scope.entity_id
            or row["user_id"] != self.scope.user_id
        ):
            return False
        if self.names:
            return row["name"] in self.names
        return True

    def project(self, row: Mapping[str, Any]) -> dict[str, Any]:
        return {f.value: row[f.value] for f in self.projected_fields()}
