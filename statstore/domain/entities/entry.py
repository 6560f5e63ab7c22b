"""Entry entity — one named numeric value attached to a scope."""

from dataclasses import dataclass

from statstore.domain.value_objects.scope import Scope


@dataclass
class Entry:
    name: str
    value: int | float
    entity_type: str = ""
    entity_id: int = 0
    user_id: int = 0
    changed: int = 0

    @property
    def scope(self) -> Scope:
        return Scope(
            entity_type=self.entity_type,
            entity_id=self.entity_id,
            user_id=self.user_id,
        )
