"""
Base building blocks:
identity assigned by the persistence collaborator.
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID, uuid4


def new_id() -> UUID:
    return uuid4()


@dataclass(eq=False, kw_only=True)
class Entity:
    """Identity is absent until the entity is first stored, then never changes."""

    id: UUID | None = None

    @property
    def is_persisted(self) -> bool:
        return self.id is not None

    def assign_id(self, value: UUID) -> None:
        """Set the identifier once; called by repositories on first add."""
        if self.id is not None and self.id != value:
            raise ValueError("identifier already assigned")
        self.id = value
