"""Catalog product entity."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from stockroom.domain.model.entity import Entity

if TYPE_CHECKING:
    from datetime import datetime

    from stockroom.domain.model.primitives import Money, Quantity


@dataclass(eq=False, kw_only=True)
class Product(Entity):
    """A catalog item.

    Mutated only through ``ProductMutator``; the audit timestamps are written by
    the mutator from its injected clock, never implicitly.
    """

    name: str
    price: Money
    stock: Quantity
    description: str | None = None
    active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    @property
    def is_live(self) -> bool:
        return self.deleted_at is None

    def __repr__(self) -> str:
        return (
            f"Product(id={self.id!s}, name={self.name!r}, price={self.price}, "
            f"stock={self.stock}, active={self.active}, deleted={self.is_deleted})"
        )
