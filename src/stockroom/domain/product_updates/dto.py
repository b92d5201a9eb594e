"""Product command DTOs (transport-agnostic)."""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Mapping

    from stockroom.domain.model import Money, Quantity


class _Unset(Enum):
    UNSET = "UNSET"

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Final = _Unset.UNSET
"""Marks a partial-update field as "leave unchanged"; ``None`` is a real value."""

type Settable[T] = T | _Unset


@dataclass(slots=True, frozen=True)
class ProductFields:
    """Complete field set for creating or fully replacing a product."""

    name: str
    price: Money
    stock: Quantity
    description: str | None = None
    active: bool = True


@dataclass(slots=True, frozen=True)
class ProductChanges:
    """Partial update: each field is either ``UNSET`` or the value to write."""

    name: Settable[str] = UNSET
    description: Settable[str | None] = UNSET
    price: Settable[Money] = UNSET
    stock: Settable[Quantity] = UNSET
    active: Settable[bool] = UNSET

    @classmethod
    def from_mapping(cls, values: Mapping[str, object]) -> ProductChanges:
        """Build changes from a mapping; absent keys stay ``UNSET``."""

        known = {item.name for item in fields(cls)}
        unknown = set(values).difference(known)
        if unknown:
            raise ValueError(f"Unknown product fields: {', '.join(sorted(unknown))}")
        return cls(**dict(values))  # pyright: ignore[reportArgumentType]

    def provided(self) -> dict[str, object]:
        """Return the fields that carry a value, in declaration order."""

        result: dict[str, object] = {}
        for item in fields(self):
            value = getattr(self, item.name)
            if value is not UNSET:
                result[item.name] = value
        return result

    @property
    def is_empty(self) -> bool:
        return not self.provided()
