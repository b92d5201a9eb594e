"""Ports for persisting catalog products."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from stockroom.domain.model import Product

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from uuid import UUID

    from stockroom.domain.model import Money
    from stockroom.domain.pagination import Page, PageRequest


@runtime_checkable
class Repository[TEntity](Protocol):
    """Minimal repository contract for a persistent aggregate store."""

    def add(self, entity: TEntity) -> None: ...


@runtime_checkable
class ProductRepository(Repository[Product], Protocol):
    """Persistence contract for products.

    ``add`` assigns the identifier of a new product. ``get`` and ``get_many``
    see soft-deleted products too; every ``*_live`` query hides them.
    """

    def get(self, product_id: UUID) -> Product | None: ...

    def get_many(self, product_ids: Iterable[UUID]) -> list[Product]: ...

    def exists(self, product_id: UUID) -> bool: ...

    def remove(self, product: Product) -> None: ...

    def live_name_exists(self, name: str, *, exclude_id: UUID | None = None) -> bool: ...

    def has_dependents(self, product_id: UUID) -> bool: ...

    def list_live(self, request: PageRequest) -> Page[Product]: ...

    def search_live(self, fragment: str) -> Sequence[Product]: ...

    def live_in_price_range(self, min_price: Money, max_price: Money) -> Sequence[Product]: ...
