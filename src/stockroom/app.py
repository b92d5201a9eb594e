"""Application wiring: configured mutator plus SQLAlchemy unit of work."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from stockroom.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyCatalogUnitOfWork,
    is_started,
    startup,
)
from stockroom.config import get_catalog_config
from stockroom.domain import catalog
from stockroom.domain.mutator import ProductMutator
from stockroom.domain.ports.clock import utcnow
from stockroom.domain.ports.unit_of_work import CatalogUnitOfWork

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from uuid import UUID

    from stockroom.config import CatalogConfig
    from stockroom.domain.model import Money, Product
    from stockroom.domain.pagination import Page, PageRequest
    from stockroom.domain.ports.clock import Clock
    from stockroom.domain.product_updates import ProductChanges, ProductFields

UnitOfWorkFactory = Callable[[], CatalogUnitOfWork]

log = getLogger(__name__)


def build_mutator(
    config: CatalogConfig | None = None,
    *,
    clock: Clock = utcnow,
) -> ProductMutator:
    effective = config or get_catalog_config()
    return ProductMutator(
        minimum_price=effective.minimum_price,
        deleted_policy=effective.deleted_policy,
        clock=clock,
    )


def default_unit_of_work_factory() -> UnitOfWorkFactory:
    """Return the SQLAlchemy unit of work, starting the adapter on first use."""

    if not is_started():
        log.info("Starting SQLAlchemy adapter")
        startup()
    return SqlAlchemyCatalogUnitOfWork


@dataclass(slots=True)
class CatalogService:
    """Catalog use cases bound to one mutator and one unit-of-work factory."""

    mutator: ProductMutator = field(default_factory=build_mutator)
    unit_of_work_factory: UnitOfWorkFactory = field(default_factory=default_unit_of_work_factory)

    def create(self, fields: ProductFields) -> Product:
        return catalog.create_product(
            fields, mutator=self.mutator, unit_of_work_factory=self.unit_of_work_factory
        )

    def create_many(self, batch: Sequence[ProductFields]) -> list[Product]:
        return catalog.create_products(
            batch, mutator=self.mutator, unit_of_work_factory=self.unit_of_work_factory
        )

    def get(self, product_id: UUID) -> Product:
        return catalog.get_product(product_id, unit_of_work_factory=self.unit_of_work_factory)

    def exists(self, product_id: UUID) -> bool:
        return catalog.product_exists(product_id, unit_of_work_factory=self.unit_of_work_factory)

    def list_page(self, request: PageRequest | None = None) -> Page[Product]:
        return catalog.list_products(request, unit_of_work_factory=self.unit_of_work_factory)

    def search(self, fragment: str) -> list[Product]:
        return catalog.search_products(fragment, unit_of_work_factory=self.unit_of_work_factory)

    def by_price(self, min_price: Money, max_price: Money) -> list[Product]:
        return catalog.find_products_by_price(
            min_price, max_price, unit_of_work_factory=self.unit_of_work_factory
        )

    def update(self, product_id: UUID, fields: ProductFields) -> Product:
        return catalog.update_product(
            product_id,
            fields,
            mutator=self.mutator,
            unit_of_work_factory=self.unit_of_work_factory,
        )

    def patch(self, product_id: UUID, changes: ProductChanges) -> Product:
        return catalog.patch_product(
            product_id,
            changes,
            mutator=self.mutator,
            unit_of_work_factory=self.unit_of_work_factory,
        )

    def adjust_stock(self, product_id: UUID, delta: int) -> Product:
        return catalog.adjust_product_stock(
            product_id,
            delta,
            mutator=self.mutator,
            unit_of_work_factory=self.unit_of_work_factory,
        )

    def soft_delete(self, product_id: UUID) -> Product:
        return catalog.soft_delete_product(
            product_id, mutator=self.mutator, unit_of_work_factory=self.unit_of_work_factory
        )

    def delete(self, product_id: UUID) -> None:
        catalog.delete_product(
            product_id, mutator=self.mutator, unit_of_work_factory=self.unit_of_work_factory
        )

    def delete_many(self, product_ids: Iterable[UUID]) -> int:
        return catalog.delete_products(
            product_ids, mutator=self.mutator, unit_of_work_factory=self.unit_of_work_factory
        )
