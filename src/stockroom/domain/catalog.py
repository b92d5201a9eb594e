"""Application services for managing the product catalog.

Each use case opens one unit of work, loads what it needs, lets
``ProductMutator`` compute the new state and commits. Errors propagate out of
the ``with`` block, which rolls the unit of work back; batch operations
therefore either store every element or none.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from stockroom.domain.errors import (
    DuplicateNameError,
    InvalidPriceRangeError,
    MissingProductsError,
    NotFoundError,
)
from stockroom.domain.pagination import PageRequest
from stockroom.domain.product_updates import resulting_name

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence
    from uuid import UUID

    from stockroom.domain.model import Money, Product
    from stockroom.domain.mutator import ProductMutator
    from stockroom.domain.pagination import Page
    from stockroom.domain.ports.persistence import ProductRepository
    from stockroom.domain.ports.unit_of_work import CatalogUnitOfWork
    from stockroom.domain.product_updates import ProductChanges, ProductFields

    UnitOfWorkFactory = Callable[[], CatalogUnitOfWork]

log = logging.getLogger(__name__)


# create ----------------------------------------------------------------------


def create_product(
    fields: ProductFields,
    *,
    mutator: ProductMutator,
    unit_of_work_factory: UnitOfWorkFactory,
) -> Product:
    """Validate and store a new product."""

    log.info("Creating new product: %s", fields.name)
    with unit_of_work_factory() as uow:
        repository = uow.repositories.products
        product = mutator.prepare_create(fields, name_exists=repository.live_name_exists)
        repository.add(product)
        uow.commit()
    log.info("Product created successfully with id: %s", product.id)
    return product


def create_products(
    batch: Sequence[ProductFields],
    *,
    mutator: ProductMutator,
    unit_of_work_factory: UnitOfWorkFactory,
) -> list[Product]:
    """Create several products atomically.

    Elements are processed in order; a name repeated inside the batch counts as
    a duplicate of the earlier element.
    """

    log.info("Creating %s products in batch", len(batch))
    created: list[Product] = []
    with unit_of_work_factory() as uow:
        repository = uow.repositories.products
        staged: set[str] = set()

        def name_exists(name: str) -> bool:
            return name in staged or repository.live_name_exists(name)

        for fields in batch:
            product = mutator.prepare_create(fields, name_exists=name_exists)
            repository.add(product)
            staged.add(product.name)
            created.append(product)
        uow.commit()
    log.info("%s products created successfully", len(created))
    return created


# read ------------------------------------------------------------------------


def get_product(product_id: UUID, *, unit_of_work_factory: UnitOfWorkFactory) -> Product:
    """Return a product by id, including soft-deleted ones."""

    with unit_of_work_factory() as uow:
        return _require(uow.repositories.products, product_id)


def product_exists(product_id: UUID, *, unit_of_work_factory: UnitOfWorkFactory) -> bool:
    with unit_of_work_factory() as uow:
        return uow.repositories.products.exists(product_id)


def list_products(
    request: PageRequest | None = None,
    *,
    unit_of_work_factory: UnitOfWorkFactory,
) -> Page[Product]:
    """Return one page of live products."""

    page_request = request or PageRequest()
    log.info("Fetching products - page: %s, size: %s", page_request.page, page_request.size)
    with unit_of_work_factory() as uow:
        page = uow.repositories.products.list_live(page_request)
    log.info("Found %s products in %s pages", page.total, page.total_pages)
    return page


def search_products(fragment: str, *, unit_of_work_factory: UnitOfWorkFactory) -> list[Product]:
    """Return live products whose name contains ``fragment`` (case-insensitive)."""

    with unit_of_work_factory() as uow:
        products = list(uow.repositories.products.search_live(fragment))
    log.info("Found %s products matching %r", len(products), fragment)
    return products


def find_products_by_price(
    min_price: Money,
    max_price: Money,
    *,
    unit_of_work_factory: UnitOfWorkFactory,
) -> list[Product]:
    """Return live products priced within ``[min_price, max_price]``."""

    if min_price > max_price:
        raise InvalidPriceRangeError(min_price, max_price)
    with unit_of_work_factory() as uow:
        return list(uow.repositories.products.live_in_price_range(min_price, max_price))


# update ----------------------------------------------------------------------


def update_product(
    product_id: UUID,
    fields: ProductFields,
    *,
    mutator: ProductMutator,
    unit_of_work_factory: UnitOfWorkFactory,
) -> Product:
    """Replace every field of an existing product."""

    log.info("Updating product id: %s", product_id)
    with unit_of_work_factory() as uow:
        repository = uow.repositories.products
        product = _require(repository, product_id)
        if product.is_live and fields.name != product.name:
            _ensure_name_free(repository, fields.name, product_id)
        mutator.apply_full_update(product, fields)
        uow.commit()
    log.info("Product id %s updated successfully", product_id)
    return product


def patch_product(
    product_id: UUID,
    changes: ProductChanges,
    *,
    mutator: ProductMutator,
    unit_of_work_factory: UnitOfWorkFactory,
) -> Product:
    """Apply a partial update to an existing product."""

    if changes.is_empty:
        log.info("Partially updating product id: %s (no fields, timestamp only)", product_id)
    else:
        log.info(
            "Partially updating product id: %s (%s)", product_id, ", ".join(changes.provided())
        )
    with unit_of_work_factory() as uow:
        repository = uow.repositories.products
        product = _require(repository, product_id)
        new_name = resulting_name(product, changes)
        if product.is_live and new_name != product.name:
            _ensure_name_free(repository, new_name, product_id)
        mutator.apply_partial_update(product, changes)
        uow.commit()
    log.info("Product id %s partially updated", product_id)
    return product


def adjust_product_stock(
    product_id: UUID,
    delta: int,
    *,
    mutator: ProductMutator,
    unit_of_work_factory: UnitOfWorkFactory,
) -> Product:
    """Add a signed quantity to the stock of a product."""

    log.info("Updating stock for product id %s: %+d", product_id, delta)
    with unit_of_work_factory() as uow:
        product = _require(uow.repositories.products, product_id)
        previous = product.stock
        mutator.adjust_stock(product, delta)
        uow.commit()
    log.info("Stock updated for product id %s: %s -> %s", product_id, previous, product.stock)
    return product


# delete ----------------------------------------------------------------------


def soft_delete_product(
    product_id: UUID,
    *,
    mutator: ProductMutator,
    unit_of_work_factory: UnitOfWorkFactory,
) -> Product:
    """Mark a product as deleted without removing it."""

    log.info("Soft deleting product with id: %s", product_id)
    with unit_of_work_factory() as uow:
        product = _require(uow.repositories.products, product_id)
        mutator.soft_delete(product)
        uow.commit()
    log.info("Product id %s soft deleted successfully", product_id)
    return product


def delete_product(
    product_id: UUID,
    *,
    mutator: ProductMutator,
    unit_of_work_factory: UnitOfWorkFactory,
) -> None:
    """Physically remove a product that has no dependent records."""

    log.info("Deleting product with id: %s", product_id)
    with unit_of_work_factory() as uow:
        repository = uow.repositories.products
        product = _require(repository, product_id)
        mutator.ensure_deletable(product, has_dependents=repository.has_dependents(product_id))
        repository.remove(product)
        uow.commit()
    log.info("Product id %s deleted successfully", product_id)


def delete_products(
    product_ids: Iterable[UUID],
    *,
    mutator: ProductMutator,
    unit_of_work_factory: UnitOfWorkFactory,
) -> int:
    """Remove several products atomically; returns how many were removed."""

    requested = list(dict.fromkeys(product_ids))
    log.info("Deleting %s products in batch", len(requested))
    with unit_of_work_factory() as uow:
        repository = uow.repositories.products
        products = repository.get_many(requested)
        found = {product.id for product in products}
        missing = [product_id for product_id in requested if product_id not in found]
        if missing:
            log.warning("Batch delete aborted; %s products not found", len(missing))
            raise MissingProductsError(missing)
        for product in products:
            mutator.ensure_deletable(
                product,
                has_dependents=product.id is not None and repository.has_dependents(product.id),
            )
        for product in products:
            repository.remove(product)
        uow.commit()
    log.info("%s products deleted successfully", len(products))
    return len(products)


# helpers ---------------------------------------------------------------------


def _require(repository: ProductRepository, product_id: UUID) -> Product:
    product = repository.get(product_id)
    if product is None:
        log.warning("Product not found with id: %s", product_id)
        raise NotFoundError.for_id(product_id)
    return product


def _ensure_name_free(repository: ProductRepository, name: str, product_id: UUID) -> None:
    if repository.live_name_exists(name, exclude_id=product_id):
        log.warning("Product with name %r already exists", name)
        raise DuplicateNameError(name)
