"""Apply product command DTOs to a product.

These helpers only write fields. Rule checks and audit timestamps belong to
``ProductMutator``, which calls them after all checks passed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .dto import UNSET

if TYPE_CHECKING:
    from stockroom.domain.model import Product

    from .dto import ProductChanges, ProductFields


def apply_product_fields(product: Product, fields: ProductFields) -> Product:
    """Replace every business field of ``product`` with ``fields``."""

    product.name = fields.name
    product.description = fields.description
    product.price = fields.price
    product.stock = fields.stock
    product.active = fields.active
    return product


def apply_product_changes(product: Product, changes: ProductChanges) -> Product:
    """Write only the fields that ``changes`` provides."""

    if changes.name is not UNSET:
        product.name = changes.name
    if changes.description is not UNSET:
        product.description = changes.description
    if changes.price is not UNSET:
        product.price = changes.price
    if changes.stock is not UNSET:
        product.stock = changes.stock
    if changes.active is not UNSET:
        product.active = changes.active
    return product


def resulting_stock(product: Product, changes: ProductChanges) -> int:
    """Stock the product would hold after ``changes``."""

    return product.stock if changes.stock is UNSET else changes.stock


def resulting_name(product: Product, changes: ProductChanges) -> str:
    return product.name if changes.name is UNSET else changes.name
