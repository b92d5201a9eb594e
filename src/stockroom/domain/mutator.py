"""Business rules for creating and mutating catalog products.

``ProductMutator`` computes the next state of a ``Product`` for each command. It
performs no I/O: uniqueness and dependency information arrive as arguments, the
current time comes from the injected clock. Every check runs before the first
field is written, so a failed call leaves the product exactly as it was.

Callers are expected to run "read, mutate, write" inside one unit of work; the
mutator assumes the product it receives is not changed elsewhere meanwhile.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import TYPE_CHECKING

from stockroom.domain.errors import (
    DependencyConflictError,
    DuplicateNameError,
    InvalidPriceError,
    NegativeStockError,
    NotFoundError,
)
from stockroom.domain.model import DeleteDecision, DeletedRecordPolicy, Product
from stockroom.domain.ports.clock import utcnow
from stockroom.domain.product_updates import (
    apply_product_changes,
    apply_product_fields,
    resulting_stock,
)

if TYPE_CHECKING:
    from datetime import datetime

    from stockroom.domain.model import Money
    from stockroom.domain.ports.clock import Clock, NameLookup
    from stockroom.domain.product_updates import ProductChanges, ProductFields

log = logging.getLogger(__name__)


class ProductMutator:
    """Apply create / update / patch / stock / delete rules to products."""

    def __init__(
        self,
        *,
        minimum_price: Money = Decimal("1.00"),
        deleted_policy: DeletedRecordPolicy = DeletedRecordPolicy.REJECT,
        clock: Clock = utcnow,
    ) -> None:
        if minimum_price < 0:
            raise ValueError(f"minimum price must be non-negative, got {minimum_price}")
        self.minimum_price = minimum_price
        self.deleted_policy = deleted_policy
        self._clock = clock

    # create ------------------------------------------------------------------

    def prepare_create(self, fields: ProductFields, *, name_exists: NameLookup) -> Product:
        """Return a new, live, active product built from ``fields``.

        The identifier stays unset; the repository assigns it on ``add``.
        """

        if name_exists(fields.name):
            log.warning("Product with name %r already exists", fields.name)
            raise DuplicateNameError(fields.name)
        if fields.price < self.minimum_price:
            raise InvalidPriceError(fields.price, self.minimum_price)
        if fields.stock < 0:
            raise NegativeStockError(0, fields.stock)

        now = self._now()
        product = Product(
            name=fields.name,
            description=fields.description,
            price=fields.price,
            stock=fields.stock,
            active=True,
            created_at=now,
            updated_at=now,
            deleted_at=None,
        )
        log.debug("Prepared new product %r", product.name)
        return product

    # update ------------------------------------------------------------------

    def apply_full_update(self, product: Product, fields: ProductFields) -> Product:
        """Replace name, description, price, stock and active flag."""

        self._ensure_updatable(product)
        if fields.stock < 0:
            raise NegativeStockError(product.stock, fields.stock - product.stock)

        apply_product_fields(product, fields)
        product.updated_at = self._now()
        return product

    def apply_partial_update(self, product: Product, changes: ProductChanges) -> Product:
        """Write only the provided fields; ``updated_at`` is touched even if none are."""

        self._ensure_updatable(product)
        new_stock = resulting_stock(product, changes)
        if new_stock < 0:
            raise NegativeStockError(product.stock, new_stock - product.stock)

        apply_product_changes(product, changes)
        product.updated_at = self._now()
        return product

    def adjust_stock(self, product: Product, delta: int) -> Product:
        """Add ``delta`` (possibly negative) to the stock."""

        self._ensure_updatable(product)
        new_stock = product.stock + delta
        if new_stock < 0:
            log.warning(
                "Rejected stock adjustment for product %s: %s %+d", product.id, product.stock, delta
            )
            raise NegativeStockError(product.stock, delta)

        old_stock = product.stock
        product.stock = new_stock
        product.updated_at = self._now()
        log.debug("Stock for product %s: %s -> %s", product.id, old_stock, new_stock)
        return product

    # delete ------------------------------------------------------------------

    def soft_delete(self, product: Product) -> Product:
        """Mark the product as deleted.

        Calling it again on a deleted product is not an error; it moves
        ``deleted_at`` to the new time.
        """

        now = self._now()
        product.deleted_at = now
        product.updated_at = now
        return product

    @staticmethod
    def hard_delete_guard(product: Product, has_dependents: bool) -> DeleteDecision:  # noqa: FBT001
        _ = product
        return DeleteDecision.DENIED if has_dependents else DeleteDecision.ALLOWED

    def ensure_deletable(self, product: Product, *, has_dependents: bool) -> None:
        """Raise ``DependencyConflictError`` unless the guard allows a hard delete."""

        if self.hard_delete_guard(product, has_dependents) is DeleteDecision.DENIED:
            log.warning("Product %s has dependents; hard delete denied", product.id)
            raise DependencyConflictError(product.id)

    # helpers -----------------------------------------------------------------

    def _ensure_updatable(self, product: Product) -> None:
        if product.is_deleted and self.deleted_policy is DeletedRecordPolicy.REJECT:
            raise NotFoundError(
                f"Product {product.id} was deleted and cannot be updated",
                product_id=product.id,
            )

    def _now(self) -> datetime:
        return self._clock()
