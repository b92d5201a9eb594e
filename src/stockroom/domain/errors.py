"""Business-rule errors raised by the catalog domain.

Three kinds:

* ``ValidationError``: input breaks a rule before anything is written.
* ``ConflictError``: rejected because of existing state.
* ``NotFoundError``: the targeted product is absent (or hidden by policy).

Adapters translate these into their own responses; nothing here depends on a
transport.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable
    from uuid import UUID

    from stockroom.domain.model import Money


class CatalogError(Exception):
    """Base class for catalog business-rule failures."""


class ValidationError(CatalogError, ValueError):
    """Input fails a business rule before any mutation."""


class ConflictError(CatalogError):
    """Operation rejected because of the current state of the catalog."""


class NotFoundError(CatalogError, LookupError):
    """Operation targets a product that does not exist."""

    def __init__(self, message: str, *, product_id: UUID | None = None) -> None:
        super().__init__(message)
        self.product_id = product_id

    @classmethod
    def for_id(cls, product_id: UUID) -> NotFoundError:
        return cls(f"Product not found with id: {product_id}", product_id=product_id)


class MissingProductsError(NotFoundError):
    """Raised by batch operations when some identifiers are absent."""

    def __init__(self, missing: Iterable[UUID]) -> None:
        self.missing = tuple(missing)
        listed = ", ".join(str(product_id) for product_id in self.missing)
        super().__init__(f"Products not found: {listed}")


class InvalidPriceError(ValidationError):
    def __init__(self, price: Money, minimum: Money) -> None:
        super().__init__(f"Price {price} is below the minimum of {minimum}")
        self.price = price
        self.minimum = minimum


class InvalidPriceRangeError(ValidationError):
    def __init__(self, min_price: Money, max_price: Money) -> None:
        super().__init__(f"Minimum price {min_price} is greater than maximum price {max_price}")
        self.min_price = min_price
        self.max_price = max_price


class NegativeStockError(ValidationError):
    def __init__(self, stock: int, delta: int = 0) -> None:
        resulting = stock + delta
        super().__init__(
            f"Stock cannot become negative (current={stock}, delta={delta}, result={resulting})"
        )
        self.stock = stock
        self.delta = delta
        self.resulting = resulting


class DuplicateNameError(ConflictError):
    def __init__(self, name: str) -> None:
        super().__init__(f"A product named {name!r} already exists")
        self.name = name


class DependencyConflictError(ConflictError):
    def __init__(self, product_id: UUID | None) -> None:
        super().__init__(f"Product {product_id} has dependent records and cannot be deleted")
        self.product_id = product_id
