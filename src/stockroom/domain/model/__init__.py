"""Public domain model surface."""

from __future__ import annotations

from stockroom.domain.model.entity import Entity, new_id
from stockroom.domain.model.enums import DeleteDecision, DeletedRecordPolicy, ProductSortField
from stockroom.domain.model.primitives import (
    DESCRIPTION_MAX_LENGTH,
    NAME_MAX_LENGTH,
    PRICE_DECIMAL_PLACES,
    PRICE_MAX_DIGITS,
    Money,
    Quantity,
)
from stockroom.domain.model.product import Product

__all__ = [  # noqa: RUF022
    # base
    "Entity",
    "new_id",
    # catalog
    "Product",
    # enums
    "DeleteDecision",
    "DeletedRecordPolicy",
    "ProductSortField",
    # primitives
    "Money",
    "Quantity",
    "DESCRIPTION_MAX_LENGTH",
    "NAME_MAX_LENGTH",
    "PRICE_DECIMAL_PLACES",
    "PRICE_MAX_DIGITS",
]
