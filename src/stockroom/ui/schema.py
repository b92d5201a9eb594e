"""Input schemas checking the format of product commands.

These models carry the field-level rules (non-blank bounded name, bounded
description, non-negative two-place price, non-negative stock). Business rules
that depend on state or configuration stay in ``ProductMutator``.
"""

from __future__ import annotations

from datetime import datetime  # noqa: TC003
from decimal import Decimal
from typing import Annotated, Any
from uuid import UUID  # noqa: TC003

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator

from stockroom.domain.model import (
    DESCRIPTION_MAX_LENGTH,
    NAME_MAX_LENGTH,
    PRICE_DECIMAL_PLACES,
    PRICE_MAX_DIGITS,
)
from stockroom.domain.product_updates import ProductChanges, ProductFields

ProductName = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=NAME_MAX_LENGTH)
]
ProductDescription = Annotated[str, StringConstraints(max_length=DESCRIPTION_MAX_LENGTH)]
ProductPrice = Annotated[
    Decimal,
    Field(ge=0, max_digits=PRICE_MAX_DIGITS, decimal_places=PRICE_DECIMAL_PLACES),
]
ProductStock = Annotated[int, Field(ge=0)]


class ProductSchemaBase(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    @field_validator("price", mode="before", check_fields=False)
    @classmethod
    def _reject_float_price(cls, value: Any) -> Any:  # noqa: ANN401
        # floats cannot represent most cent amounts exactly
        if isinstance(value, float):
            raise ValueError("price must be given as a string or Decimal, not a float")
        return value


class ProductInput(ProductSchemaBase):
    """Complete product field set (create / full update)."""

    name: ProductName
    description: ProductDescription | None = None
    price: ProductPrice
    stock: ProductStock
    active: bool = True

    def to_fields(self) -> ProductFields:
        return ProductFields(
            name=self.name,
            description=self.description,
            price=self.price,
            stock=self.stock,
            active=self.active,
        )


class ProductPatchInput(ProductSchemaBase):
    """Partial product field set; only explicitly given fields are applied.

    ``description`` may be given as ``None`` to clear it. The other fields
    reject ``None``.
    """

    name: ProductName | None = None
    description: ProductDescription | None = None
    price: ProductPrice | None = None
    stock: ProductStock | None = None
    active: bool | None = None

    @field_validator("name", "price", "stock", "active")
    @classmethod
    def _reject_explicit_null(cls, value: object) -> object:
        if value is None:
            raise ValueError("field cannot be cleared")
        return value

    def to_changes(self) -> ProductChanges:
        provided = {name: getattr(self, name) for name in self.model_fields_set}
        return ProductChanges.from_mapping(provided)


class ProductView(BaseModel):
    """Read-only projection of a product for output."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: UUID | None
    name: str
    description: str | None
    price: Decimal
    stock: int
    active: bool
    created_at: datetime | None
    updated_at: datetime | None
    deleted_at: datetime | None
