"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from decimal import ROUND_CEILING, ROUND_FLOOR, Decimal
from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import ColumnElement, and_, func, select

from stockroom.adapters.sqlalchemy.mappings import order_line_table, product_table
from stockroom.domain.model import PRICE_DECIMAL_PLACES, Product, ProductSortField, new_id
from stockroom.domain.pagination import Page

if TYPE_CHECKING:
    from collections.abc import Iterable
    from uuid import UUID

    from sqlalchemy.orm import Session

    from stockroom.domain.model import Money
    from stockroom.domain.pagination import PageRequest


_SORT_COLUMNS = {
    ProductSortField.NAME: product_table.c.name,
    ProductSortField.PRICE: product_table.c.price,
    ProductSortField.STOCK: product_table.c.stock,
    ProductSortField.CREATED_AT: product_table.c.created_at,
    ProductSortField.UPDATED_AT: product_table.c.updated_at,
}


def _live() -> ColumnElement[bool]:
    return product_table.c.deleted_at.is_(None)


_CENT = Decimal(1).scaleb(-PRICE_DECIMAL_PLACES)


class SqlAlchemyProductRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: Product) -> None:
        if not entity.is_persisted:
            entity.assign_id(new_id())
        self.session.add(entity)

    def get(self, product_id: UUID) -> Product | None:
        return self.session.get(Product, product_id)

    def get_many(self, product_ids: Iterable[UUID]) -> list[Product]:
        ids = list(product_ids)
        if not ids:
            return []
        stmt = select(Product).where(product_table.c.id.in_(ids))
        return list(self.session.execute(stmt).scalars())

    def exists(self, product_id: UUID) -> bool:
        stmt = select(product_table.c.id).where(product_table.c.id == product_id)
        return self.session.execute(stmt).first() is not None

    def remove(self, product: Product) -> None:
        self.session.delete(product)

    def live_name_exists(self, name: str, *, exclude_id: UUID | None = None) -> bool:
        stmt = select(product_table.c.id).where(and_(_live(), product_table.c.name == name))
        if exclude_id is not None:
            stmt = stmt.where(product_table.c.id != exclude_id)
        return self.session.execute(stmt.limit(1)).first() is not None

    def has_dependents(self, product_id: UUID) -> bool:
        stmt = (
            select(order_line_table.c.id)
            .where(order_line_table.c.product_id == product_id)
            .limit(1)
        )
        return self.session.execute(stmt).first() is not None

    def list_live(self, request: PageRequest) -> Page[Product]:
        total_stmt = select(func.count()).select_from(product_table).where(_live())
        total = self.session.execute(total_stmt).scalar_one()

        column = cast("Any", _SORT_COLUMNS[request.sort])
        order = column.desc() if request.descending else column.asc()
        stmt = (
            select(Product)
            .where(_live())
            .order_by(order, product_table.c.id)
            .offset(request.offset)
            .limit(request.size)
        )
        items = list(self.session.execute(stmt).scalars())
        return Page(items=items, request=request, total=total)

    def search_live(self, fragment: str) -> list[Product]:
        pattern = f"%{_escape_like(fragment.lower())}%"
        stmt = (
            select(Product)
            .where(_live())
            .where(func.lower(product_table.c.name).like(pattern, escape="\\"))
            .order_by(product_table.c.name)
        )
        return list(self.session.execute(stmt).scalars())

    def live_in_price_range(self, min_price: Money, max_price: Money) -> list[Product]:
        # stored prices are whole cents; narrow the bounds onto that grid
        low = min_price.quantize(_CENT, rounding=ROUND_CEILING)
        high = max_price.quantize(_CENT, rounding=ROUND_FLOOR)
        stmt = (
            select(Product)
            .where(_live())
            .where(product_table.c.price.between(low, high))
            .order_by(product_table.c.price, product_table.c.name)
        )
        return list(self.session.execute(stmt).scalars())


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


if TYPE_CHECKING:
    from stockroom.domain.ports.persistence import ProductRepository

    _repo_check: ProductRepository = SqlAlchemyProductRepository(cast("Session", None))
