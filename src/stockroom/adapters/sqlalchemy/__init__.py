"""SQLAlchemy adapter package for stockroom."""

from __future__ import annotations

from .mappings import (
    create_all_tables,
    mapper_registry,
    order_line_table,
    product_table,
    start_mappers,
)
from .repositories import SqlAlchemyProductRepository
from .unit_of_work import (
    SqlAlchemyCatalogUnitOfWork,
    StartupError,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyCatalogUnitOfWork",
    "SqlAlchemyProductRepository",
    "StartupError",
    "create_all_tables",
    "mapper_registry",
    "order_line_table",
    "product_table",
    "shutdown",
    "start_mappers",
    "startup",
]
