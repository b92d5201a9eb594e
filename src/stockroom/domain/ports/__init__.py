"""Domain port definitions for adapters."""

from __future__ import annotations

from .clock import Clock, NameLookup, utcnow
from .persistence import ProductRepository, Repository
from .unit_of_work import (
    CatalogRepositories,
    CatalogUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "CatalogRepositories",
    "CatalogUnitOfWork",
    "Clock",
    "NameLookup",
    "ProductRepository",
    "Repository",
    "RepositoryCollection",
    "UnitOfWork",
    "utcnow",
]
