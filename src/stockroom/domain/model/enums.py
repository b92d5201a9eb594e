"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class DeleteDecision(StrEnum):
    """Outcome of the hard-delete guard."""

    ALLOWED = "allowed"
    DENIED = "denied"


class DeletedRecordPolicy(StrEnum):
    """Whether soft-deleted products may still be updated."""

    REJECT = "reject"
    ALLOW = "allow"


class ProductSortField(StrEnum):
    NAME = "name"
    PRICE = "price"
    STOCK = "stock"
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"
