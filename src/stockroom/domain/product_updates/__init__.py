"""Product update commands and the merge applying them."""

from __future__ import annotations

from .apply import (
    apply_product_changes,
    apply_product_fields,
    resulting_name,
    resulting_stock,
)
from .dto import UNSET, ProductChanges, ProductFields, Settable

__all__ = [
    "UNSET",
    "ProductChanges",
    "ProductFields",
    "Settable",
    "apply_product_changes",
    "apply_product_fields",
    "resulting_name",
    "resulting_stock",
]
