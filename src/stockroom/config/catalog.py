"""Catalog business-rule settings."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Final

from stockroom.domain.model import DeletedRecordPolicy

from .env import choice_env_var, decimal_env_var
from .errors import ConfigurationError

DEFAULT_MINIMUM_PRICE: Final[Decimal] = Decimal("1.00")
MINIMUM_PRICE_ENV: Final[str] = "STOCKROOM_MINIMUM_PRICE"
DELETED_POLICY_ENV: Final[str] = "STOCKROOM_DELETED_POLICY"


@dataclass(frozen=True, slots=True)
class CatalogConfig:
    minimum_price: Decimal = DEFAULT_MINIMUM_PRICE
    deleted_policy: DeletedRecordPolicy = DeletedRecordPolicy.REJECT


def get_catalog_config() -> CatalogConfig:
    minimum_price = decimal_env_var(MINIMUM_PRICE_ENV, default=DEFAULT_MINIMUM_PRICE)
    if not minimum_price.is_finite() or minimum_price < 0:
        raise ConfigurationError(
            f"{MINIMUM_PRICE_ENV} must be a non-negative amount, got {minimum_price}",
            variable=MINIMUM_PRICE_ENV,
        )
    return CatalogConfig(
        minimum_price=minimum_price,
        deleted_policy=choice_env_var(
            DELETED_POLICY_ENV, DeletedRecordPolicy, default=DeletedRecordPolicy.REJECT
        ),
    )
