"""Domain primitives: scalar aliases and field bounds.

Scalar aliases may be promoted to proper value objects later without changing imports.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Final

type Money = Decimal
type Quantity = int

NAME_MAX_LENGTH: Final[int] = 100
DESCRIPTION_MAX_LENGTH: Final[int] = 500
PRICE_MAX_DIGITS: Final[int] = 10
PRICE_DECIMAL_PLACES: Final[int] = 2
