"""Typed readers for ``STOCKROOM_*`` environment settings.

Blank values count as unset. Values that are set but cannot be parsed raise
``ConfigurationError`` naming the variable.
"""

from __future__ import annotations

import os
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING

from .errors import ConfigurationError

if TYPE_CHECKING:
    from enum import StrEnum


def optional_env_var(name: str) -> str | None:
    raw = os.getenv(name, "").strip()
    return raw or None


def decimal_env_var(name: str, *, default: Decimal) -> Decimal:
    raw = optional_env_var(name)
    if raw is None:
        return default
    try:
        return Decimal(raw)
    except InvalidOperation as exc:
        raise ConfigurationError(f"{name} is not a decimal: {raw!r}", variable=name) from exc


def choice_env_var[E: StrEnum](name: str, choices: type[E], *, default: E) -> E:
    """Parse a case-insensitive enum value."""

    raw = optional_env_var(name)
    if raw is None:
        return default
    try:
        return choices(raw.lower())
    except ValueError as exc:
        allowed = ", ".join(choice.value for choice in choices)
        raise ConfigurationError(
            f"{name} must be one of {allowed}, got {raw!r}", variable=name
        ) from exc
