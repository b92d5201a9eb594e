"""Time and lookup ports consumed by the product mutator."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from typing import Protocol


class Clock(Protocol):
    def __call__(self) -> datetime: ...


def utcnow() -> datetime:
    return datetime.now(UTC)


NameLookup = Callable[[str], bool]
"""Return whether a live product with the given name already exists."""
