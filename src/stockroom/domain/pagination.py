"""Page requests and pages of query results."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from stockroom.domain.model import ProductSortField

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

DEFAULT_PAGE_SIZE: Final[int] = 20
MAX_PAGE_SIZE: Final[int] = 100


@dataclass(slots=True, frozen=True)
class PageRequest:
    """Zero-based page number, page size and ordering."""

    page: int = 0
    size: int = DEFAULT_PAGE_SIZE
    sort: ProductSortField = ProductSortField.NAME
    descending: bool = False

    def __post_init__(self) -> None:
        if self.page < 0:
            raise ValueError("page must be non-negative")
        if not 1 <= self.size <= MAX_PAGE_SIZE:
            raise ValueError(f"size must be between 1 and {MAX_PAGE_SIZE}")

    @property
    def offset(self) -> int:
        return self.page * self.size


@dataclass(slots=True, frozen=True)
class Page[T]:
    """One page of results plus the total number of matching items."""

    items: Sequence[T]
    request: PageRequest
    total: int

    @property
    def number(self) -> int:
        return self.request.page

    @property
    def size(self) -> int:
        return self.request.size

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.request.size) if self.total else 0

    @property
    def has_next(self) -> bool:
        return self.request.page + 1 < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.request.page > 0

    def map[U](self, convert: Callable[[T], U]) -> Page[U]:
        """Convert every item while keeping the paging information."""

        return Page(
            items=[convert(item) for item in self.items],
            request=self.request,
            total=self.total,
        )
