"""Generic page-of-results container."""

import math
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")


@dataclass
class PaginatedResult(Generic[T]):
    """A page of items plus the metadata needed to reach the other pages.

    ``page`` is 1-based. The derived fields are pure functions of
    ``total_count``, ``page`` and ``page_size``.
    """

    items: list[T] = field(default_factory=list)
    total_count: int = 0
    page: int = 1
    page_size: int = 10

    @property
    def total_pages(self) -> int:
        if self.page_size <= 0:
            return 0
        return math.ceil(self.total_count / self.page_size)

    @property
    def has_previous_page(self) -> bool:
        return self.page > 1

    @property
    def has_next_page(self) -> bool:
        return self.page < self.total_pages

    def map(self, fn: Callable[[T], U]) -> "PaginatedResult[U]":
        """Project every item while keeping the paging metadata."""
        return PaginatedResult(
            items=[fn(item) for item in self.items],
            total_count=self.total_count,
            page=self.page,
            page_size=self.page_size,
        )

    @classmethod
    def from_sequence(cls, items: list[T], page: int, page_size: int) -> "PaginatedResult[T]":
        """Slice an already filtered and ordered sequence into one page."""
        start = (page - 1) * page_size
        return cls(
            items=list(items[start : start + page_size]),
            total_count=len(items),
            page=page,
            page_size=page_size,
        )
