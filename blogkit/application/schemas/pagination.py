"""Generic paginated response envelope."""

from collections.abc import Callable
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

from blogkit.domain.entities import PaginatedResult

T = TypeVar("T")


class PaginatedResponse(BaseModel, Generic[T]):
    """A page of items with the derived paging flags spelled out."""

    items: list[T]
    total_count: int = Field(alias="totalCount")
    page: int
    page_size: int = Field(alias="pageSize")
    total_pages: int = Field(alias="totalPages")
    has_previous_page: bool = Field(alias="hasPreviousPage")
    has_next_page: bool = Field(alias="hasNextPage")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_result(
        cls, result: PaginatedResult[Any], convert: Callable[[Any], T]
    ) -> "PaginatedResponse[T]":
        return cls(
            items=[convert(item) for item in result.items],
            total_count=result.total_count,
            page=result.page,
            page_size=result.page_size,
            total_pages=result.total_pages,
            has_previous_page=result.has_previous_page,
            has_next_page=result.has_next_page,
        )
