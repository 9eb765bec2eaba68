"""Unit tests for the PaginatedResult container."""

import pytest

from blogkit.domain.entities import PaginatedResult


@pytest.mark.parametrize(
    "total_count, page_size, expected_pages",
    [(0, 10, 0), (1, 10, 1), (10, 10, 1), (11, 10, 2), (25, 5, 5)],
)
def test_total_pages_is_ceiling_of_count_over_size(total_count, page_size, expected_pages):
    result = PaginatedResult(items=[], total_count=total_count, page=1, page_size=page_size)
    assert result.total_pages == expected_pages


def test_zero_page_size_has_no_pages():
    result = PaginatedResult(items=[], total_count=5, page=1, page_size=0)
    assert result.total_pages == 0
    assert result.has_next_page is False


def test_navigation_flags():
    first = PaginatedResult(items=[1, 2], total_count=5, page=1, page_size=2)
    middle = PaginatedResult(items=[3, 4], total_count=5, page=2, page_size=2)
    last = PaginatedResult(items=[5], total_count=5, page=3, page_size=2)

    assert (first.has_previous_page, first.has_next_page) == (False, True)
    assert (middle.has_previous_page, middle.has_next_page) == (True, True)
    assert (last.has_previous_page, last.has_next_page) == (True, False)


def test_from_sequence_slices_one_page():
    result = PaginatedResult.from_sequence(list(range(7)), page=2, page_size=3)

    assert result.items == [3, 4, 5]
    assert result.total_count == 7
    assert result.total_pages == 3


def test_from_sequence_past_the_end_is_empty():
    result = PaginatedResult.from_sequence([1, 2], page=5, page_size=10)
    assert result.items == []
    assert result.total_count == 2


def test_map_keeps_metadata():
    result = PaginatedResult(items=[1, 2], total_count=4, page=1, page_size=2)
    mapped = result.map(str)

    assert mapped.items == ["1", "2"]
    assert (mapped.total_count, mapped.page, mapped.page_size) == (4, 1, 2)
