"""Unit tests for sorting and page slicing"""

import pytest
from datetime import datetime, timedelta, timezone
from app.utils.pagination import sort_newest_first, paginate, count_pages


def test_pages_do_not_overlap_and_rebuild_the_collection():
    records = list(range(23))

    pages = []
    page = 1
    while True:
        items, total = paginate(records, page, 5)
        assert total == 23
        if not items:
            break
        pages.append(items)
        page += 1

    assert [len(p) for p in pages] == [5, 5, 5, 5, 3]
    assert [item for p in pages for item in p] == records


def test_page_beyond_range_is_empty():
    items, total = paginate([1, 2, 3], 4, 2)

    assert items == []
    assert total == 3


def test_empty_collection():
    assert paginate([], 1, 10) == ([], 0)
    assert count_pages(0, 10) == 1


@pytest.mark.parametrize("page, page_size", [(0, 10), (1, 0), (-1, 5)])
def test_non_positive_arguments_are_rejected(page, page_size):
    with pytest.raises(ValueError):
        paginate([1, 2], page, page_size)


def test_count_pages_rounds_up():
    assert count_pages(10, 10) == 1
    assert count_pages(11, 10) == 2


def test_sort_newest_first_is_stable_for_ties():
    base = datetime(2026, 1, 1, tzinfo=timezone.utc)
    records = [("a", base), ("b", base + timedelta(days=1)), ("c", base), ("d", base + timedelta(days=2))]

    ordered = sort_newest_first(records, key=lambda r: r[1])

    assert [r[0] for r in ordered] == ["d", "b", "a", "c"]
