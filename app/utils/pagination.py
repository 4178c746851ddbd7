from typing import Callable, List, Tuple, TypeVar
from datetime import datetime
import math

T = TypeVar("T")


def sort_newest_first(records: List[T], key: Callable[[T], datetime]) -> List[T]:
    """Most recent first; records with equal timestamps keep their relative order"""
    return sorted(records, key=key, reverse=True)


def paginate(records: List[T], page: int, page_size: int) -> Tuple[List[T], int]:
    """
    Slice [(page - 1) * page_size, page * page_size) out of records.
    Returns the page plus the total record count; a page past the end is an empty list.
    """
    if page < 1 or page_size < 1:
        raise ValueError("page and page_size must be positive")

    start_index = (page - 1) * page_size
    end_index = start_index + page_size
    return records[start_index:end_index], len(records)


def count_pages(total: int, page_size: int) -> int:
    return math.ceil(total / page_size) if total > 0 else 1
