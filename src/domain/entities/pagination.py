"""Page-number pagination over in-memory sequences."""

import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


@dataclass
class Page(Generic[T]):
    """One page of a larger sequence."""

    items: list[T] = field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.page_size)


def clamp_page(page: int, page_size: int) -> tuple[int, int]:
    """Clamp page to >= 1 and page_size to [1, MAX_PAGE_SIZE]."""
    return max(page, 1), min(max(page_size, 1), MAX_PAGE_SIZE)


def paginate(items: Sequence[T], page: int, page_size: int) -> Page[T]:
    """Slice ``items[(page-1)*page_size : page*page_size]`` after clamping."""
    page, page_size = clamp_page(page, page_size)
    start = (page - 1) * page_size
    return Page(
        items=list(items[start : start + page_size]),
        total=len(items),
        page=page,
        page_size=page_size,
    )
