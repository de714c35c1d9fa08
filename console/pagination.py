from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Generic, List, Sequence, TypeVar, Union

T = TypeVar("T")

ELLIPSIS = "ellipsis"

PageLink = Union[int, str]


@dataclass(frozen=True)
class Page(Generic[T]):
    page_items: List[T]
    total_pages: int


def total_pages_for(count: int, page_size: int) -> int:
    if page_size < 1:
        raise ValueError("page_size must be at least 1.")
    return max(1, math.ceil(count / page_size))


def paginate(items: Sequence[T], page_size: int, current_page: int) -> Page[T]:
    """Slice one page out of ``items``.

    Pages are 1-based. A page past the end yields an empty slice; callers are
    expected to reset to page 1 when the underlying query changes.
    """
    total = total_pages_for(len(items), page_size)
    start = max(0, (current_page - 1) * page_size)
    end = max(0, current_page * page_size)
    return Page(page_items=list(items[start:end]), total_pages=total)


def link_sequence(current: int, total: int) -> List[PageLink]:
    if total <= 5:
        return list(range(1, total + 1))
    if current <= 3:
        return [1, 2, 3, 4, ELLIPSIS, total]
    if current >= total - 2:
        return [1, ELLIPSIS, total - 3, total - 2, total - 1, total]
    return [1, ELLIPSIS, current - 1, current, current + 1, ELLIPSIS, total]
