from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Generic, Sequence, TypeVar


T = TypeVar("T")

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


@dataclass
class Page(Generic[T]):
    items: list[T]
    current_page: int
    total_pages: int
    total_items: int
    limit: int
    skip: int
    has_next_page: bool
    has_prev_page: bool

    def display_range(self) -> tuple[int, int]:
        """1-based numbers of the first and last item on this page (0, 0 when empty)."""
        if not self.items:
            return 0, 0
        first = self.skip + 1
        return first, first + len(self.items) - 1


def paginate(items: Sequence[T], page: int, limit: int) -> Page[T]:
    """Slice an ordered sequence into one page plus page metadata.

    ``total_pages`` is at least 1 even for an empty sequence. A page past
    the end yields no items but still reports consistent metadata.
    """
    if page < 1:
        raise ValueError(f"page must be >= 1, got {page}")
    if limit < 1:
        raise ValueError(f"limit must be >= 1, got {limit}")

    total_items = len(items)
    total_pages = max(1, math.ceil(total_items / limit))
    skip = (page - 1) * limit

    return Page(
        items=list(items[skip : skip + limit]),
        current_page=page,
        total_pages=total_pages,
        total_items=total_items,
        limit=limit,
        skip=skip,
        has_next_page=page < total_pages,
        has_prev_page=page > 1,
    )


def normalize_page_args(
    page: int | None,
    limit: int | None,
    default_limit: int,
    max_limit: int,
) -> tuple[int, int]:
    """Clamp raw query values into a valid (page, limit) pair."""
    page = page if page and page >= 1 else 1
    if not limit or limit < 1:
        limit = default_limit
    return page, min(limit, max_limit)


def parse_page_number(raw: str | None) -> int | None:
    """Leading integer of a raw query value, ``None`` when there is none.

    ``"2abc"`` reads as 2 and ``"abc"`` as ``None``, so malformed values fall
    back to the defaults applied by :func:`normalize_page_args`.
    """
    if raw is None:
        return None
    match = _LEADING_INT.match(raw)
    return int(match.group(1)) if match else None
