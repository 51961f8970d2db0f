"""
Over-fetch pagination.

Every list endpoint asks its source for `limit + 1` rows (after skipping the
previous pages). Receiving the extra row proves a next page exists, so no
separate count query is needed. The flip side is that `Page.total` is only the
number of items observed up to and including this page, never a grand total.

The helpers are error-transparent: whatever the fetch callable raises propagates.
"""

from __future__ import annotations

from typing import Awaitable, Callable, Generic, Sequence, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    """One page of results plus navigation flags."""

    items: list[T] = Field(default_factory=list)
    page: int = Field(..., ge=1)
    limit: int = Field(..., ge=1)
    total: int = Field(..., ge=0)
    has_next: bool = False
    has_prev: bool = False


def _check_window(page: int, limit: int) -> None:
    if int(page) < 1:
        raise ValueError("page must be >= 1")
    if int(limit) < 1:
        raise ValueError("limit must be >= 1")


def page_offset(page: int, limit: int) -> int:
    """Number of rows to skip before `page` (1-based)."""
    _check_window(page, limit)
    return (int(page) - 1) * int(limit)


def _build_page(rows: Sequence[T], page: int, limit: int) -> Page[T]:
    has_next = len(rows) > limit
    items = list(rows[:limit])
    return Page(
        items=items,
        page=page,
        limit=limit,
        total=(page - 1) * limit + len(items) if items else 0,
        has_next=has_next,
        has_prev=page > 1,
    )


def paginate(fetch: Callable[[int], Sequence[T]], page: int, limit: int) -> Page[T]:
    """Build a page from `fetch(limit + 1)`.

    `fetch` receives the number of rows to return and is responsible for skipping
    `page_offset(page, limit)` rows first.
    """
    _check_window(page, limit)
    return _build_page(fetch(limit + 1), page, limit)


async def paginate_async(fetch: Callable[[int], Awaitable[Sequence[T]]], page: int, limit: int) -> Page[T]:
    """Async variant of `paginate` for store-backed fetches."""
    _check_window(page, limit)
    return _build_page(await fetch(limit + 1), page, limit)


def window(rows: Sequence[T], page: int, limit: int) -> Callable[[int], Sequence[T]]:
    """Return a fetch callable that serves `page` out of an in-memory sequence."""
    start = page_offset(page, limit)

    def fetch(n: int) -> Sequence[T]:
        return rows[start : start + n]

    return fetch
