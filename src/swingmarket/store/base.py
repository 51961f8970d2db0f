"""
Listing store interface.

The persistence layer behind the marketplace is a document store: it can filter
on equality and on ranges of scalar fields, and order by a stored field, but it
has no spatial index and cannot order by distance. `QueryFilter` describes
exactly that query surface; the search pipeline builds one per request.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Protocol

from swingmarket.domain.models import Category, Listing, ListingStatus

OrderField = Literal["created_at", "price", "views"]
Range = tuple[float | None, float | None]


class StoreUnavailableError(RuntimeError):
    """Raised by a store when a query cannot be executed (backend down, bad catalog, ...)."""


@dataclass(frozen=True)
class QueryFilter:
    """Equality/range query against listing documents.

    Ranges are inclusive `(low, high)` pairs; a None end is unbounded.
    `limit=None` returns every match after `offset`.
    """

    status: ListingStatus | None = None
    reported: bool | None = None
    category: Category | None = None
    latitude_range: Range | None = None
    longitude_range: Range | None = None
    price_range: Range | None = None
    order_by: OrderField = "created_at"
    descending: bool = True
    offset: int = 0
    limit: int | None = None


class ListingStore(Protocol):
    # Whether a price range can be combined with the lat/lng range clauses in one query.
    supports_compound_range: bool

    async def query_listings(self, query: QueryFilter) -> list[Listing]:
        ...


def in_range(value: float, bounds: Range | None) -> bool:
    """Inclusive range check used by store implementations."""
    if bounds is None:
        return True
    low, high = bounds
    if low is not None and value < low:
        return False
    if high is not None and value > high:
        return False
    return True
