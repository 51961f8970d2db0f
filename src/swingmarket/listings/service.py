"""
Listing browsing and creation helpers (non-geo).

- `list_listings`: the plain "latest items" / "items by category" endpoints. They use
  the same over-fetch paginator as proximity search, but push offset and
  `limit + 1` down to the store because no in-memory filtering is needed.
- `build_listing_location`: prepares the location of a new listing, filling in a
  region label from coordinates when the seller did not pick one.
"""

from __future__ import annotations

from typing import Sequence

from swingmarket.config.settings import Settings
from swingmarket.core.geo import GeoPoint, is_valid_coordinate
from swingmarket.core.pagination import Page, page_offset, paginate_async
from swingmarket.domain.models import Category, Listing, ListingLocation, SortOption
from swingmarket.regions.resolver import resolve_region
from swingmarket.regions.table import RegionEntry
from swingmarket.store.base import ListingStore, OrderField, QueryFilter

# sort option -> (order field, descending)
SORT_ORDERS: dict[str, tuple[OrderField, bool]] = {
    "latest": ("created_at", True),
    "oldest": ("created_at", False),
    "price_low": ("price", False),
    "price_high": ("price", True),
    "popular": ("views", True),
}


async def list_listings(
    store: ListingStore,
    *,
    page: int = 1,
    limit: int = 20,
    category: Category | None = None,
    sort: SortOption = "latest",
) -> Page[Listing]:
    """Return one page of available listings, optionally restricted to a category."""
    if sort not in SORT_ORDERS:
        raise ValueError(f"Unknown sort option: {sort!r}")
    order_by, descending = SORT_ORDERS[sort]
    offset = page_offset(page, limit)

    async def fetch(n: int) -> list[Listing]:
        query = QueryFilter(
            status="available",
            reported=False,
            category=category,
            order_by=order_by,
            descending=descending,
            offset=offset,
            limit=n,
        )
        return await store.query_listings(query)

    return await paginate_async(fetch, page, limit)


def build_listing_location(
    latitude: float,
    longitude: float,
    region: str | None = None,
    *,
    table: Sequence[RegionEntry] | None = None,
    settings: Settings | None = None,
) -> ListingLocation:
    """Build a stored location; auto-detect the region when none was supplied.

    Raises:
        ValueError: If the coordinates are not a valid lat/lng pair.
    """
    point = GeoPoint(latitude=latitude, longitude=longitude)
    if not is_valid_coordinate(point):
        raise ValueError(f"Invalid listing coordinates: ({latitude}, {longitude})")

    label = (region or "").strip()
    if not label:
        label = resolve_region(point, table=table, settings=settings) or ""
    return ListingLocation(latitude=latitude, longitude=longitude, region=label)
