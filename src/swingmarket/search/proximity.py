from __future__ import annotations

# Proximity search over a store without spatial indexing.
#
# Pipeline for one request:
#   validate -> bounding box -> one store query -> exact distance filter + sort -> paginate
#
# An invalid centre is not an error: the search degrades to a category/price-only
# query and every candidate is accepted without a distance.
# Store errors are not caught here; the calling layer decides how to report them.

import math

from swingmarket.config.settings import Settings, get_settings
from swingmarket.core.geo import GeoPoint, bounding_box, haversine_km, is_valid_coordinate
from swingmarket.core.pagination import Page, page_offset, paginate, window
from swingmarket.domain.errors import InvalidRadiusError
from swingmarket.domain.models import Listing, SearchFilters, SearchResultItem
from swingmarket.store.base import ListingStore, QueryFilter, in_range


def _check_radius(radius_km: float) -> None:
    r = float(radius_km)
    if not math.isfinite(r) or r <= 0:
        raise InvalidRadiusError(radius_km)


class ProximitySearch:
    """Radius search over listings, paginated with the shared over-fetch paginator."""

    def __init__(self, store: ListingStore, *, settings: Settings | None = None):
        self._store = store
        self._settings = settings or get_settings()

    def build_query(self, filters: SearchFilters) -> tuple[QueryFilter, bool]:
        """Build the store query for `filters`.

        Returns the query and whether the price range was pushed down to the store
        (when it was not, the caller must apply it in memory).
        """
        center = filters.center.to_point()
        price_range = filters.price_range()

        if not is_valid_coordinate(center):
            return (
                QueryFilter(status="available", reported=False, category=filters.category, price_range=price_range),
                True,
            )

        box = bounding_box(center, filters.radius_km)
        push_price = price_range is not None and bool(getattr(self._store, "supports_compound_range", False))
        query = QueryFilter(
            status="available",
            reported=False,
            category=filters.category,
            latitude_range=(box.southwest.latitude, box.northeast.latitude),
            longitude_range=(box.southwest.longitude, box.northeast.longitude),
            price_range=price_range if push_price else None,
            order_by="created_at",
        )
        return query, price_range is None or push_price

    async def search(self, filters: SearchFilters, page: int = 1) -> Page[SearchResultItem]:
        """Return one page of listings within `filters.radius_km` of `filters.center`.

        Raises:
            InvalidRadiusError: If the radius is not positive (before any store query).
            Any exception raised by the store, unchanged.
        """
        _check_radius(filters.radius_km)
        limit = filters.limit if filters.limit is not None else self._settings.search.default_limit
        page_offset(page, limit)  # reject a bad page before querying the store

        query, price_pushed = self.build_query(filters)
        candidates = await self._store.query_listings(query)

        center = filters.center.to_point()
        if is_valid_coordinate(center):
            results = _exact_filter(candidates, center, filters, apply_price=not price_pushed)
        else:
            results = [SearchResultItem(listing=c) for c in candidates]

        return paginate(window(results, page, limit), page, limit)


def _exact_filter(
    candidates: list[Listing],
    center: GeoPoint,
    filters: SearchFilters,
    *,
    apply_price: bool,
) -> list[SearchResultItem]:
    price_range = filters.price_range() if apply_price else None
    out: list[SearchResultItem] = []
    for listing in candidates:
        d = haversine_km(center, listing.location.to_point())
        if d > filters.radius_km:
            continue
        if not in_range(listing.price, price_range):
            continue
        out.append(SearchResultItem(listing=listing, distance_km=d))
    # Stable sort: equal distances keep the store's order, so pages are deterministic.
    out.sort(key=lambda item: item.distance_km)
    return out
