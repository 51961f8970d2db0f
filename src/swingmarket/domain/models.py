"""
Domain models (Pydantic).

These types are the contract between the store, the search pipeline and the
outer surfaces (API/CLI):
- catalog entities (`Listing`, `ListingLocation`)
- search input (`SearchFilters`)
- search output items (`SearchResultItem`), wrapped in `core.pagination.Page`

Request-side coordinates (`Coordinates`) are intentionally unconstrained: an
out-of-range centre must reach the search pipeline, where it degrades to a
category/price-only search instead of being rejected at parse time.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, Field, model_validator

from swingmarket.core.geo import GeoPoint

Category = Literal["shoes", "clothing", "accessories", "other"]
ListingStatus = Literal["available", "reserved", "sold"]
SortOption = Literal["latest", "oldest", "price_low", "price_high", "popular"]

CATEGORY_LABELS: dict[str, str] = {
    "shoes": "댄스화",
    "clothing": "의상",
    "accessories": "액세서리",
    "other": "기타",
}


class Coordinates(BaseModel):
    """A caller-supplied lat/lng pair (not range-checked)."""

    latitude: float
    longitude: float

    def to_point(self) -> GeoPoint:
        return GeoPoint(latitude=self.latitude, longitude=self.longitude)


class ListingLocation(BaseModel):
    """Where a listing is offered; `region` is a human-readable district label."""

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    region: str = ""

    def to_point(self) -> GeoPoint:
        return GeoPoint(latitude=self.latitude, longitude=self.longitude)


class Listing(BaseModel):
    """A marketplace listing as stored by the persistence layer (read-only here)."""

    id: str
    title: str = ""
    category: Category
    price: int = Field(..., ge=0)
    status: ListingStatus = "available"
    location: ListingLocation
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    views: int = Field(default=0, ge=0)
    seller_id: str | None = None
    # Flagged by moderation; reported listings are hidden from every list and search.
    reported: bool = False


class SearchFilters(BaseModel):
    """One proximity search request."""

    center: Coordinates
    radius_km: float
    category: Category | None = None
    price_min: int | None = Field(default=None, ge=0)
    price_max: int | None = Field(default=None, ge=0)
    limit: int | None = Field(default=None, ge=1)

    @model_validator(mode="after")
    def _validate_price_range(self) -> "SearchFilters":
        if self.price_min is not None and self.price_max is not None and self.price_min > self.price_max:
            raise ValueError("price_min must not exceed price_max")
        return self

    def price_range(self) -> tuple[int | None, int | None] | None:
        if self.price_min is None and self.price_max is None:
            return None
        return (self.price_min, self.price_max)


class SearchResultItem(BaseModel):
    """A matched listing plus its distance from the search centre.

    `distance_km` is None for results of a degraded (non-geo) search.
    """

    listing: Listing
    distance_km: float | None = None
