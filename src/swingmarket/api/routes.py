"""
API routes.

Endpoints:
- GET  `/api/listings/nearby`: proximity search (radius around a point).
- GET  `/api/listings`: latest / by-category listing pages.
- POST `/api/listings`: add a listing (region auto-detected from coordinates).
- GET  `/api/regions`: region reference table.
- GET  `/api/regions/resolve`: nearest region label for a point.

The search core never logs or wraps errors; this layer maps them to HTTP errors.
"""

from __future__ import annotations

import logging
import uuid
from functools import lru_cache

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel, Field

from swingmarket.config.settings import get_settings
from swingmarket.core.geo import GeoPoint
from swingmarket.core.pagination import Page
from swingmarket.domain.models import Category, Coordinates, Listing, SearchFilters, SearchResultItem, SortOption
from swingmarket.listings.service import build_listing_location, list_listings
from swingmarket.regions.resolver import resolve_region
from swingmarket.regions.table import load_region_table
from swingmarket.search.proximity import ProximitySearch
from swingmarket.store.base import StoreUnavailableError
from swingmarket.store.memory import InMemoryListingStore

logger = logging.getLogger(__name__)

router = APIRouter()


@lru_cache
def _store() -> InMemoryListingStore:
    settings = get_settings()
    return InMemoryListingStore.from_catalog(settings.catalog.path)


def _error(status_code: int, code: str, message: str) -> HTTPException:
    return HTTPException(status_code=status_code, detail={"code": code, "message": message})


class CreateListingRequest(BaseModel):
    title: str = Field(..., min_length=1)
    category: Category
    price: int = Field(..., ge=0)
    latitude: float
    longitude: float
    region: str | None = None
    seller_id: str | None = None


@router.get("/api/listings/nearby", response_model=Page[SearchResultItem])
async def get_nearby_listings(
    lat: float,
    lng: float,
    radius_km: float | None = None,
    category: Category | None = None,
    price_min: int | None = Query(default=None, ge=0),
    price_max: int | None = Query(default=None, ge=0),
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
) -> Page[SearchResultItem]:
    """Listings within `radius_km` of (`lat`, `lng`), nearest first."""
    settings = get_settings()
    radius = settings.search.default_radius_km if radius_km is None else radius_km
    if radius > settings.search.max_radius_km:
        raise _error(400, "VALIDATION_ERROR", f"radius_km must be <= {settings.search.max_radius_km}")
    try:
        filters = SearchFilters(
            center=Coordinates(latitude=lat, longitude=lng),
            radius_km=radius,
            category=category,
            price_min=price_min,
            price_max=price_max,
            limit=min(limit or settings.search.default_limit, settings.search.max_limit),
        )
        return await ProximitySearch(_store(), settings=settings).search(filters, page=page)
    except StoreUnavailableError as e:
        logger.warning("Listing store unavailable during nearby search: %s", str(e))
        raise _error(503, "STORE_UNAVAILABLE", str(e)) from e
    except ValueError as e:
        raise _error(400, "VALIDATION_ERROR", str(e)) from e
    except Exception as e:
        logger.exception("Nearby search failed")
        raise _error(500, "INTERNAL_ERROR", str(e)) from e


@router.get("/api/listings", response_model=Page[Listing])
async def get_listings(
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
    category: Category | None = None,
    sort: SortOption = "latest",
) -> Page[Listing]:
    """Available listings, newest first by default."""
    settings = get_settings()
    size = min(limit or settings.search.list_default_limit, settings.search.max_limit)
    try:
        return await list_listings(_store(), page=page, limit=size, category=category, sort=sort)
    except StoreUnavailableError as e:
        logger.warning("Listing store unavailable during listing page: %s", str(e))
        raise _error(503, "STORE_UNAVAILABLE", str(e)) from e
    except ValueError as e:
        raise _error(400, "VALIDATION_ERROR", str(e)) from e


@router.post("/api/listings", response_model=Listing, status_code=201)
def post_listing(payload: CreateListingRequest) -> Listing:
    """Add a listing; the region label is derived from coordinates when omitted."""
    try:
        location = build_listing_location(payload.latitude, payload.longitude, payload.region)
        listing = Listing(
            id=uuid.uuid4().hex,
            title=payload.title.strip(),
            category=payload.category,
            price=payload.price,
            location=location,
            seller_id=payload.seller_id,
        )
        _store().add(listing)
    except StoreUnavailableError as e:
        raise _error(503, "STORE_UNAVAILABLE", str(e)) from e
    except ValueError as e:
        raise _error(400, "VALIDATION_ERROR", str(e)) from e
    logger.info("Created listing %s in region %r", listing.id, listing.location.region)
    return listing


@router.get("/api/regions")
def get_regions() -> dict:
    """Return the region reference table."""
    return {
        "regions": [
            {"name": r.name, "latitude": r.center.latitude, "longitude": r.center.longitude}
            for r in load_region_table()
        ]
    }


@router.get("/api/regions/resolve")
def get_region_for_point(lat: float, lng: float) -> dict:
    """Return the nearest region label for a point (null when none is close enough)."""
    return {"latitude": lat, "longitude": lng, "region": resolve_region(GeoPoint(latitude=lat, longitude=lng))}
