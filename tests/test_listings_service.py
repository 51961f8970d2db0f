import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from swingmarket.domain.models import Listing, ListingLocation
from swingmarket.listings.service import build_listing_location, list_listings
from swingmarket.store.base import StoreUnavailableError
from swingmarket.store.memory import InMemoryListingStore, load_listings


BASE_TIME = datetime(2025, 9, 1, tzinfo=timezone.utc)


def _listing(listing_id, *, price=10000, views=0, category="shoes", status="available", age_days=0, reported=False):
    return Listing(
        id=listing_id,
        title=listing_id,
        category=category,
        price=price,
        status=status,
        views=views,
        location=ListingLocation(latitude=37.55, longitude=126.95, region="신촌"),
        created_at=BASE_TIME - timedelta(days=age_days),
        reported=reported,
    )


def _store():
    return InMemoryListingStore(
        [
            _listing("a", price=30000, views=5, age_days=4),
            _listing("b", price=10000, views=50, age_days=3, category="clothing"),
            _listing("c", price=50000, views=1, age_days=2),
            _listing("d", price=20000, views=9, age_days=1, status="sold"),
            _listing("e", price=40000, views=20, age_days=0),
        ]
    )


def _ids(page):
    return [listing.id for listing in page.items]


def test_latest_first_with_over_fetch_pagination():
    store = _store()
    first = asyncio.run(list_listings(store, page=1, limit=2))
    assert _ids(first) == ["e", "c"]
    assert first.has_next is True
    assert first.has_prev is False

    second = asyncio.run(list_listings(store, page=2, limit=2))
    assert _ids(second) == ["b", "a"]
    assert second.has_next is False
    assert second.has_prev is True

    beyond = asyncio.run(list_listings(store, page=5, limit=2))
    assert beyond.items == []
    assert beyond.has_next is False


@pytest.mark.parametrize(
    "sort,expected",
    [
        ("latest", ["e", "c", "b", "a"]),
        ("oldest", ["a", "b", "c", "e"]),
        ("price_low", ["b", "a", "e", "c"]),
        ("price_high", ["c", "e", "a", "b"]),
        ("popular", ["b", "e", "a", "c"]),
    ],
)
def test_sort_options(sort, expected):
    page = asyncio.run(list_listings(_store(), limit=10, sort=sort))
    assert _ids(page) == expected


def test_category_filter():
    page = asyncio.run(list_listings(_store(), limit=10, category="clothing"))
    assert _ids(page) == ["b"]


def test_unknown_sort_is_rejected():
    with pytest.raises(ValueError):
        asyncio.run(list_listings(_store(), sort="random"))


def test_build_listing_location_detects_region_from_coordinates():
    loc = build_listing_location(37.5600, 126.9430)
    assert loc.region == "신촌"
    assert loc.latitude == 37.5600


def test_build_listing_location_keeps_seller_region():
    loc = build_listing_location(37.5600, 126.9430, "  연희동  ")
    assert loc.region == "연희동"


def test_build_listing_location_leaves_region_empty_when_nothing_is_close():
    assert build_listing_location(35.1796, 129.0756).region == ""


def test_build_listing_location_rejects_invalid_coordinates():
    with pytest.raises(ValueError):
        build_listing_location(91.0, 0.0)


def test_reported_listings_are_hidden_from_list_pages():
    store = _store()
    store.add(_listing("flagged", age_days=-1, reported=True))
    page = asyncio.run(list_listings(store, limit=10))
    assert "flagged" not in _ids(page)
    assert _ids(page) == ["e", "c", "b", "a"]


def test_store_add_rejects_duplicate_ids():
    store = _store()
    with pytest.raises(ValueError):
        store.add(_listing("a"))
    store.add(_listing("z"))
    assert len(store) == 6


def test_packaged_catalog_loads():
    listings = load_listings("data/catalogs/listings.json")
    assert len(listings) == 11
    assert [listing.id for listing in listings if listing.reported] == ["lst-011"]
    assert {listing.status for listing in listings} == {"available", "reserved", "sold"}


def test_missing_catalog_is_store_unavailable(tmp_path):
    with pytest.raises(StoreUnavailableError):
        load_listings(tmp_path / "missing.json")

    bad = tmp_path / "bad.json"
    bad.write_text("[{\"id\": 1}]", encoding="utf-8")
    with pytest.raises(StoreUnavailableError):
        load_listings(bad)
