"""
In-memory listing store.

Backs the API and CLI with a local JSON catalog (default:
`data/catalogs/listings.json`) and doubles as the reference implementation of
`QueryFilter` semantics for tests.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from swingmarket.core.env import resolve_project_path
from swingmarket.domain.models import Listing
from swingmarket.store.base import QueryFilter, StoreUnavailableError, in_range

logger = logging.getLogger(__name__)

_LISTINGS_ADAPTER = TypeAdapter(list[Listing])


def load_listings(path: str | Path) -> list[Listing]:
    """Load and validate a listing catalog JSON file.

    Raises:
        StoreUnavailableError: If the file is missing, unreadable or malformed.
    """
    resolved = resolve_project_path(path)
    try:
        payload = json.loads(resolved.read_text(encoding="utf-8"))
        return _LISTINGS_ADAPTER.validate_python(payload)
    except (OSError, ValueError, ValidationError) as e:
        raise StoreUnavailableError(f"Cannot load listing catalog {resolved}: {e}") from e


class InMemoryListingStore:
    def __init__(self, listings: list[Listing] | None = None, *, supports_compound_range: bool = True):
        self._listings: list[Listing] = list(listings or [])
        self.supports_compound_range = supports_compound_range

    @classmethod
    def from_catalog(cls, path: str | Path, **kwargs) -> "InMemoryListingStore":
        listings = load_listings(path)
        logger.info("Loaded %d listings from %s", len(listings), path)
        return cls(listings, **kwargs)

    def __len__(self) -> int:
        return len(self._listings)

    def add(self, listing: Listing) -> None:
        if any(existing.id == listing.id for existing in self._listings):
            raise ValueError(f"Listing {listing.id!r} already exists")
        self._listings.append(listing)

    def _matches(self, listing: Listing, query: QueryFilter) -> bool:
        if query.status is not None and listing.status != query.status:
            return False
        if query.reported is not None and listing.reported != query.reported:
            return False
        if query.category is not None and listing.category != query.category:
            return False
        if not in_range(listing.location.latitude, query.latitude_range):
            return False
        if not in_range(listing.location.longitude, query.longitude_range):
            return False
        if query.price_range is not None:
            if not self.supports_compound_range and (query.latitude_range or query.longitude_range):
                raise ValueError("This store cannot combine a price range with location ranges")
            if not in_range(listing.price, query.price_range):
                return False
        return True

    async def query_listings(self, query: QueryFilter) -> list[Listing]:
        rows = [listing for listing in self._listings if self._matches(listing, query)]
        # sorted() is stable, so equal keys keep insertion order.
        rows = sorted(rows, key=lambda listing: getattr(listing, query.order_by), reverse=query.descending)
        start = max(0, int(query.offset))
        if query.limit is None:
            return rows[start:]
        return rows[start : start + int(query.limit)]
