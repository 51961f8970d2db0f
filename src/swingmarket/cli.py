"""
SwingMarket CLI entrypoint.

Intended for quick local checks against the JSON catalog without running the API:
- `nearby`: proximity search around a point
- `list`: latest / by-category listing pages
- `resolve-region`: nearest region label for a point
"""

from __future__ import annotations

import argparse
import asyncio
import json
from typing import Any

from swingmarket.config.settings import get_settings
from swingmarket.core.geo import GeoPoint, format_distance
from swingmarket.core.logging import configure_logging
from swingmarket.domain.models import CATEGORY_LABELS, Coordinates, SearchFilters
from swingmarket.listings.service import SORT_ORDERS, list_listings
from swingmarket.regions.resolver import resolve_region
from swingmarket.search.proximity import ProximitySearch
from swingmarket.store.memory import InMemoryListingStore

CATEGORY_CHOICES = list(CATEGORY_LABELS)


def _load_store(args: argparse.Namespace) -> InMemoryListingStore:
    path = args.catalog or get_settings().catalog.path
    return InMemoryListingStore.from_catalog(path)


def _cmd_nearby(args: argparse.Namespace) -> int:
    """Handle the `nearby` subcommand."""
    settings = get_settings()
    filters = SearchFilters(
        center=Coordinates(latitude=float(args.lat), longitude=float(args.lng)),
        radius_km=float(args.radius_km if args.radius_km is not None else settings.search.default_radius_km),
        category=args.category,
        price_min=args.price_min,
        price_max=args.price_max,
        limit=args.limit,
    )
    result = asyncio.run(ProximitySearch(_load_store(args), settings=settings).search(filters, page=int(args.page)))

    if args.json:
        print(json.dumps(result.model_dump(mode="json"), ensure_ascii=False, indent=2))
        return 0

    print(f"Page {result.page} (has_next={result.has_next}, has_prev={result.has_prev})")
    for i, item in enumerate(result.items, start=1):
        listing = item.listing
        dist = format_distance(item.distance_km) if item.distance_km is not None else "-"
        print(f"{i:>2}. [{CATEGORY_LABELS[listing.category]}] {listing.title}  {listing.price:,} KRW  {dist}  {listing.location.region}")
    return 0


def _cmd_list(args: argparse.Namespace) -> int:
    """Handle the `list` subcommand."""
    settings = get_settings()
    limit = int(args.limit or settings.search.list_default_limit)
    result = asyncio.run(
        list_listings(_load_store(args), page=int(args.page), limit=limit, category=args.category, sort=args.sort)
    )

    if args.json:
        print(json.dumps(result.model_dump(mode="json"), ensure_ascii=False, indent=2))
        return 0

    print(f"Page {result.page} (has_next={result.has_next}, has_prev={result.has_prev})")
    for i, listing in enumerate(result.items, start=1):
        print(f"{i:>2}. [{CATEGORY_LABELS[listing.category]}] {listing.title}  {listing.price:,} KRW  {listing.location.region}")
    return 0


def _cmd_resolve_region(args: argparse.Namespace) -> int:
    region = resolve_region(GeoPoint(latitude=float(args.lat), longitude=float(args.lng)))
    if args.json:
        print(json.dumps({"region": region}, ensure_ascii=False))
    else:
        print(region or "(no region within range)")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the SwingMarket CLI."""
    parser = argparse.ArgumentParser(prog="swingmarket")
    parser.add_argument("--catalog", type=str, default=None, help="Listing catalog JSON (default: settings)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log at DEBUG level")
    sub = parser.add_subparsers(dest="command", required=True)

    near = sub.add_parser("nearby", help="Find available listings within a radius of a point.")
    near.add_argument("--lat", required=True, type=float)
    near.add_argument("--lng", required=True, type=float)
    near.add_argument("--radius-km", type=float, default=None)
    near.add_argument("--category", choices=CATEGORY_CHOICES, default=None)
    near.add_argument("--price-min", type=int, default=None)
    near.add_argument("--price-max", type=int, default=None)
    near.add_argument("--page", type=int, default=1)
    near.add_argument("--limit", type=int, default=None)
    near.add_argument("--json", action="store_true", help="Output machine-readable JSON")
    near.set_defaults(func=_cmd_nearby)

    lst = sub.add_parser("list", help="Page through available listings.")
    lst.add_argument("--category", choices=CATEGORY_CHOICES, default=None)
    lst.add_argument("--sort", choices=list(SORT_ORDERS), default="latest")
    lst.add_argument("--page", type=int, default=1)
    lst.add_argument("--limit", type=int, default=None)
    lst.add_argument("--json", action="store_true", help="Output machine-readable JSON")
    lst.set_defaults(func=_cmd_list)

    reg = sub.add_parser("resolve-region", help="Nearest region label for a coordinate.")
    reg.add_argument("--lat", required=True, type=float)
    reg.add_argument("--lng", required=True, type=float)
    reg.add_argument("--json", action="store_true")
    reg.set_defaults(func=_cmd_resolve_region)
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint callable used by `python -m swingmarket.cli`."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging("DEBUG" if args.verbose else None)
    func: Any = getattr(args, "func")
    return int(func(args))


if __name__ == "__main__":
    raise SystemExit(main())
