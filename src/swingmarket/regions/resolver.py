"""
Nearest-region lookup.

Used to auto-label a listing that was created with raw coordinates but no
region name. This is a linear nearest-neighbour scan over a handful of
reference points, not a geocoder.
"""

from __future__ import annotations

from typing import Sequence

from swingmarket.config.settings import Settings, get_settings
from swingmarket.core.geo import GeoPoint, haversine_km, is_valid_coordinate
from swingmarket.regions.table import RegionEntry, load_region_table


def nearest_region(point: GeoPoint, table: Sequence[RegionEntry]) -> str | None:
    """Return the name of the entry closest to `point` (first entry wins ties).

    Returns None only when `table` is empty.
    """
    best_name: str | None = None
    best_km = float("inf")
    for entry in table:
        d = haversine_km(point, entry.center)
        if d < best_km:
            best_km = d
            best_name = entry.name
    return best_name


def region_center(name: str, table: Sequence[RegionEntry] | None = None) -> GeoPoint | None:
    """Look up the centre of a region by exact name."""
    for entry in load_region_table() if table is None else table:
        if entry.name == name:
            return entry.center
    return None


def resolve_region(
    point: GeoPoint,
    *,
    table: Sequence[RegionEntry] | None = None,
    settings: Settings | None = None,
) -> str | None:
    """Resolve a display region for `point` using the configured table and cut-off.

    Returns None for invalid coordinates, or when the nearest region is farther
    than `settings.regions.max_match_km`.
    """
    if not is_valid_coordinate(point):
        return None
    settings = settings or get_settings()
    entries = load_region_table() if table is None else table

    name = nearest_region(point, entries)
    if name is None:
        return None

    max_km = settings.regions.max_match_km
    if max_km is not None:
        center = region_center(name, entries)
        if center is None or haversine_km(point, center) > max_km:
            return None
    return name
