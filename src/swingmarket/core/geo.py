from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

from swingmarket.domain.errors import InvalidRadiusError

"""
Geospatial helpers.

The listing store only supports equality/range filters on scalar fields, so a
proximity search is done in two phases:
- `bounding_box` produces an index-friendly lat/lng rectangle (pre-filter),
- `haversine_km` gives the exact distance used to accept/reject candidates.
"""

EARTH_RADIUS_KM = 6371.0
# One degree of latitude on the haversine sphere (~111.2 km). Using the same radius
# as `haversine_km` keeps the box a strict superset of the search circle.
KM_PER_DEGREE_LAT = 2 * math.pi * EARTH_RADIUS_KM / 360
# Relative widening of the box deltas; covers float rounding at the circle edge.
BOX_MARGIN = 1e-9


@dataclass(frozen=True)
class GeoPoint:
    """A latitude/longitude pair in decimal degrees."""

    latitude: float
    longitude: float


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned lat/lng rectangle (inclusive on all edges)."""

    southwest: GeoPoint
    northeast: GeoPoint

    def contains(self, point: GeoPoint) -> bool:
        return (
            self.southwest.latitude <= point.latitude <= self.northeast.latitude
            and self.southwest.longitude <= point.longitude <= self.northeast.longitude
        )


def is_valid_coordinate(point: GeoPoint) -> bool:
    """Return True when `point` is a physically possible lat/lng pair."""
    lat = point.latitude
    lng = point.longitude
    if isinstance(lat, bool) or isinstance(lng, bool):
        return False
    if not isinstance(lat, (int, float)) or not isinstance(lng, (int, float)):
        return False
    if not (math.isfinite(lat) and math.isfinite(lng)):
        return False
    return abs(lat) <= 90 and abs(lng) <= 180


def haversine_km(a: GeoPoint, b: GeoPoint) -> float:
    """Compute great-circle distance in kilometres between two points."""
    if a == b:
        return 0.0
    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    dlat = lat2 - lat1
    dlng = math.radians(b.longitude - a.longitude)

    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlng / 2) ** 2
    h = min(1.0, max(0.0, h))
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(h))


def _longitude_delta(latitude: float, radius_km: float) -> float:
    # Degrees of longitude shrink with cos(latitude). asin(sin(d) / cos(lat)) is the
    # widest longitude reached by the circle; it is never smaller than the
    # d / cos(lat) approximation, so the box cannot clip the circle's flanks.
    cos_lat = math.cos(math.radians(latitude))
    angular = radius_km / EARTH_RADIUS_KM
    if cos_lat <= 0 or angular >= math.pi / 2 or math.sin(angular) >= cos_lat:
        return 180.0
    return min(180.0, math.degrees(math.asin(math.sin(angular) / cos_lat)) * (1 + BOX_MARGIN))


def bounding_box(center: GeoPoint, radius_km: float) -> BoundingBox:
    """Return a lat/lng rectangle that encloses the circle `(center, radius_km)`.

    The box is a superset of the circle (its corners lie farther than `radius_km`),
    so callers must still apply `haversine_km` to every candidate.

    Edge handling:
    - latitudes are clamped to [-90, 90]; when the box touches a pole every
      longitude is inside the circle, so the longitude range becomes [-180, 180]
    - the longitude delta is capped at 180 degrees near the poles
    - a box that crosses the antimeridian is widened to the full longitude range
      instead of being split, so one range query is always enough

    Raises:
        InvalidRadiusError: If `radius_km` is not a positive finite number.
    """
    r = float(radius_km)
    if not math.isfinite(r) or r <= 0:
        raise InvalidRadiusError(radius_km)

    lat_delta = r / KM_PER_DEGREE_LAT * (1 + BOX_MARGIN)
    lng_delta = _longitude_delta(center.latitude, r)

    south = max(-90.0, center.latitude - lat_delta)
    north = min(90.0, center.latitude + lat_delta)
    west = center.longitude - lng_delta
    east = center.longitude + lng_delta

    if south <= -90.0 or north >= 90.0 or west < -180.0 or east > 180.0:
        west, east = -180.0, 180.0

    return BoundingBox(
        southwest=GeoPoint(latitude=south, longitude=west),
        northeast=GeoPoint(latitude=north, longitude=east),
    )


def center_point(points: Iterable[GeoPoint]) -> GeoPoint:
    """Arithmetic mean of `points` (fine for city-scale clusters)."""
    pts = list(points)
    if not pts:
        raise ValueError("center_point requires at least one point")
    return GeoPoint(
        latitude=sum(p.latitude for p in pts) / len(pts),
        longitude=sum(p.longitude for p in pts) / len(pts),
    )


def format_coordinates(point: GeoPoint, precision: int = 4) -> str:
    return f"{point.latitude:.{precision}f}, {point.longitude:.{precision}f}"


def format_distance(distance_km: float) -> str:
    """Render a distance for display: metres below 1 km, one decimal below 10 km."""
    if distance_km < 1:
        return f"{round(distance_km * 1000)}m"
    if distance_km < 10:
        return f"{distance_km:.1f}km"
    return f"{round(distance_km)}km"
