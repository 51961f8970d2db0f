"""
Domain error types.

Invalid coordinates are deliberately absent: a malformed search centre degrades the
search (no geo filter) instead of failing it.
"""

from __future__ import annotations


class InvalidRadiusError(ValueError):
    """Raised when a search radius is not a positive finite number of kilometres."""

    def __init__(self, radius_km: object):
        self.radius_km = radius_km
        super().__init__(f"radius_km must be > 0 (got {radius_km!r})")
