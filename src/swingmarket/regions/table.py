"""
Region reference table.

A small, fixed list of named neighbourhood centres. It is read once per process
(`load_region_table` is cached and returns an immutable tuple), so concurrent
requests can share it without locking.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, TypeAdapter

from swingmarket.config.settings import read_package_yaml, get_settings
from swingmarket.core.env import resolve_project_path
from swingmarket.core.geo import GeoPoint


@dataclass(frozen=True)
class RegionEntry:
    """A named region and its representative centre point."""

    name: str
    center: GeoPoint


class _RegionRecord(BaseModel):
    name: str = Field(..., min_length=1)
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


_RECORDS_ADAPTER = TypeAdapter(list[_RegionRecord])


def parse_region_table(payload: dict) -> tuple[RegionEntry, ...]:
    """Validate a `{"regions": [...]}` mapping into region entries (order preserved)."""
    records = _RECORDS_ADAPTER.validate_python(payload.get("regions") or [])
    return tuple(
        RegionEntry(name=r.name, center=GeoPoint(latitude=r.latitude, longitude=r.longitude)) for r in records
    )


def _read_table_file(path: str | Path) -> dict:
    data = yaml.safe_load(resolve_project_path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {path}; expected a mapping.")
    return data


@lru_cache
def load_region_table() -> tuple[RegionEntry, ...]:
    """Load the configured region table once (cached for the process lifetime)."""
    path = get_settings().regions.path
    payload = _read_table_file(path) if path else read_package_yaml("regions.yaml")
    return parse_region_table(payload)
