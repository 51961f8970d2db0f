# src/swingmarket/config/settings.py
"""
Application settings (Pydantic).

Settings are loaded from `src/swingmarket/config/defaults.yaml`, then optionally overridden by:
- environment variables (e.g., `SWINGMARKET_LOG_LEVEL`, `SWINGMARKET_CATALOG_PATH`)
- an external YAML file via `SWINGMARKET_CONFIG_PATH`

Design rule:
- Tuning knobs (page sizes, radius limits, region match distance) live in YAML,
  not hard-coded in the search code.
"""

from __future__ import annotations

import copy
import os
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, model_validator

from swingmarket.core.env import load_dotenv_if_present


def read_package_yaml(filename: str) -> dict[str, Any]:
    """Read a YAML file packaged inside `swingmarket.config`."""
    text = resources.files("swingmarket.config").joinpath(filename).read_text(encoding="utf-8")
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {filename}; expected a mapping.")
    return data


def _read_yaml_file(path: str | Path) -> dict[str, Any]:
    """Read a YAML file from disk and return its mapping root."""
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {path}; expected a mapping.")
    return data


class AppSettings(BaseModel):
    name: str = "SwingMarket"
    log_level: str = "INFO"


class CatalogSettings(BaseModel):
    path: str = "data/catalogs/listings.json"


class SearchSettings(BaseModel):
    default_limit: int = Field(10, ge=1)
    max_limit: int = Field(50, ge=1)
    default_radius_km: float = Field(5.0, gt=0)
    max_radius_km: float = Field(50.0, gt=0)
    list_default_limit: int = Field(20, ge=1)

    @model_validator(mode="after")
    def _validate_bounds(self) -> "SearchSettings":
        if self.default_limit > self.max_limit or self.list_default_limit > self.max_limit:
            raise ValueError("search default limits must not exceed search.max_limit")
        if self.default_radius_km > self.max_radius_km:
            raise ValueError("search.default_radius_km must not exceed search.max_radius_km")
        return self


class RegionSettings(BaseModel):
    # None -> use the packaged `regions.yaml`.
    path: str | None = None
    # Nearest region farther than this is not used as a label (None disables the cut-off).
    max_match_km: float | None = Field(5.0, gt=0)


class Settings(BaseModel):
    app: AppSettings = Field(default_factory=AppSettings)
    catalog: CatalogSettings = Field(default_factory=CatalogSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)
    regions: RegionSettings = Field(default_factory=RegionSettings)


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Overlay selected environment variables onto raw settings payload."""
    load_dotenv_if_present()
    data = dict(data)

    log_level = os.getenv("SWINGMARKET_LOG_LEVEL")
    if log_level:
        data.setdefault("app", {})["log_level"] = log_level

    catalog_path = os.getenv("SWINGMARKET_CATALOG_PATH")
    if catalog_path:
        data.setdefault("catalog", {})["path"] = catalog_path

    regions_path = os.getenv("SWINGMARKET_REGIONS_PATH")
    if regions_path:
        data.setdefault("regions", {})["path"] = regions_path

    return data


@lru_cache
def get_settings() -> Settings:
    """Load and validate settings (cached)."""
    load_dotenv_if_present()
    config_path = os.getenv("SWINGMARKET_CONFIG_PATH")
    raw = _read_yaml_file(config_path) if config_path else read_package_yaml("defaults.yaml")
    raw = _apply_env_overrides(raw)
    return Settings.model_validate(raw)


@lru_cache
def _logging_config() -> dict[str, Any]:
    return read_package_yaml("logging.yaml")


def get_logging_config() -> dict[str, Any]:
    """Return a fresh copy of the packaged logging configuration."""
    return copy.deepcopy(_logging_config())
