from __future__ import annotations

import logging

import pytest

from swingmarket.config.settings import Settings, get_logging_config, get_settings
from swingmarket.core.env import get_project_root, resolve_project_path
from swingmarket.core.logging import configure_logging


@pytest.fixture
def fresh_settings():
    # get_settings() is lru-cached; clear it around tests that change the environment.
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_packaged_defaults():
    settings = get_settings()
    assert settings.search.default_limit == 10
    assert settings.search.max_limit == 50
    assert settings.regions.max_match_km == 5
    assert settings.catalog.path == "data/catalogs/listings.json"


def test_env_overrides(monkeypatch, fresh_settings):
    monkeypatch.setenv("SWINGMARKET_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("SWINGMARKET_CATALOG_PATH", "/tmp/other.json")
    settings = get_settings()
    assert settings.app.log_level == "DEBUG"
    assert settings.catalog.path == "/tmp/other.json"


def test_external_config_file(monkeypatch, tmp_path, fresh_settings):
    path = tmp_path / "config.yaml"
    path.write_text("search:\n  default_limit: 5\n  max_limit: 25\n", encoding="utf-8")
    monkeypatch.setenv("SWINGMARKET_CONFIG_PATH", str(path))
    settings = get_settings()
    assert settings.search.default_limit == 5
    assert settings.search.max_limit == 25
    assert settings.search.list_default_limit == 20


def test_inconsistent_search_limits_are_rejected():
    with pytest.raises(ValueError, match="max_limit"):
        Settings.model_validate({"search": {"default_limit": 100, "max_limit": 10}})


def test_logging_config_is_a_fresh_copy():
    config = get_logging_config()
    config["root"]["level"] = "CRITICAL"
    assert get_logging_config()["root"]["level"] == "INFO"


@pytest.fixture
def fresh_root():
    get_project_root.cache_clear()
    yield
    get_project_root.cache_clear()


def test_relative_paths_resolve_against_project_root(monkeypatch, tmp_path, fresh_root):
    monkeypatch.setenv("SWINGMARKET_PROJECT_ROOT", str(tmp_path))
    assert get_project_root() == tmp_path.resolve()
    assert resolve_project_path("data/catalogs/x.json") == tmp_path.resolve() / "data" / "catalogs" / "x.json"
    assert resolve_project_path(tmp_path / "abs.json") == tmp_path / "abs.json"


def test_project_root_is_found_from_the_repo():
    root = get_project_root()
    assert (root / "pyproject.toml").is_file()
    assert (root / "data" / "catalogs" / "listings.json").is_file()


def test_configure_logging_level_override():
    try:
        configure_logging("debug")
        assert logging.getLogger().level == logging.DEBUG
    finally:
        configure_logging()
    assert logging.getLogger().level == logging.INFO
