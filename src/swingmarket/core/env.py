"""
Project-root and `.env` helpers.

Catalog and region paths in settings are relative (`data/catalogs/listings.json`);
they are resolved against the repository root so the API, the CLI and the tests
behave the same from any working directory. `SWINGMARKET_PROJECT_ROOT` pins the
root explicitly (useful for an installed console script).
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv


def _is_project_root(path: Path) -> bool:
    return (path / "pyproject.toml").is_file() and (path / "data").is_dir()


@lru_cache
def get_project_root() -> Path:
    """Return the repository root (cached)."""
    override = os.getenv("SWINGMARKET_PROJECT_ROOT")
    if override:
        return Path(override).expanduser().resolve()

    for start in (Path.cwd(), Path(__file__).parent):
        start = start.resolve()
        for candidate in (start, *start.parents):
            if _is_project_root(candidate):
                return candidate
    return Path.cwd().resolve()


@lru_cache
def load_dotenv_if_present() -> Path | None:
    """Load `<root>/.env` once without overriding variables already set."""
    env_path = get_project_root() / ".env"
    if not env_path.is_file():
        return None
    load_dotenv(dotenv_path=env_path, override=False)
    return env_path


def resolve_project_path(path: str | Path) -> Path:
    p = Path(path).expanduser()
    if p.is_absolute():
        return p
    return (get_project_root() / p).resolve()
