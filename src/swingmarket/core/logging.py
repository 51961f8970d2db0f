"""
Logging setup for the API and the CLI.

Handlers and formatters come from the packaged `logging.yaml`; the level comes
from `app.log_level` (env: `SWINGMARKET_LOG_LEVEL`) unless the caller passes one,
as the CLI does for `--verbose`.
"""

from __future__ import annotations

import logging.config

from swingmarket.config.settings import get_logging_config, get_settings


def configure_logging(level: str | None = None) -> None:
    config = get_logging_config()
    level = (level or get_settings().app.log_level).upper()

    config.setdefault("root", {})["level"] = level
    for handler in config.get("handlers", {}).values():
        handler["level"] = level
    logging.config.dictConfig(config)
