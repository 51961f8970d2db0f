"""
FastAPI application wiring.

Search, listing and region logic lives in `swingmarket.search`, `swingmarket.listings`
and `swingmarket.regions`; this module only builds the app.
"""

from __future__ import annotations

import os

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from swingmarket.core.logging import configure_logging

from .routes import router

_LOCAL_ORIGIN_REGEX = r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$"


def cors_options() -> dict | None:
    """CORS middleware options for the marketplace web client.

    `SWINGMARKET_CORS_ORIGINS` is a comma-separated allow-list. Without it, any
    localhost origin is allowed so a local frontend works out of the box.
    """
    origins = [s.strip() for s in os.getenv("SWINGMARKET_CORS_ORIGINS", "").split(",") if s.strip()]
    if origins:
        return {"allow_origins": origins}
    if os.getenv("SWINGMARKET_CORS_ALLOW_LOCAL", "1").strip().lower() in {"0", "false", "no", "n"}:
        return None
    return {"allow_origin_regex": _LOCAL_ORIGIN_REGEX}


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(title="SwingMarket API", version="0.1.0")
    options = cors_options()
    if options is not None:
        # Read-only browsing plus anonymous posting; no cookies cross origins.
        app.add_middleware(CORSMiddleware, allow_credentials=False, allow_methods=["GET", "POST"], allow_headers=["*"], **options)
    app.include_router(router)

    @app.get("/healthz", include_in_schema=False)
    def healthz() -> dict:
        return {"status": "ok"}

    return app


app = create_app()
