"""SITEFEATURES FILE PURPOSE
Purpose: create FastAPI app, build the feature registry and mount its routes.
Hot path: no (startup only).
Feature flags: SITE_FLAG_STORE, SITE_FEATURES_SETUP_ON_START.
Failure mode: start with core + admin routes even if no features are registered.
"""

from __future__ import annotations

from fastapi import FastAPI

from sitefeatures.admin import build_admin_router
from sitefeatures.config import setup_on_start
from sitefeatures.feature import FlagStore
from sitefeatures.feature_loader import load_features
from sitefeatures.flag_store import make_flag_store


def create_app(flag_store: FlagStore | None = None) -> FastAPI:
    app = FastAPI()

    @app.get("/")
    async def root() -> dict[str, bool]:
        return {"ok": True}

    registry = load_features().build(flag_store or make_flag_store())
    if setup_on_start():
        registry.activate_persisted()

    app.state.feature_registry = registry
    app.include_router(registry.get_router())
    app.include_router(build_admin_router(registry))
    return app
