"""SITEFEATURES FILE PURPOSE
Purpose: in-process visit counter; reset on every enable.
Hot path: yes (POST /visits/hit on page views when enabled).
Feature flags: SITE_FEATURE_VISITS (env flag store).
Failure mode: disabled => 503; counter is lost on shutdown/restart.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException

from sitefeatures.feature import Feature


class VisitCounterFeature(Feature):
    name = "Visit Counter"
    description = "Counts page hits while enabled."
    subpath = "/visits"

    def __init__(self) -> None:
        self.active = False
        self.count = 0

    def get_id(self) -> str:
        return "visits"

    def _ensure_active(self) -> None:
        if not self.active:
            raise HTTPException(status_code=503, detail="visit counter disabled")

    def get_router(self) -> APIRouter:
        router = APIRouter(tags=["visits"])

        @router.post("/hit")
        async def hit() -> dict[str, Any]:
            self._ensure_active()
            self.count += 1
            return {"ok": True, "count": self.count}

        @router.get("/count")
        async def count() -> dict[str, Any]:
            self._ensure_active()
            return {"ok": True, "count": self.count}

        return router

    def setup(self) -> None:
        self.count = 0
        self.active = True

    def shutdown(self) -> None:
        self.active = False


FEATURE = VisitCounterFeature
