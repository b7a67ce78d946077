"""SITEFEATURES FILE PURPOSE
Purpose: minimal sample feature for registry regression coverage.
Hot path: no.
Feature flags: SITE_FEATURE_SAMPLE (env flag store).
Failure mode: disabled by default; routes answer 503 until set up.
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from sitefeatures.feature import Feature


class SampleFeature(Feature):
    name = "Sample"
    description = "Ping endpoint used to smoke-test feature toggles."
    subpath = "/sample"

    def __init__(self) -> None:
        self.active = False

    def get_id(self) -> str:
        return "sample"

    def get_router(self) -> APIRouter:
        router = APIRouter()

        @router.get("/ping")
        async def ping() -> dict[str, bool]:
            if not self.active:
                raise HTTPException(status_code=503, detail="sample disabled")
            return {"ok": True}

        return router

    def setup(self) -> None:
        self.active = True

    def shutdown(self) -> None:
        self.active = False


FEATURE = SampleFeature
