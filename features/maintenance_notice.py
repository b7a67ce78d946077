"""SITEFEATURES FILE PURPOSE
Purpose: site-wide maintenance notice served while enabled.
Hot path: yes (GET /maintenance/notice polled by the frontend).
Feature flags:
  - SITE_FEATURE_MAINTENANCE (env flag store)
  - SITE_MAINTENANCE_MESSAGE (required to enable)
Failure mode:
  - message unset => setup rejected, feature stays disabled
  - disabled => {"active": false}
"""

from __future__ import annotations

import os
from typing import Any

from fastapi import APIRouter

from sitefeatures.errors import FeatureFailure
from sitefeatures.feature import Feature


def _configured_message() -> str | None:
    msg = (os.getenv("SITE_MAINTENANCE_MESSAGE") or "").strip()
    return msg or None


class MaintenanceNoticeFeature(Feature):
    name = "Maintenance Notice"
    description = "Shows an operator-supplied maintenance banner."
    subpath = "/maintenance"

    def __init__(self) -> None:
        self.message: str | None = None

    def get_id(self) -> str:
        return "maintenance"

    def get_router(self) -> APIRouter:
        router = APIRouter(tags=["maintenance"])

        @router.get("/notice")
        async def notice() -> dict[str, Any]:
            if self.message is None:
                return {"ok": True, "active": False}
            return {"ok": True, "active": True, "message": self.message}

        return router

    def setup(self) -> None:
        msg = _configured_message()
        if msg is None:
            raise FeatureFailure("SITE_MAINTENANCE_MESSAGE missing")
        self.message = msg

    def shutdown(self) -> None:
        self.message = None


FEATURE = MaintenanceNoticeFeature
