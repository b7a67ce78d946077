"""SITEFEATURES FILE PURPOSE
Purpose: admin endpoints to list and toggle registered features.
Hot path: no (admin control-plane only).
Feature flags: none (always mounted; gated by SITE_ADMIN_API_KEY).
Failure mode:
  - unauthorized => 401
  - unknown feature => 404
  - lifecycle hook rejected the toggle => 409 (flag unchanged)
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Header, HTTPException
from pydantic import BaseModel, ConfigDict

from sitefeatures.config import admin_api_key
from sitefeatures.errors import FeatureDoesNotExist, FeatureFailure
from sitefeatures.registry import FeatureRegistry


def _authorized(auth_header: str | None) -> bool:
    configured = admin_api_key()
    if not configured or not isinstance(auth_header, str):
        return False
    prefix = "Bearer "
    if not auth_header.startswith(prefix):
        return False
    token = auth_header[len(prefix) :].strip()
    return token == configured


def _require_admin_bearer(authorization: str | None) -> None:
    if not _authorized(authorization):
        raise HTTPException(status_code=401, detail="unauthorized")


class FeatureToggleRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)

    enabled: bool


def build_admin_router(registry: FeatureRegistry) -> APIRouter:
    router = APIRouter(prefix="/admin/features", tags=["features"])

    @router.get("")
    async def list_features(authorization: str | None = Header(default=None)) -> dict[str, Any]:
        _require_admin_bearer(authorization)
        return {"ok": True, "features": registry.describe()}

    @router.get("/{feature_id}")
    async def read_feature(
        feature_id: str,
        authorization: str | None = Header(default=None),
    ) -> dict[str, Any]:
        _require_admin_bearer(authorization)
        entry = registry.describe_feature(feature_id)
        if entry is None:
            raise HTTPException(status_code=404, detail="feature not found")
        return {"ok": True, "feature": entry}

    # async on purpose: toggles then run one at a time on the event loop
    @router.put("/{feature_id}")
    async def toggle_feature(
        feature_id: str,
        body: FeatureToggleRequest,
        authorization: str | None = Header(default=None),
    ) -> dict[str, Any]:
        _require_admin_bearer(authorization)
        try:
            registry.set_enabled(feature_id, body.enabled)
        except FeatureDoesNotExist as e:
            raise HTTPException(status_code=404, detail="feature not found") from e
        except FeatureFailure as e:
            raise HTTPException(status_code=409, detail=e.reason) from e
        return {"ok": True, "id": feature_id, "enabled": registry.get_enabled(feature_id)}

    return router
