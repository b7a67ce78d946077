"""SITEFEATURES FILE PURPOSE
Purpose: feature registry (builder + enable/disable lifecycle state machine).
Hot path: low (toggles are admin-driven; get_enabled is a store read).
Feature flags: none (flags live in the bound FlagStore).
Failure mode: hook failure => flag unchanged (stuck but consistent);
  store write failure after a hook => logged as divergence, raised as FeatureFailure.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter

from sitefeatures.errors import FeatureDoesNotExist, FeatureError, FeatureFailure
from sitefeatures.feature import Feature, FlagStore
from sitefeatures.logging import registry_logger


def _mount_prefix(subpath: str) -> str:
    # FastAPI prefixes must start with "/" and must not end with one
    prefix = (subpath or "").strip().rstrip("/")
    if prefix and not prefix.startswith("/"):
        prefix = "/" + prefix
    return prefix


def _run_hook(feature: Feature, hook: str) -> None:
    try:
        getattr(feature, hook)()
    except FeatureError:
        raise
    except Exception as e:
        raise FeatureFailure(f"{type(e).__name__}: {e}") from e


class FeatureRegistry:
    """Binds registered features to a FlagStore.

    The registry is itself a FlagStore: reads delegate to the bound store,
    writes run the matching lifecycle hook first and only persist the flag
    once the hook succeeded. There is no internal locking; callers must
    serialize set_enabled per registry.
    """

    def __init__(self, store: FlagStore, features: dict[str, Feature], log: Any = None) -> None:
        self._store = store
        self._features = features
        self._log = log or registry_logger

    def get_enabled(self, feature_id: str) -> bool:
        return self._store.get_enabled(feature_id)

    def set_enabled(self, feature_id: str, enabled: bool) -> None:
        prev_enabled = self._store.get_enabled(feature_id)
        if prev_enabled == enabled:
            return

        feature = self._features.get(feature_id)
        if feature is None:
            raise FeatureDoesNotExist(feature_id)

        _run_hook(feature, "shutdown" if prev_enabled else "setup")

        try:
            self._store.set_enabled(feature_id, enabled)
        except Exception as e:
            self._log.error(
                "FEATURE_FLAG_WRITE_FAILED id=%s enabled=%s live_state_diverged=1 error=%s",
                feature_id,
                enabled,
                e,
            )
            if isinstance(e, FeatureError):
                raise
            raise FeatureFailure(f"{type(e).__name__}: {e}") from e

        self._log.info("%s id=%s", "FEATURE_ENABLED" if enabled else "FEATURE_DISABLED", feature_id)

    def get_router(self) -> APIRouter:
        router = APIRouter()
        for feature in self._features.values():
            router.include_router(feature.get_router(), prefix=_mount_prefix(feature.get_subpath()))
        return router

    def get_all_ids(self) -> list[str]:
        return [feature.get_id() for feature in self._features.values()]

    def get_feature(self, feature_id: str) -> Feature | None:
        return self._features.get(feature_id)

    def describe_feature(self, feature_id: str) -> dict[str, Any] | None:
        feature = self._features.get(feature_id)
        if feature is None:
            return None
        return {
            "id": feature_id,
            "name": feature.get_name(),
            "description": feature.get_description(),
            "subpath": feature.get_subpath(),
            "enabled": self.get_enabled(feature_id),
        }

    def describe(self) -> list[dict[str, Any]]:
        out: list[dict[str, Any]] = []
        for feature_id in sorted(self._features.keys()):
            entry = self.describe_feature(feature_id)
            if entry is not None:
                out.append(entry)
        return out

    def activate_persisted(self) -> dict[str, str]:
        """Run setup() for every registered feature the store already reports enabled.

        Opt-in only; construction never does this. A feature whose setup fails
        is flagged back to disabled so the store matches its live state.
        """
        failures: dict[str, str] = {}
        for feature_id, feature in self._features.items():
            if not self._store.get_enabled(feature_id):
                continue
            try:
                _run_hook(feature, "setup")
            except FeatureError as e:
                failures[feature_id] = str(e)
                self._log.warning("FEATURE_ACTIVATE_FAILED id=%s reason=%s", feature_id, e)
                self._store.set_enabled(feature_id, False)
                continue
            self._log.info("FEATURE_ACTIVATED id=%s", feature_id)
        return failures


class FeatureBuilder:
    """Accumulates features by id during startup; `build` hands them to a registry.

    `log` is the sink for registration messages (collision warnings
    included); anything with `info`/`warning` methods works.
    """

    def __init__(self, log: Any = None) -> None:
        self._features: dict[str, Feature] = {}
        self._log = log or registry_logger

    def add_feature(self, feature: Feature) -> FeatureBuilder:
        feature_id = feature.get_id()
        name = feature.get_name()
        self._log.info("FEATURE_ADD name=%s id=%s", name, feature_id)

        prev = self._features.get(feature_id)
        self._features[feature_id] = feature
        if prev is not None:
            self._log.warning(
                "FEATURE_OVERRIDE name=%s id=%s overrides=%s",
                name,
                feature_id,
                prev.get_name(),
            )
        return self

    def build(self, store: FlagStore) -> FeatureRegistry:
        features, self._features = self._features, {}
        return FeatureRegistry(store, features, log=self._log)
