"""SITEFEATURES FILE PURPOSE
Purpose: discover one-file feature modules from `features/` into a FeatureBuilder.
Hot path: no (startup only).
Feature flags: SITE_DEBUG.
Failure mode: invalid FEATURE => skipped (debug logs only when SITE_DEBUG=1);
  import errors fail fast.
"""

from __future__ import annotations

import importlib
import pkgutil
from typing import Any

from sitefeatures.config import is_debug
from sitefeatures.feature import Feature
from sitefeatures.logging import logger
from sitefeatures.registry import FeatureBuilder


def _validate(feature: Any) -> Feature | None:
    # modules export the class so every load starts from fresh feature state
    if isinstance(feature, type) and issubclass(feature, Feature):
        feature = feature()
    if not isinstance(feature, Feature):
        return None
    feature_id = feature.get_id()
    if not isinstance(feature_id, str) or not feature_id:
        return None
    return feature


def load_features(package: str = "features", log: Any = None) -> FeatureBuilder:
    pkg = importlib.import_module(package)
    builder = FeatureBuilder(log=log)
    discovered: list[str] = []

    for mod in pkgutil.iter_modules(pkg.__path__):
        if mod.ispkg or mod.name.startswith("_") or mod.name == "__init__":
            continue
        m = importlib.import_module(f"{package}.{mod.name}")
        feature = _validate(getattr(m, "FEATURE", None))
        if feature is None:
            if is_debug():
                logger.warning("FEATURE_INVALID module=%s", mod.name)
            continue

        builder.add_feature(feature)
        discovered.append(feature.get_id())

    if is_debug():
        logger.info("FEATURES_DISCOVERED keys=%s", sorted(discovered))
    return builder
