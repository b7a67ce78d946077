"""SITEFEATURES FILE PURPOSE
Purpose: error taxonomy for feature lifecycle transitions.
Hot path: no.
Feature flags: none.
Failure mode: n/a (definitions only).
"""

from __future__ import annotations


class FeatureError(Exception):
    """Base class for registry and lifecycle errors."""


class FeatureFailure(FeatureError):
    """A feature's setup/shutdown hook rejected the transition."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class FeatureDoesNotExist(FeatureError):
    def __init__(self, feature_id: str) -> None:
        super().__init__(f"feature does not exist: {feature_id}")
        self.feature_id = feature_id
