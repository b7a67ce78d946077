"""SITEFEATURES FILE PURPOSE
Purpose: capability contract for pluggable features + flag store protocol.
Hot path: no (get_router is called at startup; hooks only on toggles).
Feature flags: none.
Failure mode: hooks raise FeatureFailure to reject a transition.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Protocol

from fastapi import APIRouter


class FlagStore(Protocol):
    def get_enabled(self, feature_id: str) -> bool: ...

    def set_enabled(self, feature_id: str, enabled: bool) -> None: ...


class Feature(ABC):
    """One optional capability: an id, display metadata, a router and lifecycle hooks.

    Subclasses override the metadata declaratively through the class
    attributes below; the getters are what the registry reads.

    `get_router` must be safe to call whether or not the feature is set up:
    the registry mounts every registered feature, so handlers are expected
    to gate themselves on the feature's own live state.
    """

    name: str = "Unnamed Feature"
    description: str = "No Description"
    subpath: str = "/"

    @abstractmethod
    def get_id(self) -> str: ...

    @abstractmethod
    def get_router(self) -> APIRouter: ...

    @abstractmethod
    def setup(self) -> None: ...

    def shutdown(self) -> None:
        return None

    def get_subpath(self) -> str:
        return self.subpath

    def get_name(self) -> str:
        return self.name

    def get_description(self) -> str:
        return self.description
