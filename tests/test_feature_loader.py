from __future__ import annotations

import textwrap

from sitefeatures.feature_loader import load_features
from sitefeatures.flag_store import MemoryFlagStore

_VALID = textwrap.dedent(
    '''
    from fastapi import APIRouter

    from sitefeatures.feature import Feature


    class GoodFeature(Feature):
        name = "Good"

        def get_id(self) -> str:
            return "good"

        def get_router(self) -> APIRouter:
            return APIRouter()

        def setup(self) -> None:
            return None


    FEATURE = GoodFeature
    '''
)


def test_load_features_from_repo_package() -> None:
    registry = load_features().build(MemoryFlagStore())

    assert sorted(registry.get_all_ids()) == ["maintenance", "sample", "visits"]


def test_load_features_skips_invalid_and_private_modules(monkeypatch, tmp_path) -> None:
    pkg = tmp_path / "loader_fixture_features"
    pkg.mkdir()
    (pkg / "__init__.py").write_text("", encoding="utf-8")
    (pkg / "good.py").write_text(_VALID, encoding="utf-8")
    (pkg / "not_a_feature.py").write_text("FEATURE = {'key': 'legacy'}\n", encoding="utf-8")
    (pkg / "no_export.py").write_text("X = 1\n", encoding="utf-8")
    (pkg / "_private.py").write_text("raise RuntimeError('must not be imported')\n", encoding="utf-8")
    monkeypatch.syspath_prepend(str(tmp_path))

    registry = load_features("loader_fixture_features").build(MemoryFlagStore())

    assert registry.get_all_ids() == ["good"]
    assert registry.get_feature("good").get_name() == "Good"


def test_each_load_creates_fresh_feature_instances() -> None:
    first = load_features().build(MemoryFlagStore())
    second = load_features().build(MemoryFlagStore())

    first.set_enabled("sample", True)

    assert first.get_feature("sample") is not second.get_feature("sample")
    assert second.get_feature("sample").active is False
