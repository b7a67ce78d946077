"""SITEFEATURES FILE PURPOSE
Purpose: policy checks for feature modules (FEATURE contract + no cross-feature imports).
Hot path: no.
"""

from __future__ import annotations

import ast
import sys
from pathlib import Path


def fail(msg: str) -> None:
    print(f"FEATURE_CHECK_FAIL: {msg}", file=sys.stderr)
    raise SystemExit(1)


def _base_names(node: ast.ClassDef) -> set[str]:
    names: set[str] = set()
    for base in node.bases:
        if isinstance(base, ast.Name):
            names.add(base.id)
        elif isinstance(base, ast.Attribute):
            names.add(base.attr)
    return names


def check_module(path: Path) -> None:
    src = path.read_text(encoding="utf-8")
    tree = ast.parse(src, filename=str(path))

    has_feature_class = False
    has_feature_export = False
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for a in node.names:
                if a.name == "features" or a.name.startswith("features."):
                    fail(f"cross-feature import in {path}")
        if isinstance(node, ast.ImportFrom):
            if node.level and node.level > 0:
                fail(f"relative import not allowed in {path}")
            mod = node.module or ""
            if mod == "features" or mod.startswith("features."):
                fail(f"cross-feature import in {path}")
        if isinstance(node, ast.ClassDef) and "Feature" in _base_names(node):
            has_feature_class = True
        if isinstance(node, ast.Assign):
            for target in node.targets:
                if isinstance(target, ast.Name) and target.id == "FEATURE":
                    has_feature_export = True

    if not has_feature_export:
        fail(f"FEATURE missing in {path}")
    if not has_feature_class:
        fail(f"no Feature subclass in {path}")


def main(feat_dir: Path = Path("features")) -> None:
    for path in sorted(feat_dir.glob("*.py")):
        if path.name.startswith("_") or path.name == "__init__.py":
            continue
        check_module(path)

    print("FEATURE_CHECK_OK")


if __name__ == "__main__":
    main(Path(sys.argv[1]) if len(sys.argv) > 1 else Path("features"))
