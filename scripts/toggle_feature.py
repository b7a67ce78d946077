#!/usr/bin/env python3
"""Enable, disable or inspect a feature against the SQLite flag store (no HTTP).

Runs the feature's setup/shutdown hook in this process, then persists the flag.
Exit: 0 ok, 1 unknown feature, 2 hook rejected the transition.

Supported invocation from repo root:
  python scripts/toggle_feature.py sample on --db ops/site_flags.sqlite3
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from sitefeatures.errors import FeatureDoesNotExist, FeatureFailure  # noqa: E402
from sitefeatures.feature_loader import load_features  # noqa: E402
from sitefeatures.flag_store import SqliteFlagStore  # noqa: E402


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Toggle a registered feature.")
    parser.add_argument("feature_id", help="Registered feature id, e.g. sample")
    parser.add_argument("action", choices=("on", "off", "status"))
    parser.add_argument("--db", help="Flag database path (default: SITE_FLAG_DB_PATH)")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    registry = load_features().build(SqliteFlagStore(args.db))

    if args.action == "status":
        if registry.get_feature(args.feature_id) is None:
            print(f"unknown feature {args.feature_id}; known: {sorted(registry.get_all_ids())}")
            return 1
        print(f"{args.feature_id} enabled={registry.get_enabled(args.feature_id)}")
        return 0

    try:
        registry.set_enabled(args.feature_id, args.action == "on")
    except FeatureDoesNotExist:
        print(f"unknown feature {args.feature_id}; known: {sorted(registry.get_all_ids())}")
        return 1
    except FeatureFailure as e:
        print(f"{args.feature_id} rejected: {e.reason}")
        return 2

    print(f"{args.feature_id} enabled={registry.get_enabled(args.feature_id)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
