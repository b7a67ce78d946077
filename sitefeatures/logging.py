"""SITEFEATURES FILE PURPOSE
Purpose: logging setup with strict debug gating.
Hot path: yes (registry toggles log on every transition; default is quiet).
Loggers: sitefeatures (host), sitefeatures.registry (builder + toggles).
Feature flags: SITE_DEBUG.
Failure mode: never crash due to logging.
"""

from __future__ import annotations

import logging

from sitefeatures.config import is_debug


def _configure() -> logging.Logger:
    logger = logging.getLogger("sitefeatures")
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    fmt = "%(asctime)s %(levelname)s %(name)s %(message)s"
    handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)
    logger.setLevel(logging.INFO if is_debug() else logging.WARNING)
    return logger


logger = _configure()

# lifecycle transitions and registration collisions; filterable on their own
registry_logger = logger.getChild("registry")
