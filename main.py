"""SITEFEATURES FILE PURPOSE
Purpose: FastAPI entrypoint.
Hot path: no (process-level startup only).
Feature flags: none.
Failure mode: fail fast on import errors.
"""

from sitefeatures.app import create_app

app = create_app()
