"""
Shared test configuration.

Clears GAIA_MAX_SESSIONS for the test session so a developer's .env
cannot cap the number of sessions the API tests create.
"""

import os

import pytest


@pytest.fixture(autouse=True, scope="session")
def _isolate_env():
    """Drop session-cap overrides picked up from the environment."""
    saved = os.environ.pop("GAIA_MAX_SESSIONS", None)
    yield
    if saved is not None:
        os.environ["GAIA_MAX_SESSIONS"] = saved
