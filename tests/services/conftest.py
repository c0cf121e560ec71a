# tests/services/conftest.py
from __future__ import annotations

import pytest
from starlette.testclient import TestClient

from hexprobe.services.api.app import create_app
from hexprobe.services.api.deps import get_engine
from hexprobe.services.engine import MediaEngine


class _NullPlayer:
    backend = "test-null"

    def available(self):
        return True

    def open(self, path):
        pass


@pytest.fixture()
def api_engine():
    return MediaEngine(player=_NullPlayer())


@pytest.fixture()
def api_client(api_engine):
    """
    A TestClient whose `get_engine` dependency is overridden so every request
    in one test shares a fresh MediaEngine that never launches a real player.
    """
    app = create_app()
    app.dependency_overrides[get_engine] = lambda: api_engine
    try:
        with TestClient(app) as client:
            yield client
    finally:
        app.dependency_overrides.clear()
