# tests/services/conftest.py
from __future__ import annotations
import pytest
from starlette.testclient import TestClient

from streambrain.services.api.app import create_app
from streambrain.services.api.deps import get_registry
from streambrain.services.streaming.registry import BrainRegistry


@pytest.fixture()
def api_registry(fake_probe, evaluator) -> BrainRegistry:
    return BrainRegistry(probe_factory=lambda: fake_probe, evaluator=evaluator, capacity=8)


@pytest.fixture()
def api_client(api_registry):
    """
    A TestClient whose `get_registry` dependency is overridden so every request
    in one test shares the same registry backed by the fake prober.
    """
    app = create_app()
    app.dependency_overrides[get_registry] = lambda: api_registry
    try:
        with TestClient(app) as client:
            yield client
    finally:
        app.dependency_overrides.clear()
