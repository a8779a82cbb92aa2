"""Pytest configuration and fixtures shared by the API tests."""

import pytest
from fastapi.testclient import TestClient

from main import app


@pytest.fixture()
def client():
    """TestClient that leaves server errors as 500 responses."""
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def clear_overrides():
    """Make sure no engine override leaks between tests."""
    yield
    app.dependency_overrides.clear()
