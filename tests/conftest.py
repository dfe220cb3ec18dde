# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from proptrack.api.http import app
from proptrack.domain.settings import GlobalSettings


@pytest.fixture(scope="session")
def client():
    return TestClient(app)


@pytest.fixture
def usa():
    """Default USA bundle: 3.5% appreciation, 2.5% inflation, 6% selling, 25% CGT."""
    return GlobalSettings().active()
