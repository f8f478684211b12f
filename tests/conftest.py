"""
Global pytest fixtures for the URL shortener test suite.

Responsibilities:
    - Provide a fresh FastAPI TestClient via the app factory for integration tests
    - Provide an isolated in-memory Storage fixture for direct testing
    - Provide a ShortenerManager fixture wired to the Storage fixture

Why an app factory?
    Using `create_app()` ensures each test gets fresh in-memory state,
    eliminating cross-test flakiness.
"""

import pytest
from fastapi.testclient import TestClient

from main import create_app
from url_shortener.manager.shortener_manager import ShortenerManager
from url_shortener.storage.storage import Storage


class SequenceStrategy:
    """
    Deterministic code strategy for tests: hands out `codes` in order.

    Used to force collisions; raises if a test asks for more codes than it planned.
    """

    def __init__(self, codes):
        self._codes = iter(codes)
        self.calls = 0

    def __call__(self, url: str, length: int) -> str:
        self.calls += 1
        return next(self._codes)


@pytest.fixture
def client() -> TestClient:
    """
    Provide a fresh TestClient with a new app instance.

    Redirects are never followed automatically, so tests can assert on the
    301 hop itself.
    """
    app = create_app()
    return TestClient(app, follow_redirects=False)


@pytest.fixture
def storage() -> Storage:
    """Provide a fresh in-memory Storage backend."""
    return Storage()


@pytest.fixture
def manager(storage: Storage) -> ShortenerManager:
    """Provide a ShortenerManager wired to the storage fixture."""
    return ShortenerManager(storage=storage)


@pytest.fixture
def sequence_strategy():
    """Factory fixture: `sequence_strategy(["aaaaaa", "bbbbbb"])`."""
    return SequenceStrategy
