"""Shared pytest fixtures for all test suites."""

from collections.abc import Callable

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from backend.app.config import Settings
from backend.app.db.inmemory import InMemoryEntityStore
from backend.app.main import create_app
from tests.fakes import FakeAIClient, FakeClock, FakeExtractor


@pytest.fixture
def clock() -> FakeClock:
    """Deterministic, strictly increasing clock."""
    return FakeClock()


@pytest.fixture
def store(clock: FakeClock) -> InMemoryEntityStore:
    """Fresh store with the default user seeded."""
    store = InMemoryEntityStore(clock=clock)
    store.seed("default", "password")
    return store


@pytest.fixture
def extractor() -> FakeExtractor:
    """Extractor returning the canned "A" article."""
    return FakeExtractor()


@pytest.fixture
def ai_client() -> FakeAIClient:
    """AI client returning canned results."""
    return FakeAIClient()


@pytest.fixture
def test_settings() -> Settings:
    """Settings isolated from the environment and any .env file."""
    return Settings(_env_file=None, openai_api_key=None)  # type: ignore[call-arg]


@pytest.fixture
def app_factory(
    test_settings: Settings,
    store: InMemoryEntityStore,
    extractor: FakeExtractor,
    ai_client: FakeAIClient,
) -> Callable[..., FastAPI]:
    """Build an app, overriding any collaborator by keyword."""

    def build(**overrides: object) -> FastAPI:
        kwargs: dict[str, object] = {
            "store": store,
            "extractor": extractor,
            "ai_client": ai_client,
        }
        kwargs.update(overrides)
        return create_app(test_settings, **kwargs)  # type: ignore[arg-type]

    return build


@pytest.fixture
def client(app_factory: Callable[..., FastAPI]) -> TestClient:
    """Create test client."""
    return TestClient(app_factory())
