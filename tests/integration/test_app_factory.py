"""Integration tests for application wiring in create_app."""

from pydantic import SecretStr

from backend.app.config import Settings
from backend.app.db.inmemory import InMemoryEntityStore
from backend.app.llm.client import DeterministicStubClient, OpenAIClient
from backend.app.main import create_app
from tests.fakes import FakeExtractor


def test_create_app_builds_openai_client_from_given_settings() -> None:
    """Test that the AI client is configured from the settings passed in."""
    settings = Settings(  # type: ignore[call-arg]
        _env_file=None,
        openai_api_key=SecretStr("sk-test"),
        openai_model="gpt-x",
        ai_timeout_seconds=7.5,
        summary_max_chars=500,
    )

    app = create_app(settings, store=InMemoryEntityStore(), extractor=FakeExtractor())

    client = app.state.ai_client
    assert isinstance(client, OpenAIClient)
    assert client.model == "gpt-x"
    assert client.timeout_seconds == 7.5
    assert client.summary_max_chars == 500


def test_create_app_uses_stub_without_api_key(test_settings: Settings) -> None:
    """Test that settings without a key yield the deterministic stub."""
    app = create_app(test_settings, store=InMemoryEntityStore(), extractor=FakeExtractor())

    assert isinstance(app.state.ai_client, DeterministicStubClient)
